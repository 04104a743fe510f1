# Core
from .Parsec import Parser, State, Success, Failure, Result, GrammarError, ForwardRef, EOT
from .Prim import (
    pure, fail, then, skip_then, sequence, or_, alternative,
    optional, tag, forward_ref, parse, run_parser
)

# Repetition and operator chains
from .Combinators import repeat0, repeat1, list_of, chain_suffix, chainl1, chainr1

# Characters
from .Char import satisfy, text, integer, spaces, space0, eot, everything

# Tracing
from .Trace import TraceEvent, TraceHook, log_trace, collect_trace
