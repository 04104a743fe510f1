from typing import Any, Callable, Optional

from .Parsec import Parser, State, Success, Failure, Result, T
from .Prim import pure, then, skip_then, sequence
from .Combinators import repeat0
from .Trace import log_ok, log_err

DIGITS = "0123456789"


# Core function: Succeeds if the character satisfies a predicate
def satisfy(f: Callable[[str], bool], label: str) -> Parser[str]:
    """Parses one character for which f returns True. Fails with `label` otherwise."""
    def parse(state: State) -> Result[str]:
        if not state.at_end and f(state.current):
            return log_ok("satisfy", state, Success(state.current, state.advance()))
        return log_err("satisfy", state, Failure(label, state, state))
    return Parser(parse, f"satisfy({label})")

# 1. text: Parses a literal string
def text(s: str) -> Parser[str]:
    """Parses the exact string s and returns it."""
    label = f"'{s}'"

    def parse(state: State) -> Result[str]:
        end = state.index + len(s)
        if end < len(state.text) and state.text.startswith(s, state.index):
            return log_ok("text", state, Success(s, state.advance(len(s))))
        return log_err("text", state, Failure(label, state, state))
    return Parser(parse, f"text({label})")

# 2. integer: Parses an optionally signed decimal integer
def integer() -> Parser[int]:
    """
    Parses [+-]?[0-9]+ and returns it as an int.
    A sign without digits fails just after the sign.
    """
    def parse(state: State) -> Result[int]:
        i = state.index
        if state.text[i] in "+-":
            i += 1
        start = i
        while state.text[i] in DIGITS:
            i += 1
        if i == start:
            return log_err("integer", state, Failure("digits", state.advance(start - state.index), state))
        return log_ok("integer", state,
                      Success(int(state.text[state.index:i]), state.advance(i - state.index)))
    return Parser(parse, "integer")

# 3. spaces: Skips zero or more whitespace characters
def spaces() -> Parser[None]:
    """Skips zero or more whitespace characters."""
    return repeat0(satisfy(str.isspace, "whitespace")).map(lambda _: None)

# 4. space0: Parses p, then skips trailing whitespace
def space0(p: Parser[T]) -> Parser[T]:
    """Parses p followed by optional whitespace and returns p's value."""
    skip = spaces()
    return then(p, lambda value: skip_then(skip, pure(value)))

# 5. eot: Succeeds only at the end of the input
def eot() -> Parser[None]:
    """Succeeds, without consuming anything, only at the end of the input."""
    def parse(state: State) -> Result[None]:
        if state.at_end:
            return log_ok("eot", state, Success(None, state))
        return log_err("eot", state, Failure("EOT", state, state))
    return Parser(parse, "eot")

# 6. everything: Parses the whole input
def everything(p: Parser[T], space: Optional[Parser[Any]] = None) -> Parser[T]:
    """
    Parses leading whitespace, then p, then the end of the input.
    `space` replaces the default whitespace skipper.
    """
    if space is None:
        space = spaces()
    return sequence(space, p, eot(), combine=lambda _leading, value, _end: value)
