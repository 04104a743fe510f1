from dataclasses import dataclass, field, replace
from typing import Any, Callable, Generic, List, Optional, Tuple, TypeVar, Union

T = TypeVar('T')  # Generic type for parser results
U = TypeVar('U')

# Appended to every input so lookahead at the end never indexes out of range
EOT = '\u0004'


class GrammarError(AssertionError):
    """Raised for malformed grammar definitions, never for malformed input."""


@dataclass(frozen=True)
class State:
    """Immutable parser state: input text, offset, line and source name."""
    text: str
    index: int = 0
    line: int = 1
    source: str = ""
    trace: Optional[Callable[..., None]] = field(default=None, compare=False, repr=False)

    @classmethod
    def start(cls, text: str, source: str = "", trace: Optional[Callable[..., None]] = None) -> 'State':
        return cls(text + EOT, 0, 1, source, trace)

    @property
    def current(self) -> str:
        return self.text[self.index]

    @property
    def at_end(self) -> bool:
        return self.index >= len(self.text) - 1

    def advance(self, count: int = 1) -> 'State':
        """Move `count` characters forward; every '\\n' passed bumps the line."""
        new_index = self.index + count
        if count < 0 or new_index > len(self.text) - 1:
            raise GrammarError(f"cannot advance {count} characters from index {self.index}")
        return replace(self, index=new_index,
                       line=self.line + self.text.count('\n', self.index, new_index))

    def __str__(self) -> str:
        return f"{self.source} line {self.line}, index {self.index}"


@dataclass(frozen=True)
class Success(Generic[T]):
    value: T
    state: State

    ok = True


@dataclass(frozen=True)
class Failure:
    """A parse failure. `at_state` is the deepest point reached and is authoritative."""
    message: str
    at_state: State
    old_state: State

    ok = False

    @property
    def index(self) -> int:
        return self.at_state.index

    @property
    def line(self) -> int:
        return self.at_state.line

    def __str__(self) -> str:
        return f"{self.at_state.source} line {self.line}: {self.message}"


Result = Union[Success[T], Failure]
# Success(value, state) or Failure(message, at_state, old_state)


class Parser(Generic[T]):
    """A parser: a pure function from State to Result, plus chaining sugar.

    Every method delegates to the free function of the same name in
    Prim, Combinators or Char.
    """
    def __init__(self, parse_fn: Callable[[State], Result[T]], name: str = "parser"):
        self.parse_fn = parse_fn
        self.name = name

    def __call__(self, state: State) -> Result[T]:
        return self.parse_fn(state)

    def __repr__(self) -> str:
        return f"<Parser {self.name}>"

    # Sequencing
    def then(self, f: Callable[[T], 'Parser[U]']) -> 'Parser[U]':
        from .Prim import then
        return then(self, f)

    def skip_then(self, other: 'Parser[U]') -> 'Parser[U]':
        from .Prim import skip_then
        return skip_then(self, other)

    def map(self, f: Callable[[T], U]) -> 'Parser[U]':
        from .Prim import then, pure
        return then(self, lambda value: pure(f(value)))

    # Alternation
    def or_(self, other: 'Parser[T]') -> 'Parser[T]':
        from .Prim import or_
        return or_(self, other)

    def optional(self, missing: T) -> 'Parser[T]':
        from .Prim import optional
        return optional(self, missing)

    # Repetition
    def repeat0(self) -> 'Parser[List[T]]':
        from .Combinators import repeat0
        return repeat0(self)

    def repeat1(self, err_message: str) -> 'Parser[List[T]]':
        from .Combinators import repeat1
        return repeat1(self, err_message)

    def list_of(self, sep: 'Parser[Any]') -> 'Parser[List[T]]':
        from .Combinators import list_of
        return list_of(self, sep)

    # Operator chains
    def chain_suffix(self, op: 'Parser[U]') -> 'Parser[List[Tuple[U, T]]]':
        from .Combinators import chain_suffix
        return chain_suffix(self, op)

    def chainl1(self, op: 'Parser[U]', eval: Callable[[T, U, T], T]) -> 'Parser[T]':
        from .Combinators import chainl1
        return chainl1(self, op, eval)

    def chainr1(self, op: 'Parser[U]', eval: Callable[[T, U, T], T]) -> 'Parser[T]':
        from .Combinators import chainr1
        return chainr1(self, op, eval)

    # Diagnostics and lexing
    def tag(self, label: str) -> 'Parser[T]':
        from .Prim import tag
        return tag(self, label)

    def space0(self) -> 'Parser[T]':
        from .Char import space0
        return space0(self)

    def everything(self, space: Optional['Parser[Any]'] = None) -> 'Parser[T]':
        from .Char import everything
        return everything(self, space)

    def parse(self, source_id: str, text: str, trace: Optional[Callable[..., None]] = None) -> Result[T]:
        from .Prim import parse
        return parse(self, source_id, text, trace)

    # (|) and (>>)
    def __or__(self, other: 'Parser[T]') -> 'Parser[T]':
        return self.or_(other)

    def __rshift__(self, other: 'Parser[U]') -> 'Parser[U]':
        return self.skip_then(other)


class ForwardRef(Generic[T]):
    """Write-once slot closing a cycle in a grammar.

    Create the cell, build the recursive rule with forward_ref(cell), then
    resolve the cell with the finished rule before the first parse.
    """
    def __init__(self, name: str = "forward_ref"):
        self.name = name
        self._parser: Optional[Parser[T]] = None

    @property
    def resolved(self) -> bool:
        return self._parser is not None

    @property
    def parser(self) -> Parser[T]:
        if self._parser is None:
            raise GrammarError(f"{self.name} used before it was resolved")
        return self._parser

    def resolve(self, parser: Parser[T]) -> None:
        if self._parser is not None:
            raise GrammarError(f"{self.name} is already resolved")
        self._parser = parser
