from dataclasses import replace
from typing import Any, Callable, List, Optional, Sequence, Tuple

from .Parsec import Parser, ForwardRef, State, Success, Failure, Result, GrammarError, T, U
from .Trace import TraceHook, default_hook, log_ok, log_err


def pure(value: T) -> Parser[T]:
    """Return a parser that succeeds with a value without consuming input."""
    def parse(state: State) -> Result[T]:
        return log_ok("pure", state, Success(value, state))
    return Parser(parse, "pure")

def fail(msg: str) -> Parser[Any]:
    """A parser that always fails with a message."""
    def parse(state: State) -> Result[Any]:
        return log_err("fail", state, Failure(msg, state, state))
    return Parser(parse, "fail")

def then(parser: Parser[T], f: Callable[[T], Parser[U]]) -> Parser[U]:
    """Run `parser`, then the parser `f` builds from its value.

    If `parser` fails, `f` is never called. A failure of the second parser
    keeps its deepest position but is reported as starting at our input.
    """
    def parse(state: State) -> Result[U]:
        res = parser(state)
        if not res.ok:
            return log_err("then", state, res)
        res2 = f(res.value)(res.state)
        if not res2.ok:
            return log_err("then", state, replace(res2, old_state=state))
        return log_ok("then", state, res2)
    return Parser(parse, "then")

def skip_then(parser1: Parser[Any], parser2: Parser[U]) -> Parser[U]:
    """Run `parser1`, discard its value, then run `parser2`."""
    def parse(state: State) -> Result[U]:
        res = parser1(state)
        if not res.ok:
            return log_err("skip_then", state, res)
        res2 = parser2(res.state)
        if not res2.ok:
            return log_err("skip_then", state, replace(res2, old_state=state))
        return log_ok("skip_then", state, res2)
    return Parser(parse, "skip_then")

def sequence(*parsers: Parser[Any], combine: Callable[..., T]) -> Parser[T]:
    """sequence(p0, p1, ..., combine=f) := p0 p1 ...

    On success `combine` is called with one value per parser.
    """
    if not parsers:
        raise GrammarError("sequence needs at least one parser")

    def chain(i: int, values: Tuple[Any, ...]) -> Parser[T]:
        if i == len(parsers):
            return pure(combine(*values))
        return then(parsers[i], lambda value: chain(i + 1, values + (value,)))

    def parse(state: State) -> Result[T]:
        res = chain(0, ())(state)
        if res.ok:
            return log_ok("sequence", state, res)
        return log_err("sequence", state, res)
    return Parser(parse, "sequence")

def or_(parser1: Parser[T], parser2: Parser[T]) -> Parser[T]:
    """Try `parser1`, and if that fails, `parser2` on the same input.

    When both fail the one that got further wins; equally deep failures are
    merged into "m1 or m2".
    """
    def parse(state: State) -> Result[T]:
        res1 = parser1(state)
        if res1.ok:
            return log_ok("or", state, res1)
        res2 = parser2(state)
        if res2.ok:
            return log_ok("or", state, res2)
        if res1.index > res2.index:
            return log_err("or", state, res1)
        if res1.index < res2.index:
            return log_err("or", state, res2)
        return log_err("or", state, replace(res2, message=f"{res1.message} or {res2.message}"))
    return Parser(parse, "or")

def alternative(parsers: Sequence[Parser[T]]) -> Parser[T]:
    """alternative := p0 | p1 | ...

    Returns the first success. If every parser fails, the messages of the
    failures that got furthest are joined with " or ".
    """
    parsers = list(parsers)
    if not parsers:
        raise GrammarError("alternative needs at least one parser")

    def parse(state: State) -> Result[T]:
        messages: List[str] = []
        deepest = state
        for p in parsers:
            res = p(state)
            if res.ok:
                return log_ok("alternative", state, res)
            if res.index > deepest.index:
                messages = [res.message]
                deepest = res.at_state
            elif res.index == deepest.index:
                messages.append(res.message)
        return log_err("alternative", state, Failure(" or ".join(messages), deepest, state))
    return Parser(parse, "alternative")

def optional(parser: Parser[T], missing: T) -> Parser[T]:
    """optional := p?

    Never fails: on failure `missing` is returned and no input is consumed,
    however far `parser` got.
    """
    def parse(state: State) -> Result[T]:
        res = parser(state)
        if res.ok:
            return res
        return log_ok("optional", state, Success(missing, state))
    return Parser(parse, "optional")

def tag(parser: Parser[T], label: str) -> Parser[T]:
    """Use `label` as the error message if `parser` fails without getting anywhere."""
    def parse(state: State) -> Result[T]:
        res = parser(state)
        if res.ok:
            return res
        if res.index == state.index:
            return log_err("tag", state, replace(res, message=label))
        # A failure after some progress says more than the label would
        return log_err("tag", state, res)
    return Parser(parse, f"tag({label})")

def forward_ref(cell: ForwardRef[T]) -> Parser[T]:
    """Parse with whatever parser `cell` holds at call time."""
    def parse(state: State) -> Result[T]:
        return cell.parser(state)
    return Parser(parse, cell.name)

def parse(parser: Parser[T], source_id: str, text: str, trace: Optional[TraceHook] = None) -> Result[T]:
    """Run `parser` over `text`. Failure messages come back as "Expected ..."."""
    initial_state = State.start(text, source_id, default_hook(trace))
    res = parser(initial_state)
    if res.ok:
        return res
    return replace(res, message=f"Expected {res.message}")

def run_parser(parser: Parser[T],
               input_str: str,
               source_name: str = "",
               trace: Optional[TraceHook] = None) -> Tuple[Optional[T], Optional[Failure]]:
    res = parse(parser, source_name, input_str, trace)
    if res.ok:
        return res.value, None
    return None, res
