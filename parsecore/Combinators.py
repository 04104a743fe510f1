from typing import Any, Callable, List, Tuple

from .Parsec import Parser, State, Success, Failure, Result, GrammarError, T, U
from .Prim import pure, then, skip_then
from .Trace import log_ok, log_err


# 1. repeat0: zero or more occurrences
def repeat0(parser: Parser[T]) -> Parser[List[T]]:
    """
    repeat0 := p*

    Applies `parser` until it fails and returns the list of values. Never fails.
    Each success must consume input, otherwise GrammarError is raised instead
    of looping forever.
    """
    def parse(state: State) -> Result[List[T]]:
        values: List[T] = []
        current = state
        while True:
            res = parser(current)
            if not res.ok:
                break
            if res.state.index <= current.index:
                raise GrammarError(
                    f"repeat0: {parser.name} succeeded without consuming input at {current}")
            values.append(res.value)
            current = res.state
        return log_ok("repeat0", state, Success(values, current))
    return Parser(parse, "repeat0")

# 2. repeat1: one or more occurrences
def repeat1(parser: Parser[T], err_message: str) -> Parser[List[T]]:
    """
    repeat1 := p+

    Like repeat0, but fails with `err_message` at the start if nothing matched.
    """
    many = repeat0(parser)

    def parse(state: State) -> Result[List[T]]:
        res = many(state)
        if res.state.index > state.index:
            return log_ok("repeat1", state, res)
        return log_err("repeat1", state, Failure(err_message, res.state, state))
    return Parser(parse, "repeat1")

# 3. list_of: one or more occurrences separated by `sep`
def list_of(parser: Parser[T], sep: Parser[Any]) -> Parser[List[T]]:
    """
    list_of := p (sep p)*

    Returns the values of `parser`; separator values are dropped. Only fails
    if the first `parser` fails.
    """
    rest = repeat0(skip_then(sep, parser))

    def parse(state: State) -> Result[List[T]]:
        first = parser(state)
        if not first.ok:
            return log_err("list_of", state, first)
        res = rest(first.state)
        return log_ok("list_of", state, Success([first.value] + res.value, res.state))
    return Parser(parse, "list_of")

# 4. chain_suffix: the (op p)* tail shared by chainl1 and chainr1
def chain_suffix(parser: Parser[T], op: Parser[U]) -> Parser[List[Tuple[U, T]]]:
    """
    chain_suffix := (op p)*

    Returns the (operator, operand) pairs in input order.
    """
    pair = then(op, lambda operator: then(parser, lambda value: pure((operator, value))))
    return repeat0(pair)

# 5. chainl1: left-associative operator chain
def chainl1(parser: Parser[T], op: Parser[U], eval: Callable[[T, U, T], T]) -> Parser[T]:
    """
    chainl1 := p (op p)*

    `eval(lhs, operator, rhs)` is folded from the left: a-b-c is (a-b)-c.
    """
    suffix = chain_suffix(parser, op)

    def parse(state: State) -> Result[T]:
        first = parser(state)
        if not first.ok:
            return log_err("chainl1", state, first)
        res = suffix(first.state)
        value = first.value
        for operator, rhs in res.value:
            value = eval(value, operator, rhs)
        return log_ok("chainl1", state, Success(value, res.state))
    return Parser(parse, "chainl1")

# 6. chainr1: right-associative operator chain
def chainr1(parser: Parser[T], op: Parser[U], eval: Callable[[T, U, T], T]) -> Parser[T]:
    """
    chainr1 := p (op p)*

    `eval(lhs, operator, rhs)` is folded from the right: a^b^c is a^(b^c).
    """
    suffix = chain_suffix(parser, op)

    def parse(state: State) -> Result[T]:
        first = parser(state)
        if not first.ok:
            return log_err("chainr1", state, first)
        res = suffix(first.state)
        if not res.value:
            return log_ok("chainr1", state, Success(first.value, res.state))

        # e1 [(op1, e2), (op2, e3)] -> [(e1, op1), (e2, op2)] and seed e3
        operators = [operator for operator, _ in res.value]
        operands = [first.value] + [operand for _, operand in res.value]
        value = operands.pop()
        for lhs, operator in reversed(list(zip(operands, operators))):
            value = eval(lhs, operator, value)
        return log_ok("chainr1", state, Success(value, res.state))
    return Parser(parse, "chainr1")
