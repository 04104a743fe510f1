from hypothesis import given
from hypothesis import strategies as st

from parsecore.Parsec import EOT
from parsecore.Prim import run_parser
from parsecore.Char import satisfy, text, integer, spaces, space0, eot, everything


def run(parser, input_str):
    return run_parser(parser, input_str)


# --- satisfy / text ---


@given(st.characters(exclude_characters=EOT))
def test_satisfy_any_character(c):
    res, err = run(satisfy(lambda _: True, "any character"), c)
    assert res == c
    assert err is None


def test_satisfy_never_consumes_sentinel():
    res, err = run(satisfy(lambda _: True, "any character"), "")
    assert res is None
    assert err.message == "Expected any character"


def test_text():
    assert run(text("abc"), "abcd")[0] == "abc"

    res, err = run(text("abc"), "ab")
    assert res is None
    assert err.message == "Expected 'abc'"
    assert err.index == 0


@given(st.text(min_size=1).filter(lambda s: EOT not in s), st.text())
def test_text_prefix(literal, rest):
    res, err = run(text(literal), literal + rest)
    assert res == literal
    assert err is None


# --- integer ---


def test_integer():
    assert run(integer(), "123")[0] == 123
    assert run(integer(), "-42")[0] == -42
    assert run(integer(), "+7x")[0] == 7


@given(st.integers())
def test_integer_round_trip(n):
    assert run(integer(), str(n))[0] == n


def test_integer_sign_without_digits():
    res, err = run(integer(), "+")
    assert res is None
    assert err.message == "Expected digits"
    assert err.index == 1


def test_integer_no_digits():
    res, err = run(integer(), "x")
    assert res is None
    assert err.message == "Expected digits"
    assert err.index == 0


# --- whitespace ---


def test_spaces_tracks_lines(initial_state):
    res = spaces()(initial_state(" \t\nx"))
    assert res.ok
    assert res.value is None
    assert res.state.index == 3
    assert res.state.line == 2


def test_space0_keeps_value(initial_state):
    res = space0(text("a"))(initial_state("a  b"))
    assert res.value == "a"
    assert res.state.current == "b"


def test_space0_method():
    assert run(text("a").space0() >> text("b"), "a \n b")[0] == "b"


# --- eot / everything ---


def test_eot():
    assert run(eot(), "") == (None, None)

    res, err = run(eot(), "x")
    assert err.message == "Expected EOT"


def test_everything():
    p = everything(integer().space0())
    assert run(p, " 57   ")[0] == 57

    res, err = run(p, " 57   200")
    assert res is None
    assert err.message == "Expected EOT"
    assert err.index == 6


def test_everything_custom_space():
    p = text("b").everything(space=text("a").repeat0())
    assert run(p, "aaab")[0] == "b"
