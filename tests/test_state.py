import dataclasses

import pytest
from hypothesis import given
from hypothesis import strategies as st

from parsecore.Parsec import EOT, GrammarError, State


def test_start_appends_sentinel():
    state = State.start("ab", "test")
    assert state.text == "ab" + EOT
    assert state.index == 0
    assert state.line == 1
    assert state.source == "test"
    assert state.current == "a"
    assert not state.at_end


def test_empty_input_is_at_end():
    state = State.start("")
    assert state.at_end
    assert state.current == EOT


def test_advance_returns_new_state():
    state = State.start("abc")
    moved = state.advance(2)
    assert moved.index == 2
    assert moved.current == "c"
    # The original is untouched
    assert state.index == 0


def test_state_is_immutable():
    state = State.start("abc")
    with pytest.raises(dataclasses.FrozenInstanceError):
        state.index = 1


def test_advance_past_sentinel_is_a_grammar_error():
    state = State.start("ab")
    assert state.advance(2).at_end
    with pytest.raises(GrammarError):
        state.advance(3)


def test_line_counting_newline_kinds():
    assert State.start("a\nb").advance(2).line == 2
    assert State.start("a\r\nb").advance(3).line == 2
    assert State.start("a\rb").advance(2).line == 1


def test_line_not_bumped_before_newline_consumed():
    state = State.start("a\nb").advance(1)
    assert state.current == "\n"
    assert state.line == 1


@given(st.text())
def test_line_is_one_plus_newlines_passed(text):
    state = State.start(text).advance(len(text))
    assert state.at_end
    assert state.line == 1 + text.count("\n")


@given(st.text(), st.data())
def test_stepwise_advance_matches_bulk(text, data):
    split = data.draw(st.integers(min_value=0, max_value=len(text)))
    start = State.start(text)
    assert start.advance(split).advance(len(text) - split) == start.advance(len(text))


def test_trace_ignored_by_equality():
    assert State.start("a", trace=print) == State.start("a")
