# tests/conftest.py
import pytest

from parsecore.Parsec import State


@pytest.fixture
def initial_state():
    def _make(input_data, source="test"):
        return State.start(input_data, source)

    return _make
