"""Optional tracing of combinator outcomes.

A trace hook is any callable taking a TraceEvent. It travels on the State, so
every combinator of a parse sees the same hook. Hooks only observe: whatever
they do, parse results stay the same.

To see every step of a parse in the log::

    import logging
    logging.basicConfig(level=logging.DEBUG)

    import parsecore.Trace
    parsecore.Trace.debug = True
"""
import logging
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from .Parsec import Failure, Result, State, Success, T

log = logging.getLogger("parsecore")

# When True, parse() and run_parser() fall back to log_trace if no hook is given
debug = False

TraceHook = Callable[['TraceEvent'], None]


@dataclass(frozen=True)
class TraceEvent:
    combinator: str
    start: State
    result: Result

    @property
    def ok(self) -> bool:
        return self.result.ok


def log_trace(event: TraceEvent) -> None:
    """Stock hook: one DEBUG record per combinator outcome."""
    if event.ok:
        log.debug("%s ok at %s -> index %d", event.combinator, event.start, event.result.state.index)
    else:
        log.debug("%s failed at %s: %s (deepest index %d)", event.combinator, event.start,
                  event.result.message, event.result.index)


def collect_trace() -> Tuple[List[TraceEvent], TraceHook]:
    """Return a list and a hook that appends every event to it."""
    events: List[TraceEvent] = []
    return events, events.append


def default_hook(trace: Optional[TraceHook]) -> Optional[TraceHook]:
    if trace is None and debug:
        return log_trace
    return trace


def log_ok(combinator: str, input: State, success: Success[T]) -> Success[T]:
    if input.trace is not None:
        input.trace(TraceEvent(combinator, input, success))
    return success


def log_err(combinator: str, input: State, failure: Failure) -> Failure:
    if input.trace is not None:
        input.trace(TraceEvent(combinator, input, failure))
    return failure
