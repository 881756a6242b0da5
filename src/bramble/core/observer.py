"""
Observers of a run's event stream.

Observers are called synchronously from whichever worker executes a
branch, so an observer attached to a parallel run must tolerate being
invoked from several threads at once.
"""

from __future__ import annotations

import abc as _abc
import threading as _threading
import typing as _typing

import bramble.core.events as events
import bramble.core.headers as headers
import bramble.core.results as results


class RunnerObserver(_abc.ABC):  # noqa: B024
    """
    Base class for run observers.

    Every lifecycle method is optional; the defaults do nothing. The
    runner calls `notify`, which dispatches to the method matching the
    event kind.
    """

    def notify(self, event: events.RunEvent) -> None:
        """Dispatch an event to the matching lifecycle method."""
        kind = event.kind
        if kind is events.EventKind.ENTER_SUITE:
            self.enter_suite(_typing.cast(headers.SuiteHeader, event.header))
        elif kind is events.EventKind.EXIT_SUITE:
            self.exit_suite(
                _typing.cast(headers.SuiteHeader, event.header),
                _typing.cast(results.SuiteResult, event.result),
            )
        elif kind is events.EventKind.ENTER_CONTEXT:
            self.enter_context(_typing.cast(headers.ContextHeader, event.header))
        elif kind is events.EventKind.EXIT_CONTEXT:
            self.exit_context(
                _typing.cast(headers.ContextHeader, event.header),
                _typing.cast(results.ContextResult, event.result),
            )
        elif kind is events.EventKind.ENTER_EXAMPLE:
            self.enter_example(_typing.cast(headers.ExampleHeader, event.header))
        elif kind is events.EventKind.EXAMPLE_FINISHED:
            self.exit_example(
                _typing.cast(headers.ExampleHeader, event.header),
                _typing.cast(results.ExampleResult, event.result),
            )

    def enter_suite(self, header: headers.SuiteHeader) -> None:  # noqa: B027
        """Called once when the run starts."""

    def exit_suite(  # noqa: B027
        self,
        header: headers.SuiteHeader,
        result: results.SuiteResult,
    ) -> None:
        """Called once when the run finished, with the full result tree."""

    def enter_context(self, header: headers.ContextHeader) -> None:  # noqa: B027
        """Called when a named context is entered."""

    def exit_context(  # noqa: B027
        self,
        header: headers.ContextHeader,
        result: results.ContextResult,
    ) -> None:
        """Called when a named context finished."""

    def enter_example(self, header: headers.ExampleHeader) -> None:  # noqa: B027
        """Called right before an example's test function runs."""

    def exit_example(  # noqa: B027
        self,
        header: headers.ExampleHeader,
        result: results.ExampleResult,
    ) -> None:
        """Called right after an example's test function returned."""


class RecordingObserver(RunnerObserver):
    """Observer that keeps every event it receives, in arrival order."""

    def __init__(self) -> None:
        self._lock = _threading.Lock()
        self._events: list[events.RunEvent] = []

    def notify(self, event: events.RunEvent) -> None:
        with self._lock:
            self._events.append(event)

    @property
    def events(self) -> list[events.RunEvent]:
        with self._lock:
            return list(self._events)

    def kinds(self) -> list[events.EventKind]:
        return [event.kind for event in self.events]

    def of_kind(self, kind: events.EventKind) -> list[events.RunEvent]:
        return [event for event in self.events if event.kind is kind]

    def clear(self) -> None:
        with self._lock:
            self._events.clear()


class CallbackObserver(RunnerObserver):
    """Observer forwarding every event to a callable."""

    def __init__(self, callback: _typing.Callable[[events.RunEvent], object]) -> None:
        self._callback = callback

    def notify(self, event: events.RunEvent) -> None:
        self._callback(event)
