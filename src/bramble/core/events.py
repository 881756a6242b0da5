"""
Lifecycle events emitted by the runner.

Events for one branch are emitted in a total order on whichever worker
executes that branch. Events of different branches may interleave.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import typing as _typing

import bramble.core.headers as headers
import bramble.core.results as results


class EventKind(_enum.Enum):
    """Points in a run at which observers are notified."""

    ENTER_SUITE = "enter_suite"
    """The run started. Carries the suite header."""

    EXIT_SUITE = "exit_suite"
    """The run finished. Carries the SuiteResult."""

    ENTER_CONTEXT = "enter_context"
    """A named context is entered, before its before-all hooks."""

    EXIT_CONTEXT = "exit_context"
    """A named context finished, after its after-all hooks. Carries its aggregate."""

    ENTER_EXAMPLE = "enter_example"
    """An example is about to run, after its parent's before-each hooks."""

    EXAMPLE_FINISHED = "example_finished"
    """An example ran. Carries its ExampleResult."""


@_dataclasses.dataclass(frozen=True)
class RunEvent:
    """
    One lifecycle transition.

    Attributes:
        kind: What happened.
        header: Header of the node the event is about.
        result: The node's result for EXIT_* and EXAMPLE_FINISHED events.
    """

    kind: EventKind
    header: headers.Header
    result: results.SuiteResult | results.ContextResult | results.ExampleResult | None = None

    @property
    def name(self) -> str:
        return self.header.name

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to JSON-serializable dict."""
        data: dict[str, _typing.Any] = {
            "event": self.kind.value,
            "label": self.header.label.value,
            "name": self.header.name,
        }
        if self.result is not None:
            data["status"] = self.result.status.value
            data["duration"] = self.result.duration
            if isinstance(self.result, results.ExampleResult):
                outcome = self.result.outcome
                if outcome is not None and outcome.reason is not None:
                    data["reason"] = outcome.reason
            else:
                data["passed"] = self.result.passed
                data["failed"] = self.result.failed
                data["errored"] = self.result.errored
                data["skipped"] = self.result.skipped_count
        return data
