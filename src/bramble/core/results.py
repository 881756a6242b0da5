"""
Result tree produced by a run.

The result tree mirrors the built node tree. Example results carry their
own Outcome; context and suite results aggregate their children.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import typing as _typing

import bramble.core.headers as headers
import bramble.core.outcome as outcome

if _typing.TYPE_CHECKING:
    import bramble.core.scheduler as scheduler


class Status(_enum.Enum):
    """Status of any node in the result tree."""

    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"
    ABORTED = "aborted"
    SKIPPED = "skipped"


_OUTCOME_STATUS = {
    outcome.OutcomeStatus.PASSED: Status.PASSED,
    outcome.OutcomeStatus.FAILED: Status.FAILED,
    outcome.OutcomeStatus.ERRORED: Status.ERRORED,
}


@_dataclasses.dataclass(frozen=True)
class ExampleResult:
    """
    Result of one example.

    Attributes:
        header: Header of the example.
        outcome: Normalized outcome, or None if the example was never
            entered because its context aborted.
        duration: Wall-clock seconds spent in the test function.
    """

    header: headers.ExampleHeader
    outcome: outcome.Outcome | None
    duration: float = _dataclasses.field(default=0.0, compare=False)

    @classmethod
    def skipped(cls, header: headers.ExampleHeader) -> ExampleResult:
        return cls(header=header, outcome=None)

    @property
    def name(self) -> str:
        return self.header.name

    @property
    def status(self) -> Status:
        if self.outcome is None:
            return Status.SKIPPED
        return _OUTCOME_STATUS[self.outcome.status]

    @property
    def is_success(self) -> bool:
        return self.status is Status.PASSED

    @property
    def is_failure(self) -> bool:
        return self.status in (Status.FAILED, Status.ERRORED)

    @property
    def passed(self) -> int:
        return int(self.status is Status.PASSED)

    @property
    def failed(self) -> int:
        return int(self.status is Status.FAILED)

    @property
    def errored(self) -> int:
        return int(self.status is Status.ERRORED)

    @property
    def skipped_count(self) -> int:
        return int(self.status is Status.SKIPPED)

    def iter_examples(self) -> _typing.Iterator[ExampleResult]:
        yield self

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to JSON-serializable dict."""
        result: dict[str, _typing.Any] = {
            "type": "example",
            "label": self.header.label.value,
            "name": self.header.name,
            "status": self.status.value,
            "duration": self.duration,
        }
        if self.outcome is not None and self.outcome.reason is not None:
            result["reason"] = self.outcome.reason
        return result


@_dataclasses.dataclass(frozen=True)
class ContextResult:
    """
    Aggregated result of a context.

    Attributes:
        header: Header of the context, None for anonymous contexts.
        children: Child results in declaration order.
        duration: Wall-clock seconds from before-all to after-all.
        hook_error: The first hook failure raised by this context's own
            hooks, if any.
        aborted: True when a before-all/before-each hook failed and the
            remaining schedule was skipped.
        skipped: True when the context was never entered because its
            parent aborted.
    """

    header: headers.ContextHeader | None
    children: tuple[ContextResult | ExampleResult, ...] = ()
    duration: float = _dataclasses.field(default=0.0, compare=False)
    hook_error: scheduler.HookFailure | None = _dataclasses.field(default=None, compare=False)
    aborted: bool = False
    skipped: bool = False

    @property
    def name(self) -> str | None:
        return self.header.name if self.header else None

    @property
    def status(self) -> Status:
        if self.skipped:
            return Status.SKIPPED
        if self.aborted:
            return Status.ABORTED
        if self.hook_error is not None:
            return Status.ERRORED
        if any(child.is_failure for child in self.children):
            return Status.FAILED
        return Status.PASSED

    @property
    def is_success(self) -> bool:
        return self.status is Status.PASSED

    @property
    def is_failure(self) -> bool:
        return self.status in (Status.FAILED, Status.ERRORED, Status.ABORTED)

    @property
    def passed(self) -> int:
        return sum(child.passed for child in self.children)

    @property
    def failed(self) -> int:
        return sum(child.failed for child in self.children)

    @property
    def errored(self) -> int:
        return sum(child.errored for child in self.children)

    @property
    def skipped_count(self) -> int:
        return sum(child.skipped_count for child in self.children)

    def iter_examples(self) -> _typing.Iterator[ExampleResult]:
        """Yield every example result in this subtree, depth first."""
        for child in self.children:
            yield from child.iter_examples()

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to JSON-serializable dict."""
        result: dict[str, _typing.Any] = {
            "type": "context",
            "label": self.header.label.value if self.header else None,
            "name": self.name,
            "status": self.status.value,
            "duration": self.duration,
            "children": [child.to_dict() for child in self.children],
        }
        if self.hook_error is not None:
            result["hook_error"] = self.hook_error.to_dict()
        return result


@_dataclasses.dataclass(frozen=True)
class SuiteResult:
    """Result of a whole suite run."""

    header: headers.SuiteHeader
    context: ContextResult
    duration: float = _dataclasses.field(default=0.0, compare=False)

    @property
    def name(self) -> str:
        return self.header.name

    @property
    def status(self) -> Status:
        return Status.PASSED if self.context.is_success else Status.FAILED

    @property
    def is_success(self) -> bool:
        return self.context.is_success

    @property
    def is_failure(self) -> bool:
        return self.context.is_failure

    @property
    def passed(self) -> int:
        return self.context.passed

    @property
    def failed(self) -> int:
        return self.context.failed

    @property
    def errored(self) -> int:
        return self.context.errored

    @property
    def skipped_count(self) -> int:
        return self.context.skipped_count

    @property
    def total(self) -> int:
        return self.passed + self.failed + self.errored + self.skipped_count

    def iter_examples(self) -> _typing.Iterator[ExampleResult]:
        return self.context.iter_examples()

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to JSON-serializable dict."""
        return {
            "type": "suite",
            "label": self.header.label.value,
            "name": self.header.name,
            "status": self.status.value,
            "duration": self.duration,
            "passed": self.passed,
            "failed": self.failed,
            "errored": self.errored,
            "skipped": self.skipped_count,
            "context": self.context.to_dict(),
        }


BlockResult = ContextResult | ExampleResult
