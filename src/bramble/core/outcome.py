"""
Outcome of a single example.

Test functions may signal their result in several ways. `invoke` runs a
test function inside a fault-catching region and `normalize` maps its
return value onto one three-way Outcome:

- None, True, Ok(...)       -> PASSED
- False, Err(...)           -> FAILED
- raised AssertionError     -> FAILED
- any other raised Exception -> ERRORED
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import logging as _logging
import traceback as _traceback
import typing as _typing

_logger = _logging.getLogger(__name__)

FALSE_REASON = "assertion failed: expected condition to be true"


@_dataclasses.dataclass(frozen=True)
class Ok:
    """Success-carrying result a test function may return."""

    value: _typing.Any = None


@_dataclasses.dataclass(frozen=True)
class Err:
    """Error-carrying result a test function may return."""

    error: _typing.Any = None


class OutcomeStatus(_enum.Enum):
    """Normalized status of one example."""

    PASSED = "passed"
    FAILED = "failed"
    ERRORED = "errored"


@_dataclasses.dataclass(frozen=True)
class Outcome:
    """
    Normalized result of running one test function.

    Attributes:
        status: PASSED, FAILED or ERRORED.
        reason: Human-readable failure reason (None when passed).
        exception: The exception caught while running, if any.
        traceback: Formatted traceback for ERRORED outcomes.
    """

    status: OutcomeStatus
    reason: str | None = None
    exception: BaseException | None = _dataclasses.field(default=None, compare=False)
    traceback: str | None = _dataclasses.field(default=None, compare=False)

    @classmethod
    def passed(cls) -> Outcome:
        return cls(OutcomeStatus.PASSED)

    @classmethod
    def failed(cls, reason: str | None = None) -> Outcome:
        return cls(OutcomeStatus.FAILED, reason=reason)

    @classmethod
    def errored(cls, exc: BaseException) -> Outcome:
        """Create an ERRORED outcome from a caught exception."""
        return cls(
            OutcomeStatus.ERRORED,
            reason=describe_exception(exc),
            exception=exc,
            traceback="".join(_traceback.format_exception(exc)),
        )

    @property
    def is_success(self) -> bool:
        return self.status is OutcomeStatus.PASSED

    @property
    def is_failure(self) -> bool:
        return self.status is not OutcomeStatus.PASSED

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to JSON-serializable dict."""
        result: dict[str, _typing.Any] = {"status": self.status.value}
        if self.reason is not None:
            result["reason"] = self.reason
        if self.exception is not None:
            result["exception_type"] = type(self.exception).__name__
        return result


def describe_exception(exc: BaseException) -> str:
    """Render an exception as `Type: message` (or just `Type`)."""
    message = str(exc)
    if message:
        return f"{type(exc).__name__}: {message}"
    return type(exc).__name__


def normalize(value: object) -> Outcome:
    """Map a test function's return value onto an Outcome."""
    if value is None or value is True:
        return Outcome.passed()
    if value is False:
        return Outcome.failed(FALSE_REASON)
    if isinstance(value, Ok):
        return Outcome.passed()
    if isinstance(value, Err):
        return Outcome.failed(_describe_error(value.error))

    _logger.warning(
        "Test function returned unsupported value of type %s; treating as failure",
        type(value).__name__,
    )
    return Outcome.failed(f"unsupported return value: {value!r}")


def _describe_error(error: object) -> str:
    if isinstance(error, BaseException):
        return describe_exception(error)
    if isinstance(error, str):
        return error
    return repr(error)


def invoke(function: _typing.Callable[[_typing.Any], object], environment: _typing.Any) -> Outcome:
    """
    Run a test function and normalize what it did.

    Exceptions are captured into the Outcome rather than propagated.
    BaseExceptions that are not Exceptions (KeyboardInterrupt,
    SystemExit) still propagate.
    """
    try:
        value = function(environment)
    except AssertionError as e:
        message = str(e)
        return Outcome(
            OutcomeStatus.FAILED,
            reason=message or "assertion failed",
            exception=e,
            traceback="".join(_traceback.format_exception(e)),
        )
    except Exception as e:
        return Outcome.errored(e)
    return normalize(value)
