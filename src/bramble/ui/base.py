"""
Base class for console reporters.

Implements the layered reporting system:
- Layer 1: PlainTextReporter - Just strings, fully testable
- Layer 2: JSONReporter - Structured output, machine-readable
- Layer 3: RichConsoleReporter - Colors and formatting

Console reporters share one tree layout:

    tests:

    Describe "calculator"
      Context "math"
        It "adds" ... ok
        It "subtracts" ... FAILED

    failures:
    ...

    duration: 0.004s.

    test result: FAILED. 1 passed; 1 failed; 0 errored; 0 skipped

Subclasses only decide how a (text, style) pair is written.
"""

from __future__ import annotations

import abc as _abc
import threading as _threading

import bramble.core.headers as headers
import bramble.core.observer as observer
import bramble.core.results as results

STATUS_FLAGS: dict[results.Status, str] = {
    results.Status.PASSED: "ok",
    results.Status.FAILED: "FAILED",
    results.Status.ERRORED: "ERROR",
    results.Status.ABORTED: "ABORTED",
    results.Status.SKIPPED: "skipped",
}

STATUS_STYLES: dict[results.Status, str] = {
    results.Status.PASSED: "green",
    results.Status.FAILED: "red",
    results.Status.ERRORED: "bold red",
    results.Status.ABORTED: "bold red",
    results.Status.SKIPPED: "yellow",
}


def padding(depth: int) -> str:
    """Indentation for a tree depth."""
    return "  " * depth


def format_duration(seconds: float) -> str:
    """Format a duration as `S.mmms`, `Mm S.mmms` or `Hh Mm S.mmms`."""
    remainder = int(round(seconds * 1000))
    hours, remainder = divmod(remainder, 3_600_000)
    minutes, remainder = divmod(remainder, 60_000)
    secs, millis = divmod(remainder, 1000)
    if hours:
        return f"{hours}h {minutes}m {secs}.{millis:03d}s"
    if minutes:
        return f"{minutes}m {secs}.{millis:03d}s"
    return f"{secs}.{millis:03d}s"


class Reporter(observer.RunnerObserver):
    """
    Abstract console reporter.

    Observer methods may be called from several workers at once; every
    write of one event happens under a lock so lines are never torn.
    Tree depth is tracked as a single counter, which only matches the
    tree in serial runs. Wrap a reporter in a ReplayReporter for parallel
    runs.
    """

    def __init__(self) -> None:
        self._lock = _threading.RLock()
        self._level = 0

    @_abc.abstractmethod
    def _write(self, text: str, style: str | None = None) -> None:
        """Write text (no implicit newline), optionally styled."""
        ...

    def _flush(self) -> None:  # noqa: B027
        """Flush the underlying stream, if any."""

    def _status_flag(self, status: results.Status) -> tuple[str, str]:
        return STATUS_FLAGS[status], STATUS_STYLES[status]

    # -------------------------------------------------------------------------
    # Observer interface
    # -------------------------------------------------------------------------

    def enter_suite(self, header: headers.SuiteHeader) -> None:
        with self._lock:
            self._level = 1
            self._write("\ntests:\n\n")
            self._write(f"{header}\n", "bold")
            self._flush()

    def exit_suite(self, header: headers.SuiteHeader, result: results.SuiteResult) -> None:
        with self._lock:
            self._write_failures(result)
            self._write_summary(result)
            self._level = 0
            self._flush()

    def enter_context(self, header: headers.ContextHeader) -> None:
        with self._lock:
            self._write(f"{padding(self._level)}{header}\n")
            self._level += 1
            self._flush()

    def exit_context(self, header: headers.ContextHeader, result: results.ContextResult) -> None:
        with self._lock:
            self._level = max(self._level - 1, 0)
            if result.hook_error is not None:
                text, style = self._status_flag(result.status)
                self._write(f"{padding(self._level + 1)}{result.hook_error.phase.value} ... ")
                self._write(f"{text}\n", style)
            self._flush()

    def enter_example(self, header: headers.ExampleHeader) -> None:
        with self._lock:
            self._write(f"{padding(self._level)}{header} ... ")
            self._flush()

    def exit_example(self, header: headers.ExampleHeader, result: results.ExampleResult) -> None:
        with self._lock:
            text, style = self._status_flag(result.status)
            self._write(f"{text}\n", style)
            self._flush()

    # -------------------------------------------------------------------------
    # Summary
    # -------------------------------------------------------------------------

    def _write_failures(self, result: results.SuiteResult) -> None:
        if not result.is_failure:
            return
        self._write("\nfailures:\n\n")
        self._write(f"{result.header}\n")
        self._write_context_failures(result.context, 1)

    def _write_context_failures(self, result: results.ContextResult, indent: int) -> None:
        if result.header is not None:
            self._write(f"{padding(indent)}{result.header}\n")
            indent += 1
        if result.hook_error is not None:
            self._write(f"{padding(indent)}{result.hook_error}\n", "red")
        for child in result.children:
            if not child.is_failure:
                continue
            if isinstance(child, results.ContextResult):
                self._write_context_failures(child, indent)
            else:
                self._write_example_failure(child, indent)

    def _write_example_failure(self, result: results.ExampleResult, indent: int) -> None:
        self._write(f"{padding(indent)}{result.header}\n")
        reason = result.outcome.reason if result.outcome is not None else None
        if reason:
            for line in reason.splitlines():
                self._write(f"{padding(indent + 1)}{line}\n", "red")

    def _write_summary(self, result: results.SuiteResult) -> None:
        self._write(f"\nduration: {format_duration(result.duration)}.\n")
        text, style = self._status_flag(result.status)
        self._write("\ntest result: ")
        self._write(text, style)
        self._write(
            f". {result.passed} passed; {result.failed} failed;"
            f" {result.errored} errored; {result.skipped_count} skipped\n"
        )
        if result.is_failure:
            self._write("\n")
            self._write("error", "bold red")
            self._write(": test failed\n")
