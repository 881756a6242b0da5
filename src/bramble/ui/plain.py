"""
Plain text reporter (Layer 1).

Outputs simple text to stdout with no formatting or colors.
Fully testable and works in any terminal.
"""

import sys as _sys
import typing as _typing

import bramble.ui.base as base


class PlainTextReporter(base.Reporter):
    """
    Simple plain text reporter.

    Outputs to stdout (or a custom stream) with no ANSI codes. This is
    the most basic reporter, suitable for piped output and testing.
    """

    def __init__(self, output: _typing.TextIO | None = None) -> None:
        """
        Initialize the plain text reporter.

        Args:
            output: Stream for output (default: sys.stdout).
        """
        super().__init__()
        self._output = output or _sys.stdout

    def _write(self, text: str, style: str | None = None) -> None:
        self._output.write(text)

    def _flush(self) -> None:
        self._output.flush()
