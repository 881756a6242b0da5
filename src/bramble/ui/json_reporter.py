"""
JSON reporter (Layer 2).

Outputs machine-readable JSON for automation and scripting.
Writes a single JSON document describing the whole result tree once the
suite finished.
"""

import json as _json
import sys as _sys
import typing as _typing

import bramble.core.headers as headers
import bramble.core.observer as observer
import bramble.core.results as results


class JSONReporter(observer.RunnerObserver):
    """
    JSON output reporter.

    Ignores intermediate events; the result tree handed to `exit_suite`
    already holds everything. Safe for parallel runs.
    """

    def __init__(
        self,
        output: _typing.TextIO | None = None,
        *,
        indent: int | None = 2,
    ) -> None:
        """
        Initialize the JSON reporter.

        Args:
            output: Stream for output (default: sys.stdout).
            indent: JSON indentation level (None for compact output).
        """
        self._output = output or _sys.stdout
        self._indent = indent

    def exit_suite(self, header: headers.SuiteHeader, result: results.SuiteResult) -> None:
        self._output.write(_json.dumps(result.to_dict(), indent=self._indent))
        self._output.write("\n")
        self._output.flush()
