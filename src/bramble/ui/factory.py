"""
Reporter factory.

Picks a reporter for an output format and wraps console reporters in a
ReplayReporter when the run is parallel.
"""

import typing as _typing

import rich.console as _rich_console

import bramble.core.observer as observer
import bramble.ui.json_reporter as json_reporter
import bramble.ui.plain as plain
import bramble.ui.replay as replay
import bramble.ui.rich_reporter as rich_reporter

FORMATS: tuple[str, ...] = ("plain", "rich", "json")


def create_reporter(
    output_format: str = "plain",
    output: _typing.TextIO | None = None,
    *,
    parallel: bool = True,
    color: bool = True,
) -> observer.RunnerObserver:
    """
    Create a reporter for an output format.

    Args:
        output_format: One of "plain", "rich" or "json".
        output: Stream to write to (default: sys.stdout).
        parallel: Whether the run executes branches concurrently. Console
            reporters are then replayed from the final result tree.
        color: Enable colors (rich format only).

    Raises:
        ValueError: If the format is unknown.
    """
    if output_format == "json":
        return json_reporter.JSONReporter(output)

    reporter: observer.RunnerObserver
    if output_format == "plain":
        reporter = plain.PlainTextReporter(output)
    elif output_format == "rich":
        console = _rich_console.Console(file=output, no_color=not color, highlight=False)
        reporter = rich_reporter.RichConsoleReporter(console)
    else:
        raise ValueError(
            f"Unknown output format {output_format!r} (expected one of {', '.join(FORMATS)})"
        )

    if parallel:
        return replay.ReplayReporter(reporter)
    return reporter
