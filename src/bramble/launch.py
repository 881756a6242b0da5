"""
Convenience entry point: run a suite the way a test binary would.

`run` builds a Runner from Settings, attaches the configured reporter
(and the JSONL run log when enabled), runs the suite and, when
`runner.exit_on_failure` is set, exits the process with status 101 on
failure.
"""

from __future__ import annotations

import logging as _logging
import sys as _sys
import typing as _typing

import bramble.config as config
import bramble.core.nodes as nodes
import bramble.core.observer as observer
import bramble.core.results as results
import bramble.core.runner as runner
import bramble.logging as run_logging
import bramble.ui as ui

_logger = _logging.getLogger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 101


def exit_code(result: results.SuiteResult) -> int:
    """Process exit status for a suite result: 0 on success, 101 on failure."""
    return EXIT_SUCCESS if result.is_success else EXIT_FAILURE


def default_reporter(
    settings: config.Settings,
    output: _typing.TextIO | None = None,
) -> observer.RunnerObserver:
    """The reporter Settings ask for."""
    configuration = settings.runner_configuration()
    return ui.create_reporter(
        settings.output.format,
        output,
        parallel=configuration.effective_workers != 1,
        color=settings.output.color,
    )


def run(
    suite: nodes.Suite,
    *,
    settings: config.Settings | None = None,
    reporter: observer.RunnerObserver | None = None,
    observers: _typing.Iterable[observer.RunnerObserver] = (),
    output: _typing.TextIO | None = None,
) -> results.SuiteResult:
    """
    Run a suite with reporting.

    Args:
        suite: The suite to run.
        settings: Settings to use (default: loaded from env and config files).
        reporter: Reporter to attach instead of the configured one.
        observers: Additional observers.
        output: Stream for the default reporter (default: sys.stdout).

    Returns:
        The suite result, when the process is not exited.

    Raises:
        SystemExit: With status 101 when the suite failed and
            `exit_on_failure` is set.
    """
    if settings is None:
        settings = config.Settings()

    configuration = settings.runner_configuration()
    if reporter is None:
        reporter = default_reporter(settings, output)

    run_logger: run_logging.RunLogger | None = None
    all_observers: list[observer.RunnerObserver] = [reporter, *observers]
    if settings.logging.enabled:
        run_logger = run_logging.RunLogger(
            log_dir=settings.logging.dir,
            private_mode=settings.logging.private,
        )
        all_observers.append(run_logger)
        _logger.info("Run log: %s", run_logger.file_path)

    try:
        result = runner.Runner(configuration, all_observers).run(suite)
    finally:
        if run_logger is not None:
            run_logger.close()

    if configuration.exit_on_failure and result.is_failure:
        _logger.debug("Suite %r failed, exiting with %d", suite.name, EXIT_FAILURE)
        _sys.exit(EXIT_FAILURE)
    return result
