"""
Concurrent runner for built test trees.

The runner walks a Suite recursively. At each context the before-all
hooks run first, on the context's own environment. The direct children
are then dispatched to the worker pool; each child gets its own fork of
the context's environment and runs as before-each -> child -> after-each
on one worker. The context joins all of its children before its
after-all hooks run and its aggregate result is built.

Test outcomes never escape the runner: failures and errors are recorded
in the result tree and reported through events. The runner never exits
the process.
"""

from __future__ import annotations

import logging as _logging
import threading as _threading
import time as _time
import typing as _typing

import pydantic as _pydantic

import bramble.core.events as events
import bramble.core.nodes as nodes
import bramble.core.outcome as outcome
import bramble.core.pool as pool
import bramble.core.results as results
import bramble.core.scheduler as scheduler

if _typing.TYPE_CHECKING:
    import bramble.core.observer as observer

_logger = _logging.getLogger(__name__)


class Configuration(_pydantic.BaseModel):
    """
    Runner configuration.

    Attributes:
        parallel: Run sibling branches concurrently. False forces serial
            execution in declaration order.
        workers: Upper bound on simultaneously running units; None means
            unbounded. Ignored when parallel is False.
        exit_on_failure: Exit the process with status 101 when the suite
            fails. Honored by `bramble.run` only; the Runner itself never
            exits.
    """

    model_config = _pydantic.ConfigDict(frozen=True)

    parallel: bool = True
    workers: int | None = _pydantic.Field(default=None, ge=1)
    exit_on_failure: bool = False

    @property
    def effective_workers(self) -> int | None:
        """Pool size actually used for a run."""
        if not self.parallel:
            return 1
        return self.workers


class Runner:
    """
    Executes suites and reports to observers.

    A Runner holds no per-run state, so the same runner (and the same
    suite) may be run any number of times.
    """

    def __init__(
        self,
        configuration: Configuration | None = None,
        observers: _typing.Iterable[observer.RunnerObserver] = (),
    ) -> None:
        """
        Initialize the runner.

        Args:
            configuration: Runner configuration (defaults to parallel,
                unbounded).
            observers: Observers notified of every lifecycle event.
        """
        self.configuration = configuration or Configuration()
        self._observers: list[observer.RunnerObserver] = list(observers)
        self._scheduler = scheduler.HookScheduler()

    @property
    def observers(self) -> list[observer.RunnerObserver]:
        return list(self._observers)

    def add_observer(self, obs: observer.RunnerObserver) -> None:
        """Register an observer for subsequent runs."""
        self._observers.append(obs)

    def run(self, suite: nodes.Suite) -> results.SuiteResult:
        """
        Run a suite to completion.

        Blocks until every branch finished.

        Returns:
            The result tree. `result.is_success` is the aggregate verdict.
        """
        workers = self.configuration.effective_workers
        _logger.debug(
            "Running suite %r (%d examples, workers=%s)",
            suite.name,
            suite.num_examples(),
            workers if workers is not None else "unbounded",
        )

        execution = _Execution(
            self._broadcast,
            hook_scheduler=self._scheduler,
            worker_pool=pool.WorkerPool(workers),
            fork=suite.fork,
        )
        environment = suite.fork(suite.environment)

        start = _time.perf_counter()
        self._broadcast(events.RunEvent(events.EventKind.ENTER_SUITE, suite.header))
        context_result = execution.visit_context(suite.context, environment)
        result = results.SuiteResult(
            header=suite.header,
            context=context_result,
            duration=_time.perf_counter() - start,
        )
        self._broadcast(events.RunEvent(events.EventKind.EXIT_SUITE, suite.header, result))

        _logger.info(
            "Suite %r %s: %d passed, %d failed, %d errored, %d skipped in %.3fs",
            suite.name,
            result.status.value,
            result.passed,
            result.failed,
            result.errored,
            result.skipped_count,
            result.duration,
        )
        return result

    def _broadcast(self, event: events.RunEvent) -> None:
        """Deliver an event to every observer, in registration order."""
        for obs in self._observers:
            try:
                obs.notify(event)
            except Exception:
                _logger.warning(
                    "Observer %s failed handling %s for %r",
                    type(obs).__name__,
                    event.kind.value,
                    event.name,
                    exc_info=True,
                )


class _Execution:
    """State shared by every branch of one run."""

    def __init__(
        self,
        broadcast: _typing.Callable[[events.RunEvent], None],
        *,
        hook_scheduler: scheduler.HookScheduler,
        worker_pool: pool.WorkerPool,
        fork: nodes.Fork,
    ) -> None:
        self._broadcast = broadcast
        self._scheduler = hook_scheduler
        self._pool = worker_pool
        self._fork = fork

    def visit(self, node: nodes.Node, environment: _typing.Any) -> results.BlockResult:
        if isinstance(node, nodes.Example):
            return self.visit_example(node, environment)
        return self.visit_context(node, environment)

    def visit_context(
        self,
        context: nodes.Context,
        environment: _typing.Any,
    ) -> results.ContextResult:
        if context.header is not None:
            self._broadcast(
                events.RunEvent(events.EventKind.ENTER_CONTEXT, context.header)
            )

        start = _time.perf_counter()
        abort = _threading.Event()
        wrapped = self._scheduler.wrap_all(
            context,
            environment,
            lambda env: self._pool.map(
                lambda child: self._run_child(context, child, env, abort),
                context.children,
            ),
        )

        if wrapped.value is None:
            children = tuple(_skip(child) for child in context.children)
            child_failures: list[scheduler.HookFailure] = []
        else:
            children = tuple(child_result for child_result, _ in wrapped.value)
            child_failures = [failure for _, failure in wrapped.value if failure is not None]

        before_each = [f for f in child_failures if f.phase.aborts_context]
        after_each = [f for f in child_failures if not f.phase.aborts_context]
        hook_error = next(
            (
                f
                for f in (wrapped.before, *before_each, *after_each, wrapped.after)
                if f is not None
            ),
            None,
        )

        result = results.ContextResult(
            header=context.header,
            children=children,
            duration=_time.perf_counter() - start,
            hook_error=hook_error,
            aborted=wrapped.before is not None or bool(before_each),
        )

        if context.header is not None:
            self._broadcast(
                events.RunEvent(events.EventKind.EXIT_CONTEXT, context.header, result)
            )
        return result

    def _run_child(
        self,
        context: nodes.Context,
        child: nodes.Node,
        environment: _typing.Any,
        abort: _threading.Event,
    ) -> tuple[results.BlockResult, scheduler.HookFailure | None]:
        """Run one child's before-each -> child -> after-each triplet."""
        if abort.is_set():
            return _skip(child), None

        child_environment = self._fork(environment)
        wrapped = self._scheduler.wrap_each(
            context,
            child_environment,
            lambda env: self.visit(child, env),
        )
        if not wrapped.entered:
            abort.set()
            return _skip(child), wrapped.before
        assert wrapped.value is not None
        return wrapped.value, wrapped.after

    def visit_example(
        self,
        example: nodes.Example,
        environment: _typing.Any,
    ) -> results.ExampleResult:
        self._broadcast(events.RunEvent(events.EventKind.ENTER_EXAMPLE, example.header))
        start = _time.perf_counter()
        example_outcome = outcome.invoke(example.function, environment)
        result = results.ExampleResult(
            header=example.header,
            outcome=example_outcome,
            duration=_time.perf_counter() - start,
        )
        self._broadcast(
            events.RunEvent(events.EventKind.EXAMPLE_FINISHED, example.header, result)
        )
        return result


def _skip(node: nodes.Node) -> results.BlockResult:
    """Result for a node that was never entered."""
    if isinstance(node, nodes.Example):
        return results.ExampleResult.skipped(node.header)
    return results.ContextResult(
        header=node.header,
        children=tuple(_skip(child) for child in node.children),
        skipped=True,
    )
