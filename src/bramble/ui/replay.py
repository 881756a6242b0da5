"""
Replay reporter for parallel runs.

Concurrent branches emit their events interleaved, which would scramble a
tree-shaped console report. ReplayReporter ignores the live stream and,
once the suite finished, walks the final result tree and feeds it to an
inner reporter as if the run had been serial.
"""

import bramble.core.headers as headers
import bramble.core.observer as observer
import bramble.core.results as results


class ReplayReporter(observer.RunnerObserver):
    """Replays the finished result tree through another observer."""

    def __init__(self, inner: observer.RunnerObserver) -> None:
        self._inner = inner

    @property
    def inner(self) -> observer.RunnerObserver:
        return self._inner

    def exit_suite(self, header: headers.SuiteHeader, result: results.SuiteResult) -> None:
        self._inner.enter_suite(header)
        self._replay_context(result.context)
        self._inner.exit_suite(header, result)

    def _replay_context(self, result: results.ContextResult) -> None:
        if result.header is not None:
            self._inner.enter_context(result.header)
        for child in result.children:
            if isinstance(child, results.ContextResult):
                self._replay_context(child)
            else:
                self._inner.enter_example(child.header)
                self._inner.exit_example(child.header, child)
        if result.header is not None:
            self._inner.exit_context(result.header, result)
