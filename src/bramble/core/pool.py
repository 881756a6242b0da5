"""
Bounded worker pool for tree branches.

Each child of a context runs as one unit of work. The pool caps how many
units run at the same time. A unit that waits for its own children (a
context join) is blocked, not running, so it gives its slot back while it
waits and takes one again before it continues. That keeps nested joins
from ever exhausting the pool.

A unit is submitted only once the submitting thread has taken a slot for
it, and each join starts at most `max_workers` threads, so a wide context
never costs one thread per child.
"""

from __future__ import annotations

import concurrent.futures as _futures
import contextlib as _contextlib
import threading as _threading
import typing as _typing

_T = _typing.TypeVar("_T")
_R = _typing.TypeVar("_R")


class WorkerPool:
    """
    Runs sibling units concurrently under an upper bound.

    Args:
        max_workers: Maximum number of simultaneously running units.
            None means unbounded; 1 means serial execution on the calling
            thread in item order.
    """

    def __init__(self, max_workers: int | None = None) -> None:
        if max_workers is not None and max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self._max_workers = max_workers
        self._slots = (
            _threading.BoundedSemaphore(max_workers)
            if max_workers is not None and max_workers > 1
            else None
        )
        self._local = _threading.local()

    @property
    def max_workers(self) -> int | None:
        return self._max_workers

    @property
    def serial(self) -> bool:
        return self._max_workers == 1

    def map(
        self,
        fn: _typing.Callable[[_T], _R],
        items: _typing.Iterable[_T],
    ) -> list[_R]:
        """
        Run `fn` over every item and wait for all of them.

        Results are returned in item order regardless of completion order.
        Exceptions raised by `fn` propagate after every unit finished.
        """
        items = list(items)
        if not items:
            return []
        if self.serial:
            return [fn(item) for item in items]

        size = len(items)
        if self._max_workers is not None:
            size = min(size, self._max_workers)

        futures: list[_futures.Future[_R]] = []
        with (
            self._slot_released(),
            _futures.ThreadPoolExecutor(
                max_workers=size,
                thread_name_prefix="bramble-worker",
            ) as executor,
        ):
            for item in items:
                # A unit only gets a thread once it holds a slot
                self._acquire()
                try:
                    futures.append(executor.submit(self._run_unit, fn, item))
                except BaseException:
                    self._release()
                    raise
            _futures.wait(futures)
        return [future.result() for future in futures]

    def _acquire(self) -> None:
        if self._slots is not None:
            self._slots.acquire()

    def _release(self) -> None:
        if self._slots is not None:
            self._slots.release()

    def _run_unit(self, fn: _typing.Callable[[_T], _R], item: _T) -> _R:
        """Run one unit on a slot taken for it by the submitting thread."""
        if self._slots is None:
            return fn(item)
        self._local.holding = True
        try:
            return fn(item)
        finally:
            self._local.holding = False
            self._slots.release()

    @_contextlib.contextmanager
    def _slot_released(self) -> _typing.Iterator[None]:
        """Give up the calling unit's slot for the duration of a join."""
        holding = self._slots is not None and getattr(self._local, "holding", False)
        if not holding:
            yield
            return
        assert self._slots is not None
        self._local.holding = False
        self._slots.release()
        try:
            yield
        finally:
            self._slots.acquire()
            self._local.holding = True
