"""Tests for before/after hook scheduling."""

import logging as _logging

import pytest as _pytest

import bramble.core.nodes as nodes
import bramble.core.scheduler as scheduler


def _recorder(log: list[str], name: str, *, fail: bool = False):
    def hook(env: object) -> None:
        log.append(name)
        if fail:
            raise RuntimeError(f"{name} failed")

    hook.__qualname__ = name
    return hook


class TestRunHooks:
    """Hooks run in declaration order and stop at the first failure."""

    def test_declaration_order(self) -> None:
        log: list[str] = []
        hooks = [_recorder(log, "a"), _recorder(log, "b"), _recorder(log, "c")]
        failure = scheduler.HookScheduler().run_hooks(scheduler.HookPhase.BEFORE_ALL, hooks, None)
        assert failure is None
        assert log == ["a", "b", "c"]

    def test_stops_at_first_failure(self, caplog: _pytest.LogCaptureFixture) -> None:
        log: list[str] = []
        hooks = [_recorder(log, "a"), _recorder(log, "b", fail=True), _recorder(log, "c")]
        with caplog.at_level(_logging.WARNING, logger="bramble.core.scheduler"):
            failure = scheduler.HookScheduler().run_hooks(
                scheduler.HookPhase.BEFORE_EACH, hooks, None
            )
        assert log == ["a", "b"]
        assert failure is not None
        assert failure.phase is scheduler.HookPhase.BEFORE_EACH
        assert failure.hook_name == "b"
        assert failure.reason == "RuntimeError: b failed"
        assert str(failure) == "before_each hook b failed: RuntimeError: b failed"
        assert "b failed" in caplog.text

    def test_hooks_receive_environment(self) -> None:
        env: dict[str, int] = {}
        scheduler.HookScheduler().run_hooks(
            scheduler.HookPhase.BEFORE_ALL, [lambda e: e.update(x=1)], env
        )
        assert env == {"x": 1}


class TestWrapAll:
    """before_all -> body -> after_all."""

    def test_order(self) -> None:
        log: list[str] = []
        context = nodes.Context(
            before_all=(_recorder(log, "before"),),
            after_all=(_recorder(log, "after"),),
        )
        wrapped = scheduler.HookScheduler().wrap_all(
            context, None, lambda env: log.append("body") or "value"
        )
        assert log == ["before", "body", "after"]
        assert wrapped.value == "value"
        assert wrapped.entered
        assert wrapped.failure is None

    def test_before_failure_skips_body_but_runs_after(self) -> None:
        log: list[str] = []
        context = nodes.Context(
            before_all=(_recorder(log, "before", fail=True),),
            after_all=(_recorder(log, "after"),),
        )
        wrapped = scheduler.HookScheduler().wrap_all(context, None, lambda env: log.append("body"))
        assert log == ["before", "after"]
        assert not wrapped.entered
        assert wrapped.value is None
        assert wrapped.before is not None

    def test_after_failure_is_reported(self) -> None:
        context = nodes.Context(after_all=(_recorder([], "after", fail=True),))
        wrapped = scheduler.HookScheduler().wrap_all(context, None, lambda env: 1)
        assert wrapped.value == 1
        assert wrapped.after is not None
        assert wrapped.failure is wrapped.after


class TestWrapEach:
    """before_each -> child -> after_each."""

    def test_order(self) -> None:
        log: list[str] = []
        context = nodes.Context(
            before_each=(_recorder(log, "b1"), _recorder(log, "b2")),
            after_each=(_recorder(log, "a1"), _recorder(log, "a2")),
        )
        scheduler.HookScheduler().wrap_each(context, None, lambda env: log.append("child"))
        assert log == ["b1", "b2", "child", "a1", "a2"]

    def test_before_failure_skips_child_and_after(self) -> None:
        log: list[str] = []
        context = nodes.Context(
            before_each=(_recorder(log, "b", fail=True),),
            after_each=(_recorder(log, "a"),),
        )
        wrapped = scheduler.HookScheduler().wrap_each(
            context, None, lambda env: log.append("child")
        )
        assert log == ["b"]
        assert not wrapped.entered
        assert wrapped.before is not None
        assert wrapped.after is None


class TestHookPhase:
    def test_aborts_context(self) -> None:
        assert scheduler.HookPhase.BEFORE_ALL.aborts_context
        assert scheduler.HookPhase.BEFORE_EACH.aborts_context
        assert not scheduler.HookPhase.AFTER_ALL.aborts_context
        assert not scheduler.HookPhase.AFTER_EACH.aborts_context
