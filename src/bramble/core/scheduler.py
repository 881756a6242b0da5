"""
Hook scheduling for contexts.

Given a context, the scheduler decides which hooks fire around the context
itself (before-all/after-all, once) and around each of its direct children
(before-each/after-each, once per child). Hooks always run in declaration
order and a failing hook stops the rest of its list.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum
import logging as _logging
import typing as _typing

import bramble.core.nodes as nodes
import bramble.core.outcome as outcome

_logger = _logging.getLogger(__name__)

_T = _typing.TypeVar("_T")


class HookPhase(_enum.Enum):
    """Point in a context's schedule at which a hook runs."""

    BEFORE_ALL = "before_all"
    AFTER_ALL = "after_all"
    BEFORE_EACH = "before_each"
    AFTER_EACH = "after_each"

    @property
    def aborts_context(self) -> bool:
        """Whether a failure in this phase aborts the context's remaining schedule."""
        return self in (HookPhase.BEFORE_ALL, HookPhase.BEFORE_EACH)


@_dataclasses.dataclass(frozen=True)
class HookFailure:
    """
    A hook that raised.

    Attributes:
        phase: Phase the hook ran in.
        hook_name: Qualified name of the hook callable.
        exception: The exception it raised.
    """

    phase: HookPhase
    hook_name: str
    exception: BaseException = _dataclasses.field(compare=False)

    @property
    def reason(self) -> str:
        return outcome.describe_exception(self.exception)

    def to_dict(self) -> dict[str, _typing.Any]:
        """Convert to JSON-serializable dict."""
        return {
            "phase": self.phase.value,
            "hook": self.hook_name,
            "reason": self.reason,
        }

    def __str__(self) -> str:
        return f"{self.phase.value} hook {self.hook_name} failed: {self.reason}"


@_dataclasses.dataclass
class Wrapped(_typing.Generic[_T]):
    """
    What happened around a wrapped body.

    Attributes:
        value: The body's return value, or None if the body never ran.
        before: Failure of a before hook; the body was not run.
        after: Failure of an after hook; the body did run.
    """

    value: _T | None = None
    before: HookFailure | None = None
    after: HookFailure | None = None

    @property
    def entered(self) -> bool:
        return self.before is None

    @property
    def failure(self) -> HookFailure | None:
        return self.before or self.after


def _hook_name(hook: nodes.Hook) -> str:
    return getattr(hook, "__qualname__", None) or repr(hook)


class HookScheduler:
    """
    Runs a context's hooks around its own body and around each child.

    Stateless; a single instance is shared by every worker of a run.
    """

    def run_hooks(
        self,
        phase: HookPhase,
        hooks: _typing.Sequence[nodes.Hook],
        environment: _typing.Any,
    ) -> HookFailure | None:
        """
        Run hooks in declaration order against an environment.

        Stops at the first hook that raises.

        Returns:
            The failure, or None if every hook completed.
        """
        for hook in hooks:
            try:
                hook(environment)
            except Exception as e:
                failure = HookFailure(phase, _hook_name(hook), e)
                _logger.warning("%s", failure)
                return failure
        return None

    def wrap_all(
        self,
        context: nodes.Context,
        environment: _typing.Any,
        body: _typing.Callable[[_typing.Any], _T],
    ) -> Wrapped[_T]:
        """
        Run before-all hooks, the body, then after-all hooks.

        If a before-all hook fails the body is skipped; the after-all
        hooks still run (best effort).
        """
        before = self.run_hooks(HookPhase.BEFORE_ALL, context.before_all, environment)
        value = body(environment) if before is None else None
        after = self.run_hooks(HookPhase.AFTER_ALL, context.after_all, environment)
        return Wrapped(value=value, before=before, after=after)

    def wrap_each(
        self,
        context: nodes.Context,
        environment: _typing.Any,
        body: _typing.Callable[[_typing.Any], _T],
    ) -> Wrapped[_T]:
        """
        Run before-each hooks, the body, then after-each hooks.

        If a before-each hook fails the child is never entered and its
        after-each hooks are not run.
        """
        before = self.run_hooks(HookPhase.BEFORE_EACH, context.before_each, environment)
        if before is not None:
            return Wrapped(before=before)
        value = body(environment)
        after = self.run_hooks(HookPhase.AFTER_EACH, context.after_each, environment)
        return Wrapped(value=value, after=after)
