"""
Construction-time API for test trees.

A suite is declared with nested population callbacks:

    import bramble

    def body(ctx):
        ctx.before_each(lambda env: env.update(count=0))

        @ctx.context("math")
        def _(ctx):
            ctx.it("adds", lambda env: 2 + 4 == 6)

    suite = bramble.describe("calculator", {}, body)

Each callback receives a ContextBuilder scoped to the context being
populated. Its only effect is mutating that builder; once the callback
returns the builder is frozen into an immutable `nodes.Context`.
"""

from __future__ import annotations

import copy as _copy
import typing as _typing

import bramble.core.headers as headers
import bramble.core.nodes as nodes

Body = _typing.Callable[["ContextBuilder"], object]

_F = _typing.TypeVar("_F", bound=_typing.Callable[..., _typing.Any])


def _require_name(name: object, what: str) -> str:
    if not isinstance(name, str) or not name:
        raise ValueError(f"{what} name must be a non-empty string, got {name!r}")
    return name


def _require_callable(value: object, what: str) -> None:
    if not callable(value):
        raise TypeError(f"{what} must be callable, got {type(value).__name__}")


class ContextBuilder:
    """
    Mutable handle used inside a population callback.

    Registers child contexts, examples and hooks on the context it is
    scoped to. Hooks accumulate in declaration order.
    """

    def __init__(self, header: headers.ContextHeader | None = None) -> None:
        self._header = header
        self._children: list[nodes.Node] = []
        self._before_all: list[nodes.Hook] = []
        self._after_all: list[nodes.Hook] = []
        self._before_each: list[nodes.Hook] = []
        self._after_each: list[nodes.Hook] = []
        self._built = False

    # -------------------------------------------------------------------------
    # Child contexts
    # -------------------------------------------------------------------------

    def context(self, name: str, body: Body | None = None) -> _typing.Any:
        """
        Open a named child context.

        Declaration order is kept for display and hook application but is
        not guaranteed to be the execution order.

        Args:
            name: Context name.
            body: Population callback. If omitted, returns a decorator
                that populates the context with the decorated function.
        """
        return self._open(headers.ContextLabel.CONTEXT, name, body)

    def specify(self, name: str, body: Body | None = None) -> _typing.Any:
        """Alias for `context`."""
        return self._open(headers.ContextLabel.SPECIFY, name, body)

    def when(self, name: str, body: Body | None = None) -> _typing.Any:
        """Alias for `context`."""
        return self._open(headers.ContextLabel.WHEN, name, body)

    def scope(self, body: Body) -> None:
        """
        Open an anonymous child context.

        Useful for giving a group of siblings their own hooks without the
        group showing up in reports.
        """
        _require_callable(body, "scope body")
        self._add_child(_populate(ContextBuilder(None), body))

    def _open(
        self,
        label: headers.ContextLabel,
        name: str,
        body: Body | None,
    ) -> _typing.Any:
        header = headers.ContextHeader(label, _require_name(name, "context"))
        if body is None:

            def decorator(fn: _F) -> _F:
                _require_callable(fn, "context body")
                self._add_child(_populate(ContextBuilder(header), fn))
                return fn

            return decorator

        _require_callable(body, "context body")
        self._add_child(_populate(ContextBuilder(header), body))
        return None

    # -------------------------------------------------------------------------
    # Examples
    # -------------------------------------------------------------------------

    def example(self, name: str, function: nodes.TestFunction | None = None) -> _typing.Any:
        """
        Register an example.

        Args:
            name: Example name.
            function: Test function taking the environment. If omitted,
                returns a decorator registering the decorated function.
        """
        return self._add_example(headers.ExampleLabel.EXAMPLE, name, function)

    def it(self, name: str, function: nodes.TestFunction | None = None) -> _typing.Any:
        """Alias for `example`."""
        return self._add_example(headers.ExampleLabel.IT, name, function)

    def then(self, name: str, function: nodes.TestFunction | None = None) -> _typing.Any:
        """Alias for `example`."""
        return self._add_example(headers.ExampleLabel.THEN, name, function)

    def _add_example(
        self,
        label: headers.ExampleLabel,
        name: str,
        function: nodes.TestFunction | None,
    ) -> _typing.Any:
        header = headers.ExampleHeader(label, _require_name(name, "example"))
        if function is None:

            def decorator(fn: _F) -> _F:
                _require_callable(fn, "test function")
                self._add_child(nodes.Example(header, fn))
                return fn

            return decorator

        _require_callable(function, "test function")
        self._add_child(nodes.Example(header, function))
        return None

    # -------------------------------------------------------------------------
    # Hooks
    # -------------------------------------------------------------------------

    def before_all(self, hook: _F) -> _F:
        """Register a hook run once before any child of this context."""
        return self._add_hook(self._before_all, hook, "before_all")

    def before(self, hook: _F) -> _F:
        """Alias for `before_all`."""
        return self._add_hook(self._before_all, hook, "before")

    def after_all(self, hook: _F) -> _F:
        """Register a hook run once after every child of this context."""
        return self._add_hook(self._after_all, hook, "after_all")

    def after(self, hook: _F) -> _F:
        """Alias for `after_all`."""
        return self._add_hook(self._after_all, hook, "after")

    def before_each(self, hook: _F) -> _F:
        """Register a hook run before each direct child."""
        return self._add_hook(self._before_each, hook, "before_each")

    def after_each(self, hook: _F) -> _F:
        """Register a hook run after each direct child."""
        return self._add_hook(self._after_each, hook, "after_each")

    def _add_hook(self, hooks: list[nodes.Hook], hook: _F, what: str) -> _F:
        self._check_open()
        _require_callable(hook, f"{what} hook")
        hooks.append(hook)
        return hook

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def _add_child(self, child: nodes.Node) -> None:
        self._check_open()
        self._children.append(child)

    def _check_open(self) -> None:
        if self._built:
            raise RuntimeError(
                "context builder used after its population callback returned"
            )

    def build(self) -> nodes.Context:
        """Freeze the builder into an immutable Context."""
        self._built = True
        return nodes.Context(
            header=self._header,
            children=tuple(self._children),
            before_all=tuple(self._before_all),
            after_all=tuple(self._after_all),
            before_each=tuple(self._before_each),
            after_each=tuple(self._after_each),
        )


def _populate(builder: ContextBuilder, body: Body) -> nodes.Context:
    body(builder)
    return builder.build()


def _suite(
    label: headers.SuiteLabel,
    name: str,
    environment: _typing.Any,
    body: Body,
    fork: nodes.Fork,
) -> nodes.Suite:
    header = headers.SuiteHeader(label, _require_name(name, "suite"))
    _require_callable(body, "suite body")
    _require_callable(fork, "fork")
    context = _populate(ContextBuilder(None), body)
    return nodes.Suite(header=header, environment=environment, context=context, fork=fork)


def suite(
    name: str,
    environment: _typing.Any,
    body: Body,
    *,
    fork: nodes.Fork = _copy.deepcopy,
) -> nodes.Suite:
    """
    Build a test suite.

    Args:
        name: Suite name.
        environment: Initial environment value handed to the root context.
        body: Population callback for the root context.
        fork: Duplicates an environment for each branch
            (default: copy.deepcopy).

    Returns:
        The built, immutable Suite.
    """
    return _suite(headers.SuiteLabel.SUITE, name, environment, body, fork)


def describe(
    name: str,
    environment: _typing.Any,
    body: Body,
    *,
    fork: nodes.Fork = _copy.deepcopy,
) -> nodes.Suite:
    """Alias for `suite`."""
    return _suite(headers.SuiteLabel.DESCRIBE, name, environment, body, fork)


def given(
    name: str,
    environment: _typing.Any,
    body: Body,
    *,
    fork: nodes.Fork = _copy.deepcopy,
) -> nodes.Suite:
    """Alias for `suite`."""
    return _suite(headers.SuiteLabel.GIVEN, name, environment, body, fork)
