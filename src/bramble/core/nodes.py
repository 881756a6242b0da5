"""
Node model for a built test tree.

A tree is a Suite holding one anonymous root Context. Contexts own hooks
and an ordered sequence of children (Contexts or Examples). Nodes are
frozen once the builder returns them; during a run the only mutable state
is each branch's copy of the environment.
"""

from __future__ import annotations

import copy as _copy
import dataclasses as _dataclasses
import typing as _typing

import bramble.core.headers as headers

Hook = _typing.Callable[[_typing.Any], object]
"""A before/after hook. Receives the branch's environment and may mutate it."""

TestFunction = _typing.Callable[[_typing.Any], object]
"""An example body. Receives the branch's environment; its return is normalized."""

Fork = _typing.Callable[[_typing.Any], _typing.Any]
"""Duplicates an environment so sibling branches never share state."""


@_dataclasses.dataclass(frozen=True)
class Example:
    """A leaf node wrapping one test function."""

    header: headers.ExampleHeader
    function: TestFunction

    @property
    def name(self) -> str:
        return self.header.name

    def num_examples(self) -> int:
        return 1


@_dataclasses.dataclass(frozen=True)
class Context:
    """
    A grouping node owning hooks and an ordered sequence of children.

    Attributes:
        header: Display header, or None for an anonymous context (the
            suite root or a `scope`). Anonymous contexts run their hooks
            like any other but emit no enter/exit events.
        children: Child nodes in declaration order.
        before_all: Hooks run once before any child starts.
        after_all: Hooks run once after every child finished.
        before_each: Hooks run before each direct child.
        after_each: Hooks run after each direct child.
    """

    header: headers.ContextHeader | None = None
    children: tuple[Context | Example, ...] = ()
    before_all: tuple[Hook, ...] = ()
    after_all: tuple[Hook, ...] = ()
    before_each: tuple[Hook, ...] = ()
    after_each: tuple[Hook, ...] = ()

    @property
    def name(self) -> str | None:
        return self.header.name if self.header else None

    def num_blocks(self) -> int:
        """Number of direct children."""
        return len(self.children)

    def num_examples(self) -> int:
        """Number of examples in this context's whole subtree."""
        return sum(child.num_examples() for child in self.children)

    def is_empty(self) -> bool:
        return not self.children


Node = Context | Example


@_dataclasses.dataclass(frozen=True)
class Suite:
    """
    Root of a test tree.

    Attributes:
        header: Display header of the suite.
        environment: Initial environment. Never mutated by a run; every
            run starts from a fresh fork of it.
        context: The anonymous root context.
        fork: Function used to duplicate environments per branch.
    """

    header: headers.SuiteHeader
    environment: _typing.Any
    context: Context
    fork: Fork = _copy.deepcopy

    @property
    def name(self) -> str:
        return self.header.name

    def num_blocks(self) -> int:
        return self.context.num_blocks()

    def num_examples(self) -> int:
        return self.context.num_examples()

    def is_empty(self) -> bool:
        return self.context.is_empty()
