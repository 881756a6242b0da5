"""
Display headers for suites, contexts and examples.

A header pairs a node name with the label it was declared with
(`describe`, `when`, `then`, ...). Labels only affect how a node is
displayed; all aliases of one operation behave identically.
"""

from __future__ import annotations

import dataclasses as _dataclasses
import enum as _enum


class SuiteLabel(_enum.Enum):
    """Label a suite was opened with."""

    SUITE = "Suite"
    DESCRIBE = "Describe"
    GIVEN = "Given"


class ContextLabel(_enum.Enum):
    """Label a context was opened with."""

    CONTEXT = "Context"
    SPECIFY = "Specify"
    WHEN = "When"


class ExampleLabel(_enum.Enum):
    """Label an example was declared with."""

    IT = "It"
    EXAMPLE = "Example"
    THEN = "Then"


@_dataclasses.dataclass(frozen=True)
class SuiteHeader:
    """Label and name of a suite."""

    label: SuiteLabel
    name: str

    def __str__(self) -> str:
        return f'{self.label.value} "{self.name}"'


@_dataclasses.dataclass(frozen=True)
class ContextHeader:
    """Label and name of a context."""

    label: ContextLabel
    name: str

    def __str__(self) -> str:
        return f'{self.label.value} "{self.name}"'


@_dataclasses.dataclass(frozen=True)
class ExampleHeader:
    """Label and name of an example."""

    label: ExampleLabel
    name: str

    def __str__(self) -> str:
        return f'{self.label.value} "{self.name}"'


Header = SuiteHeader | ContextHeader | ExampleHeader
