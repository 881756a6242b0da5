"""
Execution engine for Bramble.

- builder: declare suites with nested population callbacks
- nodes: the immutable Suite -> Context -> Example tree
- scheduler: before/after hook scheduling per context
- pool: bounded worker pool for sibling branches
- runner: walks the tree and produces the result tree
- events/observer: lifecycle event stream and its observers
"""

from bramble.core.builder import ContextBuilder, describe, given, suite
from bramble.core.events import EventKind, RunEvent
from bramble.core.headers import (
    ContextHeader,
    ContextLabel,
    ExampleHeader,
    ExampleLabel,
    SuiteHeader,
    SuiteLabel,
)
from bramble.core.nodes import Context, Example, Suite
from bramble.core.observer import CallbackObserver, RecordingObserver, RunnerObserver
from bramble.core.outcome import Err, Ok, Outcome, OutcomeStatus
from bramble.core.pool import WorkerPool
from bramble.core.results import ContextResult, ExampleResult, Status, SuiteResult
from bramble.core.runner import Configuration, Runner
from bramble.core.scheduler import HookFailure, HookPhase, HookScheduler

__all__ = [
    "CallbackObserver",
    "Configuration",
    "Context",
    "ContextBuilder",
    "ContextHeader",
    "ContextLabel",
    "ContextResult",
    "Err",
    "EventKind",
    "Example",
    "ExampleHeader",
    "ExampleLabel",
    "ExampleResult",
    "HookFailure",
    "HookPhase",
    "HookScheduler",
    "Ok",
    "Outcome",
    "OutcomeStatus",
    "RecordingObserver",
    "RunEvent",
    "Runner",
    "RunnerObserver",
    "Status",
    "Suite",
    "SuiteHeader",
    "SuiteLabel",
    "SuiteResult",
    "WorkerPool",
    "describe",
    "given",
    "suite",
]
