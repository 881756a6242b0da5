"""
UI module for Bramble.

Provides reporters built in testable layers:
- Layer 1: PlainTextReporter - Just strings, fully testable
- Layer 2: JSONReporter - Structured output, machine-readable
- Layer 3: RichConsoleReporter - Colors and formatting

ReplayReporter adapts any console reporter to parallel runs.
"""

from bramble.ui.base import Reporter, format_duration
from bramble.ui.factory import FORMATS, create_reporter
from bramble.ui.json_reporter import JSONReporter
from bramble.ui.plain import PlainTextReporter
from bramble.ui.replay import ReplayReporter
from bramble.ui.rich_reporter import RichConsoleReporter

__all__ = [
    "FORMATS",
    "JSONReporter",
    "PlainTextReporter",
    "ReplayReporter",
    "Reporter",
    "RichConsoleReporter",
    "create_reporter",
    "format_duration",
]
