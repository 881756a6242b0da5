"""
Run logging for Bramble.

Provides JSONL logging of a run's full event stream for debugging and
analysis.
"""

from bramble.logging.run_logger import RunLogger, read_log

__all__ = ["RunLogger", "read_log"]
