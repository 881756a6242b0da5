"""
Run logger for Bramble.

Logs every lifecycle event of a run to a JSONL file for debugging and
analysis of parallel runs.
"""

import datetime as _datetime
import json as _json
import os as _os
import pathlib as _pathlib
import threading as _threading
import typing as _typing

import bramble.core.events as events
import bramble.core.observer as observer


class RunLogger(observer.RunnerObserver):
    """
    Logs run events to a JSONL file.

    Each line in the file is a JSON object representing an event:
    - log_start: Logger metadata (run id)
    - enter_suite / exit_suite: Suite boundaries, exit carries totals
    - enter_context / exit_context: Named context boundaries
    - enter_example / example_finished: Example boundaries, the latter
      carries status, reason and duration
    - log_end: Total number of events written

    Lines are written under a lock, so the logger can observe parallel
    runs. Every line carries the name of the worker thread that emitted
    it.

    Usage:
        logger = RunLogger(log_dir="/tmp/bramble-logs")
        runner = Runner(observers=[logger])
        runner.run(suite)
        logger.close()
    """

    def __init__(
        self,
        *,
        log_dir: _pathlib.Path | str | None = None,
        log_file: _pathlib.Path | str | None = None,
        private_mode: bool = True,
        enabled: bool = True,
    ) -> None:
        """
        Initialize the run logger.

        Args:
            log_dir: Directory for log files (default: /tmp/bramble-logs).
            log_file: Explicit log file path (overrides log_dir + auto name).
            private_mode: If True, set log directory to drwx------ (0o700).
            enabled: Whether logging is enabled.
        """
        self._enabled = enabled
        self._lock = _threading.Lock()
        self._file: _typing.TextIO | None = None
        self._file_path: _pathlib.Path | None = None
        self._run_id = _datetime.datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        self._event_count = 0

        if not enabled:
            return

        if log_file:
            self._file_path = _pathlib.Path(log_file)
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
        else:
            base_dir = _pathlib.Path(log_dir) if log_dir else _pathlib.Path("/tmp/bramble-logs")
            base_dir.mkdir(parents=True, exist_ok=True)
            if private_mode:
                _os.chmod(base_dir, 0o700)
            self._file_path = base_dir / f"bramble_{self._run_id}.jsonl"

        # Held as instance state, closed in close()
        self._file = open(self._file_path, "w", encoding="utf-8")  # noqa: SIM115

        self._write_event("log_start", {"run_id": self._run_id})

    def _write_event(self, event_type: str, data: dict[str, _typing.Any]) -> None:
        """Write an event to the log file."""
        with self._lock:
            if not self._enabled or not self._file:
                return

            self._event_count += 1
            record = {
                "timestamp": _datetime.datetime.now().isoformat(),
                "event_number": self._event_count,
                "event_type": event_type,
                "thread": _threading.current_thread().name,
                **data,
            }

            try:
                self._file.write(_json.dumps(record, default=str) + "\n")
                self._file.flush()
            except OSError:
                # Logging must never break a run
                pass

    def notify(self, event: events.RunEvent) -> None:
        data = event.to_dict()
        data.pop("event", None)
        self._write_event(event.kind.value, data)

    @property
    def file_path(self) -> _pathlib.Path | None:
        """Path to the log file, if logging is enabled."""
        return self._file_path

    @property
    def enabled(self) -> bool:
        return self._enabled

    @property
    def event_count(self) -> int:
        return self._event_count

    def close(self) -> None:
        """Close the log file."""
        if not self._enabled or not self._file:
            return

        self._write_event("log_end", {"total_events": self._event_count})

        with self._lock:
            try:
                self._file.close()
            except OSError:
                pass
            finally:
                self._file = None

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


def read_log(path: _pathlib.Path | str) -> list[dict[str, _typing.Any]]:
    """Load every event of a JSONL run log."""
    with open(path, encoding="utf-8") as f:
        return [_json.loads(line) for line in f if line.strip()]
