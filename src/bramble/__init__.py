"""
Bramble - behavior-driven test harness

Declare suites as nested contexts of examples with before/after hooks,
run sibling branches concurrently on a bounded worker pool, and report
results as they happen.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("bramble")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "Bramble Contributors"

from bramble.config import Settings  # noqa: E402
from bramble.core import (  # noqa: E402
    Configuration,
    Err,
    Ok,
    Runner,
    RunnerObserver,
    Status,
    Suite,
    SuiteResult,
    describe,
    given,
    suite,
)
from bramble.errors import BrambleError, SuiteLoadError  # noqa: E402
from bramble.launch import exit_code, run  # noqa: E402

__all__ = [
    "__version__",
    "__version_info__",
    "BrambleError",
    "Configuration",
    "Err",
    "Ok",
    "Runner",
    "RunnerObserver",
    "Settings",
    "Status",
    "Suite",
    "SuiteLoadError",
    "SuiteResult",
    "describe",
    "exit_code",
    "given",
    "run",
    "suite",
]
