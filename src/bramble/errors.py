"""Exceptions raised by Bramble itself.

Test outcomes never raise: failing examples and hooks are recorded in the
result tree. These exceptions cover misuse of the tooling around a run.
"""


class BrambleError(Exception):
    """Base class for Bramble errors."""

    pass


class SuiteLoadError(BrambleError):
    """Raised when a suite target cannot be imported or is not a Suite."""

    pass
