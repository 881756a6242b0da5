"""Configuration type definitions for Bramble settings.

These are the "config section" types nested within the main Settings
class:

- RunnerConfig: parallel, workers, exit_on_failure
- OutputConfig: format, color
- LoggingConfig: enabled, dir, level

All types use `extra="allow"` so unknown keys are preserved rather than
silently dropped; `get_extra_fields()` exposes them for auditing typos.
"""

import typing as _typing

import pydantic as _pydantic


class ConfigBase(_pydantic.BaseModel):
    """Base class for all config types."""

    model_config = _pydantic.ConfigDict(extra="allow")

    def get_extra_fields(self) -> dict[str, _typing.Any]:
        """Return fields that were provided but not in the schema."""
        return dict(self.model_extra) if self.model_extra else {}

    def has_extra_fields(self) -> bool:
        """Check if this config has any unrecognized fields."""
        return bool(self.model_extra)


class RunnerConfig(ConfigBase):
    """How suites are executed."""

    parallel: bool = True
    """Run sibling branches concurrently."""

    workers: int | None = _pydantic.Field(default=None, ge=1)
    """Upper bound on simultaneously running units; None = unbounded."""

    exit_on_failure: bool = True
    """Exit with status 101 when a suite run through `bramble.run` fails."""


class OutputConfig(ConfigBase):
    """How results are reported."""

    format: _typing.Literal["plain", "rich", "json"] = "plain"
    color: bool = True


class LoggingConfig(ConfigBase):
    """Diagnostics: stdlib log level and the JSONL run log."""

    enabled: bool = False
    """Write a JSONL run log for every run."""

    dir: str | None = None
    """Directory for run logs (default: /tmp/bramble-logs)."""

    private: bool = True
    """Restrict the run log directory to the current user."""

    level: _typing.Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    """Level for the `bramble` stdlib logger."""

    @_pydantic.field_validator("level", mode="before")
    @classmethod
    def _upper_level(cls, value: object) -> object:
        return value.upper() if isinstance(value, str) else value
