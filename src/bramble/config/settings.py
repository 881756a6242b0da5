"""
Settings configuration using pydantic-settings.

Loads configuration from:
1. Constructor arguments (highest precedence)
2. Environment variables with BRAMBLE_ prefix
3. .env file named by BRAMBLE_ENV_FILE (if set)
4. Layered YAML config files:
   - Project config: .bramble/config.yaml
   - User config: ~/.config/bramble/config.yaml (lowest)

Nested config uses double underscore delimiter:
  BRAMBLE_RUNNER__WORKERS=4
  BRAMBLE_OUTPUT__FORMAT=json
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic as _pydantic
import pydantic_settings as _pydantic_settings

import bramble.config.sources as sources
import bramble.config.types as types
import bramble.core.runner as core_runner

PROJECT_MARKERS = (".bramble", "pyproject.toml", "setup.py", "setup.cfg", ".git")


def _get_env_file() -> str | None:
    """Return BRAMBLE_ENV_FILE if it names an existing file."""
    env_file = _os.environ.get("BRAMBLE_ENV_FILE")
    if env_file and _pathlib.Path(env_file).exists():
        return env_file
    return None


def find_project_root(start_path: _pathlib.Path | None = None) -> _pathlib.Path:
    """
    Find the project root directory.

    Walks up from `start_path` (default: cwd) to the first directory that
    contains one of PROJECT_MARKERS, falling back to the current directory
    when none does.
    """
    if start_path is None:
        start_path = _pathlib.Path.cwd()

    current = start_path.resolve()
    while current != current.parent:
        if any((current / marker).exists() for marker in PROJECT_MARKERS):
            return current
        current = current.parent

    return _pathlib.Path.cwd()


class Settings(_pydantic_settings.BaseSettings):
    """
    Bramble configuration settings.

    All settings can be overridden via environment variables with BRAMBLE_ prefix.
    For nested config, use double underscore: BRAMBLE_RUNNER__PARALLEL=false

    Config precedence (highest to lowest):
    1. Constructor arguments
    2. Environment variables (BRAMBLE_*)
    3. .env file
    4. Project config (.bramble/config.yaml)
    5. User config (~/.config/bramble/config.yaml)
    6. Built-in defaults
    """

    model_config = _pydantic_settings.SettingsConfigDict(
        env_prefix="BRAMBLE_",
        env_file=_get_env_file(),
        env_file_encoding="utf-8",
        env_nested_delimiter="__",  # BRAMBLE_RUNNER__WORKERS
        extra="allow",
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[_pydantic_settings.BaseSettings],
        init_settings: _pydantic_settings.PydanticBaseSettingsSource,
        env_settings: _pydantic_settings.PydanticBaseSettingsSource,
        dotenv_settings: _pydantic_settings.PydanticBaseSettingsSource,
        file_secret_settings: _pydantic_settings.PydanticBaseSettingsSource,
    ) -> tuple[_pydantic_settings.PydanticBaseSettingsSource, ...]:
        """
        Configure settings sources with precedence:
        1. init_settings (constructor args), highest
        2. env_settings (BRAMBLE_* env vars)
        3. dotenv_settings (.env file)
        4. yaml settings (project, then user config.yaml)
        5. (defaults via Field definitions), lowest
        """
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            sources.YamlSettingsSource(settings_cls, find_project_root()),
            file_secret_settings,
        )

    @classmethod
    def construct_without_dotenv(cls, **kwargs: _typing.Any) -> "Settings":
        """Create Settings from environment variables only, without loading .env file.

        Useful for test isolation and for reproducing a run without local
        .env interference.
        """
        return cls(_env_file=None, **kwargs)  # type: ignore[call-arg]

    # =========================================================================
    # Nested config sections
    # =========================================================================

    runner: types.RunnerConfig = _pydantic.Field(default_factory=types.RunnerConfig)
    """Execution settings (parallel, workers, exit_on_failure)."""

    output: types.OutputConfig = _pydantic.Field(default_factory=types.OutputConfig)
    """Reporter settings (format, color)."""

    logging: types.LoggingConfig = _pydantic.Field(default_factory=types.LoggingConfig)
    """Diagnostics settings (log level, JSONL run log)."""

    def runner_configuration(self) -> core_runner.Configuration:
        """The runner Configuration these settings describe."""
        return core_runner.Configuration(
            parallel=self.runner.parallel,
            workers=self.runner.workers,
            exit_on_failure=self.runner.exit_on_failure,
        )

    def get_extra_fields(self) -> dict[str, dict[str, _typing.Any]]:
        """Unknown keys per section, keyed by section name ("" for top level)."""
        extras: dict[str, dict[str, _typing.Any]] = {}
        if self.model_extra:
            extras[""] = dict(self.model_extra)
        for name in ("runner", "output", "logging"):
            section: types.ConfigBase = getattr(self, name)
            if section.has_extra_fields():
                extras[name] = section.get_extra_fields()
        return extras

    def to_display_dict(self) -> dict[str, _typing.Any]:
        """Settings as plain data, for `bramble config`."""
        return {
            "runner": self.runner.model_dump(mode="json"),
            "output": self.output.model_dump(mode="json"),
            "logging": self.logging.model_dump(mode="json"),
        }
