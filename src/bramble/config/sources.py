"""Custom pydantic-settings source for Bramble configuration.

Loads configuration from layered YAML files (in precedence order,
highest first):

1. Project config: .bramble/config.yaml in project root
2. User config: ~/.config/bramble/config.yaml (or BRAMBLE_CONFIG_DIR)

Environment variables and constructor arguments are handled by
pydantic-settings itself and take precedence over both files. Layers are
merged key by key, so nested sections combine instead of replacing each
other.

Environment variables:
- BRAMBLE_CONFIG_DIR: Override user config directory (default: ~/.config/bramble)
"""

import os as _os
import pathlib as _pathlib
import typing as _typing

import pydantic.fields as _pydantic_fields
import pydantic_settings as _pydantic_settings
import yaml as _yaml

import bramble.errors as errors

# Environment variable for overriding user config directory
ENV_CONFIG_DIR = "BRAMBLE_CONFIG_DIR"

PROJECT_CONFIG = _pathlib.Path(".bramble") / "config.yaml"


class ConfigFileError(errors.BrambleError):
    """Error loading or parsing a configuration file."""

    def __init__(self, path: _pathlib.Path, message: str) -> None:
        self.path = path
        super().__init__(f"Error in config file {path}: {message}")


def deep_merge(
    base: dict[str, _typing.Any],
    override: _typing.Mapping[str, _typing.Any],
) -> dict[str, _typing.Any]:
    """
    Merge two config dicts, `override` winning.

    Nested dicts merge recursively; any other value replaces the base
    value. Neither input is modified.
    """
    merged = dict(base)
    for key, value in override.items():
        existing = merged.get(key)
        if isinstance(existing, dict) and isinstance(value, _typing.Mapping):
            merged[key] = deep_merge(existing, value)
        else:
            merged[key] = value
    return merged


def user_config_path() -> _pathlib.Path:
    """Path to the user config file, respecting BRAMBLE_CONFIG_DIR."""
    config_dir_env = _os.environ.get(ENV_CONFIG_DIR)
    if config_dir_env:
        return _pathlib.Path(config_dir_env) / "config.yaml"
    return _pathlib.Path.home() / ".config" / "bramble" / "config.yaml"


def load_yaml_file(path: _pathlib.Path) -> dict[str, _typing.Any] | None:
    """
    Load a YAML file and return its contents as a dict.

    Returns:
        The parsed mapping, or None for an empty file.

    Raises:
        ConfigFileError: If the file is unreadable, malformed, or its
            top level is not a mapping.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigFileError(path, f"cannot read file: {e}") from e

    try:
        data = _yaml.safe_load(content)
    except _yaml.YAMLError as e:
        raise ConfigFileError(path, f"invalid YAML: {e}") from e

    if data is None:
        return None
    if not isinstance(data, dict):
        raise ConfigFileError(path, f"expected a mapping, got {type(data).__name__}")
    return data


class YamlSettingsSource(_pydantic_settings.PydanticBaseSettingsSource):
    """
    Settings source that loads from layered YAML config files.

    Layers (lowest to highest precedence):
    1. User config (~/.config/bramble/config.yaml)
    2. Project config (.bramble/config.yaml)
    """

    def __init__(
        self,
        settings_cls: type[_pydantic_settings.BaseSettings],
        project_root: _pathlib.Path | None = None,
        *,
        user_config: _pathlib.Path | None = None,
    ) -> None:
        """
        Initialize the settings source.

        Args:
            settings_cls: The Settings class being populated.
            project_root: Optional project root for project-level config.
            user_config: Override path for the user config file (for
                testing). Defaults to `user_config_path()`.
        """
        super().__init__(settings_cls)
        self._project_root = project_root
        self._user_config = user_config
        self._loaded_layers: list[tuple[str, _pathlib.Path]] = []
        self._data = self._load_config_layers()

    def _load_config_layers(self) -> dict[str, _typing.Any]:
        merged: dict[str, _typing.Any] = {}
        for name, path in self.get_layer_paths():
            if not path.exists():
                continue
            content = load_yaml_file(path)
            if content:
                merged = deep_merge(merged, content)
                self._loaded_layers.append((name, path))
        return merged

    def get_layer_paths(self) -> list[tuple[str, _pathlib.Path]]:
        """All config layers in ascending precedence order."""
        layers = [("user", self._user_config or user_config_path())]
        if self._project_root is not None:
            layers.append(("project", self._project_root / PROJECT_CONFIG))
        return layers

    def get_loaded_layers(self) -> list[tuple[str, _pathlib.Path]]:
        """Layers that existed and contributed values."""
        return list(self._loaded_layers)

    def get_field_value(
        self,
        field: _pydantic_fields.FieldInfo,
        field_name: str,
    ) -> tuple[_typing.Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, isinstance(value, dict)

    def __call__(self) -> dict[str, _typing.Any]:
        return dict(self._data)
