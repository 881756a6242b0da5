"""
Configuration for Bramble.

Settings come from constructor arguments, BRAMBLE_* environment variables
and layered YAML files (project .bramble/config.yaml over user
~/.config/bramble/config.yaml).
"""

from bramble.config.settings import Settings, find_project_root
from bramble.config.sources import ConfigFileError, YamlSettingsSource, deep_merge
from bramble.config.types import ConfigBase, LoggingConfig, OutputConfig, RunnerConfig

__all__ = [
    "ConfigBase",
    "ConfigFileError",
    "LoggingConfig",
    "OutputConfig",
    "RunnerConfig",
    "Settings",
    "YamlSettingsSource",
    "deep_merge",
    "find_project_root",
]
