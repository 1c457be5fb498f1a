"""Core: config, errors, filesystem and project helpers, download, output."""

from .config import Config, load_config
from .errors import (
    ConfigError,
    DownloadError,
    InvalidArgumentError,
    MirrorError,
    PluginKitError,
    PluginNotFoundError,
    ProjectNotFoundError,
    VersionParseError,
)

__all__ = [
    "Config",
    "ConfigError",
    "DownloadError",
    "InvalidArgumentError",
    "MirrorError",
    "PluginKitError",
    "PluginNotFoundError",
    "ProjectNotFoundError",
    "VersionParseError",
    "load_config",
]
