"""Exception hierarchy shared by every pluginkit module."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class PluginKitError(Exception):
    """Base class for all pluginkit errors."""


class ConfigError(PluginKitError):
    pass


class VersionParseError(PluginKitError, ValueError):
    """Raised when a string is not a canonical ``major.minor.patch`` version."""

    def __init__(
        self,
        reason: str,
        text: str,
        segment: str | None = None,
        position: int | None = None,
    ) -> None:
        self.reason = reason
        self.text = text
        self.segment = segment
        self.position = position
        if segment is None:
            msg = f"{reason}: {text!r}"
        else:
            msg = f"{reason}: {segment!r} at position {position} in {text!r}"
        super().__init__(msg)


class InvalidArgumentError(PluginKitError, ValueError):
    pass


class PluginNotFoundError(PluginKitError, LookupError):
    """A plugin, or any valid version of it, is absent from the install roots."""

    def __init__(self, reason: str, plugin_name: str, roots: Path | Sequence[Path]) -> None:
        self.reason = reason
        self.plugin_name = plugin_name
        self.roots = [roots] if isinstance(roots, Path) else list(roots)
        searched = ", ".join(str(r) for r in self.roots) or "<no roots>"
        super().__init__(f"{reason}: {plugin_name} (searched {searched})")


class MirrorError(PluginKitError):
    pass


class ProjectNotFoundError(PluginKitError):
    pass


class DownloadError(PluginKitError):
    pass
