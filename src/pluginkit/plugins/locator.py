"""Find installed plugins and resolve the version directory to use."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

from pluginkit.core.errors import PluginNotFoundError

from .models import PluginInstallation
from .version import Version, latest_version, parse_version, try_parse_version

if TYPE_CHECKING:
    from pluginkit.core.config import Config

logger = logging.getLogger(__name__)


def _subdirs(path: Path) -> list[Path]:
    return sorted((d for d in path.iterdir() if d.is_dir()), key=lambda d: d.name)


def check_plugin_name(name: str) -> str:
    """Return *name* if it is usable as a single directory name, else raise ValueError."""
    seps = {"/", os.sep, os.altsep} - {None}
    if name in ("", ".", "..") or any(s in name for s in seps):
        raise ValueError(f"invalid plugin name: {name!r}")
    return name


def version_dir(root: Path, name: str, version: Version | str) -> Path:
    """``<root>/<name>/<version>``, raising ValueError if it escapes *root*."""
    if isinstance(version, str):
        version = parse_version(version)
    base = root.resolve()
    path = root / check_plugin_name(name) / str(version)
    if base not in path.resolve().parents:
        raise ValueError(f"Path traversal detected: {path} escapes {base}")
    return path


class PluginLocator:
    """Resolves plugins across an ordered list of install roots.

    Layout under every root is ``<root>/<plugin>/<major.minor.patch>/``.
    The first root holding a ``<plugin>`` directory wins; later roots are
    not consulted for that plugin.
    """

    def __init__(self, roots: Iterable[Path | str]) -> None:
        self.roots: list[Path] = [Path(r) for r in roots]

    @classmethod
    def from_config(cls, config: Config) -> PluginLocator:
        return cls(config.plugin_roots)

    def plugin_root(self, name: str) -> Path | None:
        """Return the first root containing a directory for *name*, or None."""
        check_plugin_name(name)
        for root in self.roots:
            if (root / name).is_dir():
                return root
        return None

    def is_installed(self, name: str, version: Version | str | None = None) -> bool:
        root = self.plugin_root(name)
        if root is None:
            return False
        if version is None:
            return True
        return version_dir(root, name, version).is_dir()

    def installed_versions(self, name: str) -> list[Version]:
        """All valid versions of *name* in its winning root, ascending."""
        root = self.plugin_root(name)
        if root is None:
            raise PluginNotFoundError("plugin not installed", name, self.roots)
        return sorted(self._versions_in(root / name))

    def latest_installed(self, name: str) -> Version:
        root = self.plugin_root(name)
        if root is None:
            raise PluginNotFoundError("plugin not installed", name, self.roots)
        return self._latest_in(root, name)

    def locate(self, name: str, version: Version | str | None = None) -> Path:
        """Return the install directory of *name*.

        With an explicit *version* the path is only constructed; whether it
        exists is up to the caller. Otherwise the latest valid version
        directory is chosen. Names that are not a single path component
        raise ValueError.
        """
        root = self.plugin_root(name)
        if root is None:
            raise PluginNotFoundError("plugin not installed", name, self.roots)
        if version is not None:
            return version_dir(root, name, version)
        return version_dir(root, name, self._latest_in(root, name))

    def installed_plugins(self) -> list[PluginInstallation]:
        """Every installed plugin at its overall-latest version, sorted by name."""
        found: dict[str, PluginInstallation] = {}
        for root in self.roots:
            if not root.is_dir():
                continue
            for plugin_dir in _subdirs(root):
                versions = self._versions_in(plugin_dir)
                if not versions:
                    logger.debug("skipping %s: no valid versions", plugin_dir)
                    continue
                candidate = PluginInstallation(plugin_dir.name, latest_version(versions), root)
                current = found.get(candidate.name)
                if current is None or candidate.version > current.version:
                    found[candidate.name] = candidate
        return [found[name] for name in sorted(found)]

    def _latest_in(self, root: Path, name: str) -> Version:
        versions = self._versions_in(root / name)
        if not versions:
            raise PluginNotFoundError("no valid versions found", name, root)
        return latest_version(versions)

    @staticmethod
    def _versions_in(plugin_dir: Path) -> list[Version]:
        versions: list[Version] = []
        for d in _subdirs(plugin_dir):
            v = try_parse_version(d.name)
            if v is None:
                logger.debug("ignoring non-version directory %s", d)
                continue
            versions.append(v)
        return versions
