"""Plugin install flow: allocate a version directory, mirror files into it."""

from __future__ import annotations

import logging
import shutil
import tarfile
import tempfile
from pathlib import Path
from typing import TYPE_CHECKING

from pluginkit.core.console import print_success
from pluginkit.core.download import download
from pluginkit.core.errors import PluginNotFoundError

from .locator import PluginLocator, version_dir
from .mirror import mirror_dir
from .models import InstallResult
from .properties import PLUGIN_JSON_FILE, plugin_id, plugin_version
from .version import Version, parse_version

if TYPE_CHECKING:
    from pluginkit.core.config import Config

logger = logging.getLogger(__name__)


def _resolve_identity(
    source_dir: Path, name: str | None, version: Version | str | None
) -> tuple[str, Version]:
    props_file = source_dir / PLUGIN_JSON_FILE
    if name is None:
        name = plugin_id(props_file)
    if version is None:
        version = plugin_version(props_file)
    elif isinstance(version, str):
        version = parse_version(version)
    return name, version


def _install_dir(config: Config, name: str, version: Version) -> Path:
    locator = PluginLocator.from_config(config)
    try:
        return locator.locate(name, version)
    except PluginNotFoundError:
        return version_dir(config.user_plugin_dir, name, version)


def install_plugin_from_dir(
    config: Config,
    source_dir: Path,
    name: str | None = None,
    version: Version | str | None = None,
) -> InstallResult:
    """Install (or update in place) a plugin from an unpacked source tree.

    *name* and *version* default to the ``id`` and ``version`` fields of
    ``plugin.json`` in *source_dir*.
    """
    source_dir = source_dir.resolve()
    name, version = _resolve_identity(source_dir, name, version)
    dest = _install_dir(config, name, version)
    logger.info("installing %s %s into %s", name, version, dest)
    result = mirror_dir(source_dir, dest)
    print_success(f"Installed {name} {version} ({len(result)} file(s) updated)")
    return InstallResult(name=name, version=version, path=dest, mirror=result)


def _unpack(archive: Path, dest: Path) -> None:
    # reject members that would land outside dest
    if hasattr(tarfile, "data_filter"):
        shutil.unpack_archive(str(archive), str(dest), filter="data")
    else:
        shutil.unpack_archive(str(archive), str(dest))


def _unpacked_root(unpack_dir: Path) -> Path:
    entries = list(unpack_dir.iterdir())
    if len(entries) == 1 and entries[0].is_dir():
        return entries[0]
    return unpack_dir


def install_plugin_from_archive(
    config: Config,
    archive: Path,
    name: str | None = None,
    version: Version | str | None = None,
) -> InstallResult:
    with tempfile.TemporaryDirectory() as tmp:
        unpack_dir = Path(tmp) / "plugin"
        _unpack(Path(archive), unpack_dir)
        return install_plugin_from_dir(config, _unpacked_root(unpack_dir), name, version)


def install_plugin_from_url(
    config: Config,
    url: str,
    name: str | None = None,
    version: Version | str | None = None,
) -> InstallResult:
    with tempfile.TemporaryDirectory() as tmp:
        archive = download(url, Path(tmp))
        return install_plugin_from_archive(config, archive, name, version)


def uninstall_plugin(config: Config, name: str, version: Version | str | None = None) -> bool:
    """Remove one version of *name*, or all of it. Returns False if absent."""
    locator = PluginLocator.from_config(config)
    root = locator.plugin_root(name)
    if root is None:
        return False
    dest = root / name if version is None else version_dir(root, name, version)
    if not dest.is_dir():
        return False
    shutil.rmtree(dest)
    logger.info("removed %s", dest)
    return True
