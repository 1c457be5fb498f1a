"""Plugins: versions, location across install roots, mirroring, install flow."""

from .install import (
    install_plugin_from_archive,
    install_plugin_from_dir,
    install_plugin_from_url,
    uninstall_plugin,
)
from .locator import PluginLocator
from .mirror import MirrorResult, mirror_dir
from .models import InstallResult, PluginInstallation
from .version import Version, latest_version, parse_version, try_parse_version

__all__ = [
    "InstallResult",
    "MirrorResult",
    "PluginInstallation",
    "PluginLocator",
    "Version",
    "install_plugin_from_archive",
    "install_plugin_from_dir",
    "install_plugin_from_url",
    "latest_version",
    "mirror_dir",
    "parse_version",
    "try_parse_version",
    "uninstall_plugin",
]
