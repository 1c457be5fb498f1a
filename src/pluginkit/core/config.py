"""Configuration: env, home directory, install roots."""

from __future__ import annotations

import json
import os
import sys
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import find_dotenv, load_dotenv

from .errors import ConfigError

PRODUCT_NAME = "pluginkit"
HOME_ENV = "PLUGINKIT_HOME"
PLUGIN_PATH_ENV = "PLUGINKIT_PLUGIN_PATH"
SHARE_PATH_ENV = "PLUGINKIT_SHARE_PATH"

DEFAULT_SHARED_DIRS = (
    Path("/usr/local/share") / PRODUCT_NAME,
    Path("/usr/share") / PRODUCT_NAME,
)


def default_home() -> Path:
    """``$PLUGINKIT_HOME`` if set, else the per-user default for the platform."""
    env_home = os.getenv(HOME_ENV, "").strip()
    if env_home:
        return Path(env_home)
    if sys.platform.startswith("win"):
        return Path(os.getenv("APPDATA", str(Path.home()))) / PRODUCT_NAME
    return Path.home() / f".{PRODUCT_NAME}"


def _split_paths(value: str) -> list[Path]:
    return [Path(p) for p in value.split(os.pathsep) if p.strip()]


@dataclass
class Config:
    home: Path = field(default_factory=default_home)
    cwd: Path = field(default_factory=Path.cwd)
    shared_dirs: list[Path] = field(default_factory=lambda: list(DEFAULT_SHARED_DIRS))
    extra_plugin_roots: list[Path] = field(default_factory=list)

    @property
    def user_plugin_dir(self) -> Path:
        return self.home / "plugins"

    @property
    def plugin_roots(self) -> list[Path]:
        """Install roots in search order: user, extra, then system-wide."""
        roots = [self.user_plugin_dir, *self.extra_plugin_roots]
        roots.extend(d / "plugins" for d in self.shared_dirs)
        return roots

    @property
    def settings_path(self) -> Path:
        return self.home / "settings.json"


def _apply_settings(config: Config, path: Path) -> None:
    """Apply a single settings.json file to config."""
    if not path.exists():
        return
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid JSON in {path}: {e}") from e
    roots = data.get("pluginRoots", [])
    if isinstance(roots, list):
        config.extra_plugin_roots.extend(Path(r) for r in roots if isinstance(r, str) and r)
    shared = data.get("sharedDirs")
    if isinstance(shared, list):
        config.shared_dirs = [Path(d) for d in shared if isinstance(d, str) and d]


def load_config(cwd: Path | None = None) -> Config:
    """Load config with priority: args > env > .env > settings.json > defaults."""
    load_dotenv(find_dotenv(usecwd=True))

    config = Config(home=default_home())
    if cwd is not None:
        config.cwd = cwd

    _apply_settings(config, config.settings_path)

    if plugin_path := os.getenv(PLUGIN_PATH_ENV):
        config.extra_plugin_roots = _split_paths(plugin_path) + config.extra_plugin_roots
    if share_path := os.getenv(SHARE_PATH_ENV):
        config.shared_dirs = _split_paths(share_path)

    return config


def set_env_variable(key: str, value: str) -> None:
    """Set an environment variable; blank values are ignored."""
    if not value.strip():
        return
    try:
        os.environ[key] = value
    except (OSError, ValueError) as e:
        raise ConfigError(f"Failed to set: {key} = {value}. {e}") from e
