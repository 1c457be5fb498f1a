"""Lookups in the system-wide share directories (languages, skeletons, plugins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .config import Config


def _first_existing(config: Config, *parts: str) -> Path | None:
    for share in config.shared_dirs:
        candidate = share.joinpath(*parts)
        if candidate.exists():
            return candidate
    return None


def language_json_path(config: Config, language: str) -> Path:
    path = _first_existing(config, "languages", f"{language}.json")
    if path is None:
        raise FileNotFoundError(f"Failed to find the implementation for: {language}")
    return path


def is_supported_language(config: Config, language: str) -> bool:
    return _first_existing(config, "languages", f"{language}.json") is not None


def skeleton_file_path(config: Config, filename: str) -> Path:
    path = _first_existing(config, "skel", filename)
    if path is None:
        raise FileNotFoundError(f"Failed to find the skeleton file: {filename}")
    return path


def plugins_path(config: Config) -> Path:
    for share in config.shared_dirs:
        if (share / "plugins").is_dir():
            return share / "plugins"
    raise FileNotFoundError("Failed to find the plugins directory")
