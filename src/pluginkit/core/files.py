"""Filesystem helpers: existence checks, reading, copying, filtered walks."""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import Path

NEW_FILE_PERMISSIONS = 0o644


def file_exists(path: Path | str) -> bool:
    return Path(path).exists()


def dir_exists(path: Path | str) -> bool:
    return Path(path).is_dir()


def subdirectory_exists(root: Path | str, name: str) -> bool:
    return (Path(root) / name).is_dir()


def read_file_contents(path: Path | str) -> str:
    """Read a UTF-8 text file, dropping a leading byte-order mark if present."""
    return Path(path).read_text(encoding="utf-8-sig")


def copy_file(src: Path | str, dest: Path | str) -> None:
    src, dest = Path(src), Path(dest)
    if not src.exists():
        raise FileNotFoundError(f"{src} doesn't exist")
    dest.write_bytes(src.read_bytes())
    os.chmod(dest, NEW_FILE_PERMISSIONS)


def find_files(
    root: Path | str,
    include: Callable[[Path], bool],
    skip_dir: Callable[[Path], bool] | None = None,
) -> list[Path]:
    """Walk *root* and return the files accepted by *include*, sorted.

    Directories for which *skip_dir* returns True are pruned with everything
    beneath them. The root itself is never skipped.
    """
    found: list[Path] = []
    for dirpath, dirnames, filenames in os.walk(root):
        base = Path(dirpath)
        if skip_dir is not None:
            dirnames[:] = [d for d in dirnames if not skip_dir(base / d)]
        found.extend(base / f for f in filenames if include(base / f))
    return sorted(found)
