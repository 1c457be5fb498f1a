"""Incremental one-way copy of a directory tree.

Files whose destination already matches the source on executable bit, size
and whole-second mtime are left alone, so mirroring an unchanged tree twice
writes nothing the second time. The destination is assumed to be owned by
the caller for the duration of the call.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
from dataclasses import dataclass, field
from pathlib import Path

from pluginkit.core.errors import MirrorError

logger = logging.getLogger(__name__)

NEW_DIRECTORY_PERMISSIONS = 0o755

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


@dataclass
class MirrorResult:
    """Relative paths (POSIX style) written by one mirror_dir call, in walk order."""

    written: list[str] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.written)

    def __iter__(self):
        return iter(self.written)


def _is_unmodified(src_st: os.stat_result, dst: Path) -> bool:
    try:
        dst_st = dst.lstat()
    except FileNotFoundError:
        return False
    if not stat.S_ISREG(dst_st.st_mode):
        return False
    return (
        bool(src_st.st_mode & _EXEC_BITS) == bool(dst_st.st_mode & _EXEC_BITS)
        and src_st.st_size == dst_st.st_size
        and src_st.st_mtime_ns // 1_000_000_000 == dst_st.st_mtime_ns // 1_000_000_000
    )


def _copy_file(src: Path, src_st: os.stat_result, dst: Path) -> None:
    dst.parent.mkdir(mode=NEW_DIRECTORY_PERMISSIONS, parents=True, exist_ok=True)
    try:
        dst_st = dst.lstat()
    except FileNotFoundError:
        dst_st = None
    if dst_st is not None and not stat.S_ISREG(dst_st.st_mode):
        # replace links instead of writing through them
        dst.unlink()
    elif dst_st is not None and not os.access(dst, os.W_OK):
        # a previous mirror may have copied read-only permissions
        dst.chmod(stat.S_IMODE(dst_st.st_mode) | stat.S_IWUSR)
    shutil.copyfile(src, dst)
    os.chmod(dst, stat.S_IMODE(src_st.st_mode))
    os.utime(dst, ns=(src_st.st_atime_ns, src_st.st_mtime_ns))


def _walk(src_dir: Path, dst_dir: Path, rel: Path, result: MirrorResult) -> None:
    for entry in sorted(src_dir.iterdir(), key=lambda p: p.name):
        st = entry.lstat()
        rel_path = rel / entry.name
        if stat.S_ISDIR(st.st_mode):
            _walk(entry, dst_dir, rel_path, result)
        elif stat.S_ISREG(st.st_mode):
            target = dst_dir / rel_path
            if _is_unmodified(st, target):
                continue
            _copy_file(entry, st, target)
            logger.debug("mirrored %s", rel_path.as_posix())
            result.written.append(rel_path.as_posix())
        else:
            raise MirrorError(f"cannot mirror {entry}: not a regular file or directory")


def mirror_dir(src_dir: Path | str, dst_dir: Path | str) -> MirrorResult:
    """Copy every changed regular file under *src_dir* into *dst_dir*.

    Permission bits and mtime of each written file are set to the source's.
    Symlinks, devices and other non-regular entries raise MirrorError.
    Filesystem errors propagate as OSError; whatever was written before the
    failure stays in place, and re-running completes the remaining copies.
    """
    src_dir = Path(src_dir)
    dst_dir = Path(dst_dir)
    result = MirrorResult()
    _walk(src_dir, dst_dir, Path(), result)
    logger.debug("mirror %s -> %s: %d file(s) written", src_dir, dst_dir, len(result))
    return result
