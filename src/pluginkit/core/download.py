"""download - Fetch a URL into a directory using wget, curl or urllib."""

from __future__ import annotations

import logging
import shutil
import subprocess
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path

from .errors import DownloadError

logger = logging.getLogger(__name__)


def _target_name(url: str) -> str:
    name = Path(urllib.parse.urlparse(url).path).name
    if not name:
        raise DownloadError(f"cannot derive a file name from {url}")
    return name


def _run(cmd: list[str], target: Path) -> None:
    try:
        subprocess.run(cmd, check=True)
    except (subprocess.CalledProcessError, FileNotFoundError) as e:
        target.unlink(missing_ok=True)
        raise DownloadError(f"{cmd[0]} failed: {e}") from e


def _download_with_urllib(url: str, target: Path) -> None:
    req = urllib.request.Request(url, headers={"User-Agent": "pluginkit/0.1"})
    try:
        with urllib.request.urlopen(req, timeout=60) as resp, target.open("wb") as out:
            shutil.copyfileobj(resp, out)
    except urllib.error.HTTPError as e:
        target.unlink(missing_ok=True)
        raise DownloadError(f"HTTP {e.code} {e.reason}: {url}") from e
    except urllib.error.URLError as e:
        target.unlink(missing_ok=True)
        raise DownloadError(f"{e.reason}: {url}") from e


def download(url: str, target_dir: Path | str) -> Path:
    """Download *url* into *target_dir* and return the written file path.

    No retries; any failure surfaces as DownloadError.
    """
    target_dir = Path(target_dir)
    if not target_dir.is_dir():
        raise DownloadError(f"{target_dir} doesn't exist")
    target = target_dir / _target_name(url)

    if shutil.which("wget"):
        logger.debug("downloading %s with wget", url)
        _run(["wget", "-q", "-O", str(target), url], target)
    elif shutil.which("curl"):
        logger.debug("downloading %s with curl", url)
        _run(["curl", "-fsSL", "-o", str(target), url], target)
    else:
        logger.debug("downloading %s with urllib", url)
        _download_with_urllib(url, target)
    return target
