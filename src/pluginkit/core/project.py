"""Project discovery: manifest lookup, project dirs, env property files."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from .errors import ProjectNotFoundError

if TYPE_CHECKING:
    from .config import Config

MANIFEST_FILE = "manifest.json"
ENV_DIRECTORY_NAME = "env"
DEFAULT_ENV_DIR = "default"
DEFAULT_ENV_FILE_NAME = "default.properties"

_MISSING_MANIFEST = f"Failed to find project directory. Missing {MANIFEST_FILE} file."


def find_project_root(start: Path | str) -> Path:
    """Walk upwards from *start* to the nearest directory holding manifest.json."""
    current = Path(start).resolve()
    for candidate in (current, *current.parents):
        if (candidate / MANIFEST_FILE).is_file():
            return candidate
    raise ProjectNotFoundError(_MISSING_MANIFEST)


def project_root(config: Config) -> Path:
    """Project root for the configured working directory."""
    return find_project_root(config.cwd)


def project_root_from_spec_path(spec_path: Path | str) -> Path:
    """Project root for a spec file or directory, independent of the cwd."""
    path = Path(spec_path).resolve()
    start = path if path.is_dir() else path.parent
    return find_project_root(start)


def dir_in_project(name: str, start: Path | str) -> Path:
    root = find_project_root(start)
    path = root / name
    if not path.is_dir():
        raise ProjectNotFoundError(f"Could not find {name} directory. {path} does not exist")
    return path


def default_properties_file(project_root: Path | str) -> Path:
    path = Path(project_root) / ENV_DIRECTORY_NAME / DEFAULT_ENV_DIR / DEFAULT_ENV_FILE_NAME
    if not path.is_file():
        raise ProjectNotFoundError(f"Failed to find default properties file. {path} does not exist")
    return path


@dataclass
class Property:
    name: str
    comment: str
    default_value: str

    def __str__(self) -> str:
        return f"#{self.comment}\n{self.name} = {self.default_value}"


def append_properties(path: Path | str, *properties: Property) -> None:
    """Append each property, in order, to a ``.properties`` file."""
    with Path(path).open("a", encoding="utf-8") as f:
        for prop in properties:
            f.write(f"\n{prop}\n")
