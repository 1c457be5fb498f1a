"""Plugin data models: PluginInstallation, InstallResult."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

from .mirror import MirrorResult
from .version import Version


@dataclass(frozen=True)
class PluginInstallation:
    """One plugin resolved to a single version directory under an install root."""

    name: str
    version: Version
    root: Path

    @property
    def path(self) -> Path:
        return self.root / self.name / str(self.version)


@dataclass
class InstallResult:
    """Outcome of an install: where the plugin went and which files changed."""

    name: str
    version: Version
    path: Path
    mirror: MirrorResult = field(default_factory=MirrorResult)

    @property
    def updated_count(self) -> int:
        return len(self.mirror)
