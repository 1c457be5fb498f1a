"""Semantic versions: Version, parse_version, latest_version."""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass

from pluginkit.core.errors import InvalidArgumentError, VersionParseError

_SEGMENT_RE = re.compile(r"[0-9]+")


@dataclass(frozen=True, order=True)
class Version:
    """A ``major.minor.patch`` triple, ordered lexicographically."""

    major: int
    minor: int
    patch: int

    def __str__(self) -> str:
        return f"{self.major}.{self.minor}.{self.patch}"

    @classmethod
    def parse(cls, text: str) -> Version:
        return parse_version(text)


def parse_version(text: str) -> Version:
    """Parse *text* into a Version or raise VersionParseError.

    Exactly three dot-separated runs of ASCII digits are accepted. Leading
    zeros are read as decimal, so ``"01.2.3"`` is ``1.2.3``.
    """
    segments = text.split(".")
    if len(segments) != 3:
        raise VersionParseError("wrong segment count", text)
    numbers: list[int] = []
    for position, segment in enumerate(segments):
        # int() alone would accept "-1", "+1", " 1" and non-ASCII digits
        if not _SEGMENT_RE.fullmatch(segment):
            raise VersionParseError("non-numeric component", text, segment, position)
        numbers.append(int(segment))
    return Version(*numbers)


def try_parse_version(text: str) -> Version | None:
    """Like parse_version, but None for anything that is not a version."""
    try:
        return parse_version(text)
    except VersionParseError:
        return None


def latest_version(versions: Iterable[Version]) -> Version:
    """Return the greatest of *versions*; empty input is a caller bug."""
    versions = list(versions)
    if not versions:
        raise InvalidArgumentError("latest_version() needs at least one version")
    return max(versions)
