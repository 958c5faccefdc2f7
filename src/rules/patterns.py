"""Wildcard package patterns used for whitelisting."""

from __future__ import annotations

from dataclasses import dataclass
from fnmatch import fnmatchcase

WILDCARD = "*"


@dataclass(frozen=True)
class PackagePattern:
    """A parsed, dot-separated package pattern.

    A segment that is exactly ``*`` matches one or more trailing segments
    when it is the last segment, and exactly one segment otherwise. Any
    other segment is matched against a single segment with fnmatch
    semantics, so ``api*`` matches ``api`` and ``apiv2`` but never crosses
    a dot.
    """

    text: str
    segments: tuple[str, ...]

    @classmethod
    def parse(cls, text: str) -> PackagePattern:
        if not text:
            msg = "package pattern must not be empty"
            raise ValueError(msg)

        segments = tuple(text.split("."))
        if any(not segment for segment in segments):
            msg = f"package pattern '{text}' contains an empty segment"
            raise ValueError(msg)

        return cls(text=text, segments=segments)

    def matches(self, name: str) -> bool:
        if not name:
            return False

        parts = name.split(".")
        last = len(self.segments) - 1

        for index, segment in enumerate(self.segments):
            if index == last and segment == WILDCARD:
                return len(parts) > index
            if index >= len(parts):
                return False
            if segment == WILDCARD:
                continue
            if not fnmatchcase(parts[index], segment):
                return False

        return len(parts) == len(self.segments)

    def __str__(self) -> str:
        return self.text


def matches(pattern: PackagePattern, name: str) -> bool:
    """Return True when ``name`` matches ``pattern``."""
    return pattern.matches(name)


def matches_any(patterns: list[PackagePattern], name: str) -> bool:
    return any(pattern.matches(name) for pattern in patterns)


__all__ = ["WILDCARD", "PackagePattern", "matches", "matches_any"]
