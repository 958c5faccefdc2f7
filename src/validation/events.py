"""Events delivered by a reference driver to sessions and collectors."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SourceLocation:
    path: str
    line: int | None = None

    def __str__(self) -> str:
        if self.line is None:
            return self.path
        return f"{self.path}:{self.line}"


@dataclass(frozen=True)
class EnterPackage:
    """Subsequent references originate from package ``name``."""

    name: str
    location: object = None


@dataclass(frozen=True)
class ObserveReference:
    """The current package references package ``to``."""

    to: str
    location: object = None


Event = EnterPackage | ObserveReference


__all__ = ["EnterPackage", "Event", "ObserveReference", "SourceLocation"]
