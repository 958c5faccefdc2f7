"""Findings emitted while validating package references."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ReportingPolicy(str, Enum):
    """Severity a category of findings is reported with."""

    ERROR = "error"
    WARNING = "warning"


@dataclass(frozen=True)
class IllegalDependency:
    from_package: str
    to_package: str
    severity: ReportingPolicy = ReportingPolicy.ERROR
    location: object = None

    def message(self) -> str:
        return (
            f"Package {self.from_package} does not read {self.to_package}, "
            "but references it"
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": "illegal_dependency",
            "from": self.from_package,
            "to": self.to_package,
            "severity": self.severity.value,
            "location": _location_str(self.location),
        }


@dataclass(frozen=True)
class UnconfiguredPackage:
    name: str
    severity: ReportingPolicy = ReportingPolicy.WARNING
    location: object = None

    def message(self) -> str:
        return f"Package {self.name} is not configured"

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": "unconfigured_package",
            "name": self.name,
            "severity": self.severity.value,
            "location": _location_str(self.location),
        }


@dataclass(frozen=True)
class MissingConfiguration:
    reason: str | None = None
    severity: ReportingPolicy = ReportingPolicy.ERROR
    location: object = None

    def message(self) -> str:
        if self.reason:
            return f"No valid dependency configuration: {self.reason}"
        return "No dependency configuration found"

    def to_dict(self) -> dict[str, object]:
        return {
            "kind": "missing_configuration",
            "reason": self.reason,
            "severity": self.severity.value,
            "location": _location_str(self.location),
        }


Finding = IllegalDependency | UnconfiguredPackage | MissingConfiguration


def _location_str(location: object) -> str | None:
    if location is None:
        return None
    return str(location)


__all__ = [
    "Finding",
    "IllegalDependency",
    "MissingConfiguration",
    "ReportingPolicy",
    "UnconfiguredPackage",
]
