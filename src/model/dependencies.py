"""Configured package dependency model.

The model is built once from a configuration and is read-only while
references are validated against it, so a single instance can back several
validation sessions running in parallel.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from graph.algos import component_membership, find_cycles
from rules.config import DEFAULT_BUILTIN_PACKAGE
from rules.patterns import PackagePattern, matches_any

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from rules.config import DeptectiveConfig

logger = logging.getLogger(__name__)


class ReadKind(str, Enum):
    """Classification of an observed package reference."""

    ALLOWED = "allowed"
    DISALLOWED = "disallowed"
    CYCLE = "cycle"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Package:
    name: str
    configured: bool = False
    allowed_reads: frozenset[str] = field(default_factory=frozenset)

    def reads(self, name: str) -> bool:
        return name in self.allowed_reads

    def __str__(self) -> str:
        return self.name


class PackageDependencies:
    """Packages, their allowed reads and the whitelist of exempt packages."""

    def __init__(
        self,
        packages: Mapping[str, Iterable[str]],
        whitelist: Iterable[PackagePattern] = (),
        *,
        builtin_package: str = DEFAULT_BUILTIN_PACKAGE,
    ) -> None:
        self._packages: dict[str, Package] = {
            name: Package(name=name, configured=True, allowed_reads=frozenset(reads))
            for name, reads in packages.items()
        }
        self._whitelist = list(whitelist)
        self._builtin_package = builtin_package
        self._unconfigured: dict[str, Package] = {}
        self._lock = threading.Lock()

        allowed_graph = {
            name: set(package.allowed_reads) for name, package in self._packages.items()
        }
        self._cycles = find_cycles(allowed_graph)
        self._cycle_membership = component_membership(self._cycles)

        if self._cycles:
            logger.debug("Configured dependency cycles: %s", self._cycles)

    @classmethod
    def from_config(cls, config: DeptectiveConfig) -> PackageDependencies:
        return cls(
            {package.name: package.reads for package in config.packages},
            config.whitelist_patterns(),
            builtin_package=config.builtin_package,
        )

    @property
    def builtin_package(self) -> str:
        return self._builtin_package

    @property
    def whitelist(self) -> list[PackagePattern]:
        return list(self._whitelist)

    @property
    def cycles(self) -> list[list[str]]:
        """Non-trivial SCCs of the configured graph, sorted."""
        return [list(cycle) for cycle in self._cycles]

    def configured_packages(self) -> list[Package]:
        return [self._packages[name] for name in sorted(self._packages)]

    def get_package(self, name: str) -> Package:
        """Return the configured package, or a memoized unconfigured one."""
        package = self._packages.get(name)
        if package is not None:
            return package

        with self._lock:
            package = self._unconfigured.get(name)
            if package is None:
                package = Package(name=name)
                self._unconfigured[name] = package
        return package

    def is_configured(self, name: str) -> bool:
        return name in self._packages

    def is_whitelisted(self, name: str) -> bool:
        return matches_any(self._whitelist, name)

    def reads(self, from_name: str, to_name: str) -> bool:
        package = self._packages.get(from_name)
        return package is not None and package.reads(to_name)

    def in_same_cycle(self, from_name: str, to_name: str) -> bool:
        """True when both packages share a cycle of allowed reads."""
        from_component = self._cycle_membership.get(from_name)
        if from_component is None:
            return False
        return self._cycle_membership.get(to_name) == from_component


__all__ = ["Package", "PackageDependencies", "ReadKind"]
