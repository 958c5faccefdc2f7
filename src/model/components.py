"""Aggregation of observed reads into a per-package component graph."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from model.dependencies import ReadKind

if TYPE_CHECKING:
    from collections.abc import Mapping

    from rules.patterns import PackagePattern

logger = logging.getLogger(__name__)


@dataclass
class ReadCounter:
    kind: ReadKind
    count: int = 0

    def increment(self, by: int = 1) -> None:
        self.count += by


@dataclass
class Component:
    """A source package and the packages it was observed to read."""

    name: str
    reads: dict[str, ReadCounter] = field(default_factory=dict)


@dataclass(frozen=True)
class GraphSnapshot:
    """Immutable, deterministically ordered view of a component graph.

    ``reads`` maps each kind to source -> ((target, count), ...); sources and
    targets are sorted by name and kinds without edges map to an empty
    mapping. Both mapping levels are read-only proxies.
    ``components`` holds the source packages, including those without reads.
    """

    packages: tuple[str, ...]
    reads: Mapping[ReadKind, Mapping[str, tuple[tuple[str, int], ...]]]
    whitelisted: tuple[str, ...] = ()
    components: tuple[str, ...] = ()

    def edges(self, kind: ReadKind) -> list[tuple[str, str, int]]:
        return [
            (source, target, count)
            for source, targets in self.reads.get(kind, {}).items()
            for target, count in targets
        ]

    def has_edges(self, kind: ReadKind) -> bool:
        return any(self.reads.get(kind, {}).values())

    def sources(self) -> list[str]:
        names = {source for per_kind in self.reads.values() for source in per_kind}
        names.update(self.components)
        return sorted(names)


class GraphAggregator:
    """Counts reads per (source, target) pair.

    The kind recorded first for a pair is kept; classification is a pure
    function of the model, so later calls for the same pair always agree.
    """

    def __init__(self) -> None:
        self._components: dict[str, Component] = {}
        self._whitelisted: set[str] = set()

    def add_package(self, name: str) -> Component:
        component = self._components.get(name)
        if component is None:
            component = Component(name=name)
            self._components[name] = component
        return component

    def record(
        self, from_name: str, to_name: str, kind: ReadKind, count: int = 1
    ) -> None:
        component = self.add_package(from_name)
        counter = component.reads.get(to_name)
        if counter is None:
            counter = ReadCounter(kind=kind)
            component.reads[to_name] = counter
        elif counter.kind is not kind:
            logger.debug(
                "Keeping kind %s for %s -> %s (got %s)",
                counter.kind.value,
                from_name,
                to_name,
                kind.value,
            )
        counter.increment(count)

    def add_whitelisted_pattern(self, pattern: PackagePattern | str) -> None:
        self._whitelisted.add(str(pattern))

    def components(self) -> list[Component]:
        return [self._components[name] for name in sorted(self._components)]

    def snapshot(self) -> GraphSnapshot:
        packages: set[str] = set()
        reads: dict[ReadKind, dict[str, tuple[tuple[str, int], ...]]] = {
            kind: {} for kind in ReadKind
        }

        for component in self.components():
            packages.add(component.name)
            per_kind: dict[ReadKind, list[tuple[str, int]]] = {}
            for target in sorted(component.reads):
                counter = component.reads[target]
                packages.add(target)
                per_kind.setdefault(counter.kind, []).append((target, counter.count))
            for kind, targets in per_kind.items():
                reads[kind][component.name] = tuple(targets)

        return GraphSnapshot(
            packages=tuple(sorted(packages)),
            reads=MappingProxyType(
                {kind: MappingProxyType(sources) for kind, sources in reads.items()}
            ),
            whitelisted=tuple(sorted(self._whitelisted)),
            components=tuple(sorted(self._components)),
        )


def merge_snapshots(*snapshots: GraphSnapshot) -> GraphSnapshot:
    """Combine snapshots of independent runs into one.

    Counts are summed. A pair classified differently by different runs can
    no longer be attributed to one kind and becomes UNKNOWN.
    """
    counts: dict[tuple[str, str], int] = {}
    kinds: dict[tuple[str, str], ReadKind] = {}
    aggregator = GraphAggregator()

    for snapshot in snapshots:
        for name in snapshot.sources():
            aggregator.add_package(name)
        for pattern in snapshot.whitelisted:
            aggregator.add_whitelisted_pattern(pattern)
        for kind in ReadKind:
            for source, target, count in snapshot.edges(kind):
                pair = (source, target)
                counts[pair] = counts.get(pair, 0) + count
                previous = kinds.get(pair)
                kinds[pair] = kind if previous in (None, kind) else ReadKind.UNKNOWN

    for (source, target), count in sorted(counts.items()):
        aggregator.record(source, target, kinds[(source, target)], count)

    merged = aggregator.snapshot()
    packages = set(merged.packages)
    for snapshot in snapshots:
        packages.update(snapshot.packages)

    return GraphSnapshot(
        packages=tuple(sorted(packages)),
        reads=merged.reads,
        whitelisted=merged.whitelisted,
        components=merged.components,
    )


__all__ = [
    "Component",
    "GraphAggregator",
    "GraphSnapshot",
    "ReadCounter",
    "merge_snapshots",
]
