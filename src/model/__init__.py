"""Package dependency model and component graph."""

from model.components import (
    Component,
    GraphAggregator,
    GraphSnapshot,
    ReadCounter,
    merge_snapshots,
)
from model.dependencies import Package, PackageDependencies, ReadKind

__all__ = [
    "Component",
    "GraphAggregator",
    "GraphSnapshot",
    "Package",
    "PackageDependencies",
    "ReadCounter",
    "ReadKind",
    "merge_snapshots",
]
