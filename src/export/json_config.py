"""Configuration proposal derived from an observed component graph."""

from __future__ import annotations

from typing import TYPE_CHECKING

import orjson

from rules.config import JSON_CONFIG_FILENAME, DeptectiveConfig, PackageDef

if TYPE_CHECKING:
    from model.components import GraphSnapshot


def build_config(snapshot: GraphSnapshot) -> DeptectiveConfig:
    """Declare every source package as reading what it was seen to read."""
    reads: dict[str, set[str]] = {name: set() for name in snapshot.sources()}
    for per_kind in snapshot.reads.values():
        for source, targets in per_kind.items():
            reads[source].update(target for target, _count in targets)

    return DeptectiveConfig(
        packages=[
            PackageDef(name=name, reads=sorted(reads[name])) for name in sorted(reads)
        ],
        whitelisted=list(snapshot.whitelisted),
    )


class JsonConfigSerializer:
    """Writes the observed graph as a deptective.json configuration."""

    name = "json"
    filename = JSON_CONFIG_FILENAME

    def serialize(self, snapshot: GraphSnapshot) -> str:
        config = build_config(snapshot)
        payload = config.model_dump(include={"packages", "whitelisted"})
        opts = orjson.OPT_SORT_KEYS | orjson.OPT_INDENT_2
        return orjson.dumps(payload, option=opts).decode("utf-8")


__all__ = ["JsonConfigSerializer", "build_config"]
