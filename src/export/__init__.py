"""Serializers for component graph snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from export.dot import DOT_FILENAME, DotSerializer
from export.json_config import JsonConfigSerializer, build_config

if TYPE_CHECKING:
    from model.components import GraphSnapshot


class ModelSerializer(Protocol):
    name: str
    filename: str

    def serialize(self, snapshot: GraphSnapshot) -> str: ...


SERIALIZERS: dict[str, type[ModelSerializer]] = {
    DotSerializer.name: DotSerializer,
    JsonConfigSerializer.name: JsonConfigSerializer,
}


def get_serializer(name: str) -> ModelSerializer:
    try:
        return SERIALIZERS[name]()
    except KeyError:
        msg = f"Unknown serializer '{name}'. Valid: {', '.join(sorted(SERIALIZERS))}"
        raise ValueError(msg) from None


__all__ = [
    "DOT_FILENAME",
    "SERIALIZERS",
    "DotSerializer",
    "JsonConfigSerializer",
    "ModelSerializer",
    "build_config",
    "get_serializer",
]
