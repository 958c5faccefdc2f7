"""GraphViz (DOT) rendering of component graphs."""

from __future__ import annotations

from typing import TYPE_CHECKING

from model.dependencies import ReadKind

if TYPE_CHECKING:
    from model.components import GraphSnapshot

DOT_FILENAME = "deptective.dot"

# (kind, subgraph name, edge color, show counts)
_SUBGRAPHS: tuple[tuple[ReadKind, str, str | None, bool], ...] = (
    (ReadKind.ALLOWED, "Allowed", None, False),
    (ReadKind.DISALLOWED, "Disallowed", "red", True),
    (ReadKind.CYCLE, "Cycle", "purple", True),
    (ReadKind.UNKNOWN, "Unknown", "yellow", True),
)


def _subgraph_lines(
    snapshot: GraphSnapshot,
    kind: ReadKind,
    label: str,
    color: str | None,
    show_count: bool,
) -> list[str]:
    edges = snapshot.edges(kind)
    if not edges:
        return []

    lines = [f"  subgraph {label} {{"]
    if color is not None:
        lines.append(f"    edge [color={color}, penwidth=2]")
    for source, target, count in edges:
        edge = f'    "{source}" -> "{target}"'
        if show_count:
            edge += f' [ label=" {count}" ]'
        lines.append(edge + ";")
    lines.append("  }")
    return lines


class DotSerializer:
    """Renders a snapshot as a directed graph, one subgraph per read kind."""

    name = "dot"
    filename = DOT_FILENAME

    def serialize(self, snapshot: GraphSnapshot) -> str:
        lines = ['digraph "package dependencies"', "{"]
        lines.extend(f'  "{package}";' for package in snapshot.packages)
        for kind, label, color, show_count in _SUBGRAPHS:
            lines.extend(_subgraph_lines(snapshot, kind, label, color, show_count))
        lines.append("}")
        return "\n".join(lines)


__all__ = ["DOT_FILENAME", "DotSerializer"]
