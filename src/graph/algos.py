"""Strongly connected component detection for package graphs."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, Set


def _components(graph: Mapping[str, Set[str]]) -> Iterator[list[str]]:
    """Yield the strongly connected components of ``graph``.

    Iterative Tarjan: each frame on ``path`` holds a node and the iterator
    over its remaining successors, so depth is bounded by memory rather than
    the interpreter's recursion limit. Every successor must be a key.
    """
    order: dict[str, int] = {}
    low: dict[str, int] = {}
    pending: list[str] = []
    pending_set: set[str] = set()

    for start in sorted(graph):
        if start in order:
            continue

        order[start] = low[start] = len(order)
        pending.append(start)
        pending_set.add(start)
        path = [(start, iter(sorted(graph[start])))]

        while path:
            node, successors = path[-1]
            descended = False
            for successor in successors:
                if successor not in order:
                    order[successor] = low[successor] = len(order)
                    pending.append(successor)
                    pending_set.add(successor)
                    path.append((successor, iter(sorted(graph[successor]))))
                    descended = True
                    break
                if successor in pending_set:
                    low[node] = min(low[node], order[successor])
            if descended:
                continue

            path.pop()
            if path:
                parent = path[-1][0]
                low[parent] = min(low[parent], low[node])

            if low[node] == order[node]:
                component: list[str] = []
                while True:
                    member = pending.pop()
                    pending_set.discard(member)
                    component.append(member)
                    if member == node:
                        break
                yield component


def find_cycles(graph: Mapping[str, Set[str]]) -> list[list[str]]:
    """Find the non-trivial strongly connected components of a graph.

    Only nodes that are keys of ``graph`` take part; edges pointing at
    nodes outside the mapping are ignored. Self-loops do not form a cycle.

    Args:
        graph: Mapping of node -> set of nodes it points to

    Returns:
        Sorted list of components, each a sorted list of node names
    """
    restricted = {
        node: {target for target in targets if target in graph and target != node}
        for node, targets in graph.items()
    }
    return sorted(
        sorted(component) for component in _components(restricted) if len(component) > 1
    )


def component_membership(cycles: list[list[str]]) -> dict[str, int]:
    """Map every node in a cycle to the index of its component."""
    return {node: index for index, cycle in enumerate(cycles) for node in cycle}


__all__ = ["component_membership", "find_cycles"]
