"""Connected-component analysis over an undirected adjacency mapping.

Road extracts are often made of disjoint islands. The loader keeps only
the largest one so that every pair of retained vertices is connected.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

Adjacency = Mapping[str, Iterable[str]]


def connected_components(adjacency: Adjacency) -> List[List[str]]:
    """Partition the vertices of ``adjacency`` into connected components.

    Uses an explicit stack, so component size is not bounded by the
    interpreter recursion limit. Components are discovered in the
    iteration order of ``adjacency``, so the result is deterministic for
    a deterministically built mapping.

    Neighbours that are not keys of ``adjacency`` are still visited and
    assigned to a component.

    Args:
        adjacency: Vertex identifier -> neighbour identifiers.

    Returns:
        list[list[str]]: Every vertex exactly once, grouped by component.
    """
    visited: set[str] = set()
    components: List[List[str]] = []

    for root in adjacency:
        if root in visited:
            continue

        component: List[str] = []
        stack = [root]
        visited.add(root)
        while stack:
            vertex = stack.pop()
            component.append(vertex)
            for neighbor in reversed(list(adjacency.get(vertex, ()))):
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append(neighbor)

        components.append(component)

    return components


def largest_component(adjacency: Adjacency) -> List[str]:
    """Return the component with the most vertices.

    Ties go to the component discovered first. An empty adjacency
    yields an empty list.
    """
    components = connected_components(adjacency)
    if not components:
        return []
    return max(components, key=len)


def undirected_adjacency(pairs: Iterable[tuple[str, str]]) -> Dict[str, List[str]]:
    """Build a symmetric adjacency mapping from vertex pairs."""
    adjacency: Dict[str, List[str]] = {}
    for a, b in pairs:
        adjacency.setdefault(a, []).append(b)
        adjacency.setdefault(b, []).append(a)
    return adjacency
