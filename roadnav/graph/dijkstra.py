"""Fastest-path computation using Dijkstra's algorithm.

The search runs over a weighted adjacency index where every weight is
a non-negative travel time. It stops as soon as the destination is
settled and never loops on a disconnected destination: once the
frontier is exhausted it reports that no path exists.
"""

import heapq
import threading
import time
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from ..domain.errors import RouteTimeoutError

WeightedAdjacency = Mapping[str, Sequence[Tuple[str, float]]]


def dijkstra(
    adjacency: WeightedAdjacency,
    start: str,
    end: str,
    *,
    timeout_seconds: Optional[float] = None,
    cancel_event: Optional[threading.Event] = None,
) -> Tuple[List[str], float]:
    """Compute the fastest path between two vertices.

    Parameters
    ----------
    adjacency:
        Vertex identifier -> list of ``(neighbor, travel_time)``.
    start:
        Identifier of the source vertex.
    end:
        Identifier of the destination vertex.
    timeout_seconds:
        Optional deadline for the whole search.
    cancel_event:
        Optional event; once set, the search is abandoned.

    Returns
    -------
    list[str], float
        The sequence of vertex identifiers from ``start`` to ``end``
        (inclusive) and the total travel time. If no path exists,
        returns ``([], float("inf"))``.

    Raises
    ------
    RouteTimeoutError
        If the deadline passes or ``cancel_event`` is set mid-search.
    """
    if start not in adjacency or end not in adjacency:
        return [], float("inf")
    if start == end:
        return [start], 0.0

    deadline = None
    if timeout_seconds is not None:
        deadline = time.monotonic() + timeout_seconds

    distances: Dict[str, float] = {vertex: float("inf") for vertex in adjacency}
    previous: Dict[str, str] = {}
    distances[start] = 0.0

    heap: List[Tuple[float, str]] = [(0.0, start)]
    visited: set[str] = set()

    while heap:
        if cancel_event is not None and cancel_event.is_set():
            raise RouteTimeoutError(f"Search from {start} to {end} was cancelled")
        if deadline is not None and time.monotonic() >= deadline:
            raise RouteTimeoutError(
                f"Search from {start} to {end} exceeded {timeout_seconds}s",
                timeout_seconds=timeout_seconds,
            )

        current_distance, u = heapq.heappop(heap)

        if u in visited:
            continue

        visited.add(u)

        if u == end:
            break

        for v, weight in adjacency.get(u, []):
            if v in visited:
                continue
            new_distance = current_distance + weight
            if new_distance < distances.get(v, float("inf")):
                distances[v] = new_distance
                previous[v] = u
                heapq.heappush(heap, (new_distance, v))

    if end not in visited:
        return [], float("inf")

    path: List[str] = []
    current = end
    while current in previous or current == start:
        path.append(current)
        if current == start:
            break
        current = previous[current]

    path.reverse()
    return path, distances[end]
