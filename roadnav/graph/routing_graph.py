"""Routing graph: topology, positions and fastest-path queries.

A ``RoutingGraph`` owns the plain ``Graph``, the positioned vertices and
edges, the bounding box and the distance metric chosen for its
coordinate space. Topology is read-only after construction, so
independent queries may run concurrently; the weighted adjacency index
is built once on first use.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

from ..domain.errors import EmptyGraphError, GraphIntegrityError, VertexNotFoundError
from ..domain.models import (
    Bounds,
    DistanceMetric,
    Edge,
    GeoEdge,
    GeoVertex,
    Graph,
    Highlights,
    RouteResult,
    Vertex,
)
from .dijkstra import WeightedAdjacency, dijkstra
from .distance import distance, travel_time

VertexRecord = Tuple[str, float, float, Optional[float], Optional[float]]
EdgeRecord = Tuple[str, str, float, bool]
BoundsRecord = Tuple[float, float, float, float]


@dataclass
class RoutingGraph:
    """Road network ready for nearest-vertex and fastest-path queries.

    Attributes:
        graph: Plain topology
        geo_vertices: Vertex identifier -> positioned vertex
        geo_edges: Edges with their positioned endpoints, in graph order
        bounds: Bounding box of the network
        metric: Distance metric matching the coordinate space
    """

    graph: Graph
    geo_vertices: Mapping[str, GeoVertex]
    geo_edges: Tuple[GeoEdge, ...]
    bounds: Bounds
    metric: DistanceMetric = DistanceMetric.HAVERSINE

    _adjacency: Optional[Dict[str, List[Tuple[str, float]]]] = field(
        default=None, init=False, repr=False
    )
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        if set(self.graph.vertices) != set(self.geo_vertices):
            missing = set(self.graph.vertices) ^ set(self.geo_vertices)
            raise GraphIntegrityError(
                f"Vertex and position key sets differ on {len(missing)} id(s)",
                vertex_id=sorted(missing)[0],
            )

    @classmethod
    def from_records(
        cls,
        vertices: Iterable[VertexRecord],
        edges: Iterable[EdgeRecord],
        bounds: Optional[BoundsRecord] = None,
        metric: DistanceMetric = DistanceMetric.HAVERSINE,
    ) -> RoutingGraph:
        """Build a routing graph from plain tuples.

        Args:
            vertices: ``(id, lat, lon, x, y)`` tuples; x and y may be None.
            edges: ``(v1, v2, speed, one_way)`` tuples.
            bounds: ``(minlon, minlat, maxlon, maxlat)``; computed from the
                vertices when omitted.
            metric: Distance metric for the coordinate space.

        Raises:
            GraphIntegrityError: If an edge names an unknown vertex.
        """
        geo_vertices: Dict[str, GeoVertex] = {}
        for vid, lat, lon, x, y in vertices:
            geo_vertices[vid] = GeoVertex(id=vid, lat=lat, lon=lon, x=x, y=y)

        edge_list = [
            Edge(v1=v1, v2=v2, speed=speed, one_way=one_way)
            for v1, v2, speed, one_way in edges
        ]
        graph = Graph(
            vertices={vid: Vertex(vid) for vid in geo_vertices},
            edges=tuple(edge_list),
        )
        geo_edges = tuple(
            GeoEdge(edge=e, v1=geo_vertices[e.v1], v2=geo_vertices[e.v2])
            for e in edge_list
        )
        if bounds is None:
            box = Bounds.from_vertices(geo_vertices.values())
        else:
            box = Bounds(*bounds)
        return cls(
            graph=graph,
            geo_vertices=geo_vertices,
            geo_edges=geo_edges,
            bounds=box,
            metric=metric,
        )

    def to_records(
        self,
    ) -> Tuple[List[VertexRecord], List[EdgeRecord], BoundsRecord]:
        """Present the graph as the plain tuples accepted by ``from_records``."""
        vertices = [(v.id, v.lat, v.lon, v.x, v.y) for v in self.geo_vertices.values()]
        edges = [(e.v1, e.v2, e.speed, e.one_way) for e in self.graph.edges]
        return vertices, edges, self.bounds.as_tuple()

    def __len__(self) -> int:
        return len(self.geo_vertices)

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self.geo_vertices

    def get_vertex(self, vertex_id: str) -> GeoVertex:
        """Return a positioned vertex, failing loudly when it does not exist.

        Raises:
            VertexNotFoundError: If ``vertex_id`` is not in the graph.
        """
        try:
            return self.geo_vertices[vertex_id]
        except KeyError:
            raise VertexNotFoundError(
                f"Vertex with id {vertex_id} does not exist",
                vertex_id=vertex_id,
            ) from None

    def distance_positions(
        self, lat1: float, lon1: float, lat2: float, lon2: float
    ) -> float:
        return distance(self.metric, lat1, lon1, lat2, lon2)

    def distance_vertices(self, v1_id: str, v2_id: str) -> float:
        a = self.get_vertex(v1_id)
        b = self.get_vertex(v2_id)
        return self.distance_positions(a.lat, a.lon, b.lat, b.lon)

    def travel_time(self, v1_id: str, v2_id: str, speed: float) -> float:
        """Travel time between two vertices; minutes under the haversine metric."""
        return travel_time(
            self.metric, self.get_vertex(v1_id), self.get_vertex(v2_id), speed
        )

    def nearest_vertex(self, lat: float, lon: float) -> str:
        """Return the identifier of the vertex closest to ``(lat, lon)``.

        Linear scan; ties go to the vertex encountered first.

        Raises:
            EmptyGraphError: If the graph has no vertices.
        """
        nearest: Optional[str] = None
        best = float("inf")
        for v in self.geo_vertices.values():
            d = self.distance_positions(v.lat, v.lon, lat, lon)
            if nearest is None or d < best:
                nearest, best = v.id, d

        if nearest is None:
            raise EmptyGraphError("Nearest-vertex lookup on an empty graph")
        return nearest

    def adjacency(self) -> WeightedAdjacency:
        """Weighted adjacency index, built once on first use.

        One-way edges contribute the v1 -> v2 direction only.
        """
        if self._adjacency is not None:
            return self._adjacency

        with self._lock:
            if self._adjacency is None:
                adjacency: Dict[str, List[Tuple[str, float]]] = {
                    vid: [] for vid in self.geo_vertices
                }
                for geo_edge in self.geo_edges:
                    edge = geo_edge.edge
                    weight = travel_time(
                        self.metric, geo_edge.v1, geo_edge.v2, edge.speed
                    )
                    adjacency[edge.v1].append((edge.v2, weight))
                    if not edge.one_way:
                        adjacency[edge.v2].append((edge.v1, weight))
                self._adjacency = adjacency
                self._logger.debug(
                    "Adjacency index built",
                    extra={"vertices": len(adjacency), "edges": len(self.geo_edges)},
                )
        return self._adjacency

    def shortest_path_vertices(
        self,
        v1_id: str,
        v2_id: str,
        *,
        timeout_seconds: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> RouteResult:
        """Find the fastest path between two named vertices.

        Returns:
            RouteResult; empty with infinite cost when no path exists.

        Raises:
            VertexNotFoundError: If either identifier is unknown.
            RouteTimeoutError: If the search is cancelled or times out.
        """
        self.get_vertex(v1_id)
        self.get_vertex(v2_id)

        path, cost = dijkstra(
            self.adjacency(),
            v1_id,
            v2_id,
            timeout_seconds=timeout_seconds,
            cancel_event=cancel_event,
        )
        if not path:
            self._logger.info(
                "No route found", extra={"departure": v1_id, "arrival": v2_id}
            )
            return RouteResult.no_path()
        return RouteResult(path=tuple(path), total_minutes=cost)

    def shortest_path_positions(
        self,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        *,
        timeout_seconds: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> RouteResult:
        """Find the fastest path between the vertices nearest two positions."""
        return self.shortest_path_vertices(
            self.nearest_vertex(lat1, lon1),
            self.nearest_vertex(lat2, lon2),
            timeout_seconds=timeout_seconds,
            cancel_event=cancel_event,
        )

    def edge_index_between(self, a: str, b: str) -> Optional[int]:
        """Index of the first edge joining ``a`` and ``b`` in either direction."""
        for index, geo_edge in enumerate(self.geo_edges):
            if geo_edge.joins(a, b):
                return index
        return None

    def highlight_vertices(
        self, vertex_ids: Iterable[str], highlights: Optional[Highlights] = None
    ) -> Highlights:
        """Mark vertices for emphasis on export.

        Raises:
            VertexNotFoundError: If any identifier is unknown.
        """
        highlights = highlights if highlights is not None else Highlights()
        for vid in vertex_ids:
            self.get_vertex(vid)
            if not highlights.has_vertex(vid):
                highlights.vertices.append(vid)
        return highlights

    def highlight_path(
        self, path: Sequence[str], highlights: Optional[Highlights] = None
    ) -> Highlights:
        """Mark the edges along ``path`` for emphasis on export.

        Raises:
            GraphIntegrityError: If two consecutive vertices share no edge.
        """
        highlights = highlights if highlights is not None else Highlights()
        for a, b in zip(path, path[1:]):
            index = self.edge_index_between(a, b)
            if index is None:
                raise GraphIntegrityError(
                    f"No edge joins {a} and {b}", vertex_id=a
                )
            highlights.edges.add(index)
        return highlights
