"""Domain records for the road network.

Topology records are frozen dataclasses with slots: once the loader
has built a graph nothing in the core mutates it. The only mutable
record is ``Highlights``, a side map used by exporters to emphasise a
computed route without touching the topology it refers to.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional

from .errors import EmptyGraphError, GraphIntegrityError


class DistanceMetric(Enum):
    """How the distance between two positions is measured.

    HAVERSINE treats positions as latitude/longitude in decimal degrees
    and yields metres along a spherical Earth. EUCLIDEAN is the plain
    Pythagorean distance on the raw coordinate values, for positions
    that already live in a flat plotting space.
    """

    HAVERSINE = "haversine"
    EUCLIDEAN = "euclidean"


@dataclass(frozen=True, slots=True)
class Vertex:
    """A road network vertex, identified by its token in the source map."""

    id: str


@dataclass(frozen=True, slots=True)
class Edge:
    """A road segment between two vertices.

    Attributes:
        v1: Identifier of the first endpoint
        v2: Identifier of the second endpoint
        speed: Speed limit in km/h
        one_way: When set, the segment is traversable from v1 to v2 only
    """

    v1: str
    v2: str
    speed: float
    one_way: bool = False

    def __post_init__(self) -> None:
        """Reject speeds that would make travel time negative or infinite."""
        if not self.speed > 0 or math.isinf(self.speed):
            raise ValueError(
                f"Speed must be a finite positive number, got {self.speed}"
            )


@dataclass(frozen=True, slots=True)
class GeoVertex:
    """A vertex with its geographic and plot-space position.

    Attributes:
        id: Vertex identifier
        lat: Latitude in decimal degrees
        lon: Longitude in decimal degrees
        x: Optional horizontal plot coordinate used by exporters
        y: Optional vertical plot coordinate used by exporters
    """

    id: str
    lat: float
    lon: float
    x: Optional[float] = None
    y: Optional[float] = None

    @property
    def plot_position(self) -> tuple[float, float]:
        """Plot coordinates, falling back to (lon, lat) when unset."""
        x = self.lon if self.x is None else self.x
        y = self.lat if self.y is None else self.y
        return x, y


@dataclass(frozen=True, slots=True)
class GeoEdge:
    """An edge together with its two positioned endpoints."""

    edge: Edge
    v1: GeoVertex
    v2: GeoVertex

    def joins(self, a: str, b: str) -> bool:
        """Check whether this edge connects ``a`` and ``b`` in either direction."""
        return {self.v1.id, self.v2.id} == {a, b}


@dataclass(frozen=True, slots=True)
class Bounds:
    """Geographic bounding box of a road network."""

    minlon: float
    minlat: float
    maxlon: float
    maxlat: float

    def __post_init__(self) -> None:
        if self.minlon > self.maxlon:
            raise ValueError(
                f"minlon {self.minlon} is greater than maxlon {self.maxlon}"
            )
        if self.minlat > self.maxlat:
            raise ValueError(
                f"minlat {self.minlat} is greater than maxlat {self.maxlat}"
            )

    @classmethod
    def from_vertices(cls, vertices: Iterable[GeoVertex]) -> Bounds:
        """Compute the literal min/max of the given vertex coordinates.

        Raises:
            EmptyGraphError: If no vertices are given.
        """
        points = [(v.lat, v.lon) for v in vertices]
        if not points:
            raise EmptyGraphError("Cannot compute bounds of an empty vertex set")
        lats = [lat for lat, _ in points]
        lons = [lon for _, lon in points]
        return cls(
            minlon=min(lons),
            minlat=min(lats),
            maxlon=max(lons),
            maxlat=max(lats),
        )

    @property
    def scale(self) -> float:
        """Input scale for diagram layout: a tenth of the shorter span."""
        return abs(min(self.maxlon - self.minlon, self.maxlat - self.minlat)) / 10.0

    def as_tuple(self) -> tuple[float, float, float, float]:
        return (self.minlon, self.minlat, self.maxlon, self.maxlat)


@dataclass(frozen=True, slots=True)
class Graph:
    """Plain topology: vertices keyed by identifier and an ordered edge list.

    Raises:
        GraphIntegrityError: If an edge endpoint is not a known vertex.
    """

    vertices: Mapping[str, Vertex]
    edges: tuple[Edge, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        for edge in self.edges:
            for endpoint in (edge.v1, edge.v2):
                if endpoint not in self.vertices:
                    raise GraphIntegrityError(
                        f"Edge {edge.v1}-{edge.v2} references unknown vertex {endpoint}",
                        vertex_id=endpoint,
                    )

    def __len__(self) -> int:
        return len(self.vertices)

    def __contains__(self, vertex_id: object) -> bool:
        return vertex_id in self.vertices


@dataclass(frozen=True, slots=True)
class RouteResult:
    """Result of a fastest-path search.

    An empty path means no route exists; its cost is infinite.

    Attributes:
        path: Ordered tuple of vertex identifiers from source to destination
        total_minutes: Accumulated travel time along the path
    """

    path: tuple[str, ...]
    total_minutes: float

    @classmethod
    def no_path(cls) -> RouteResult:
        return cls(path=(), total_minutes=math.inf)

    @property
    def is_empty(self) -> bool:
        """Check if no route was found."""
        return len(self.path) == 0

    @property
    def num_stops(self) -> int:
        return len(self.path)


@dataclass
class Highlights:
    """Presentation-only emphasis for an export.

    Attributes:
        vertices: Identifiers of emphasised vertices, in insertion order
        edges: Indices into ``RoutingGraph.geo_edges`` of emphasised edges
    """

    vertices: list[str] = field(default_factory=list)
    edges: set[int] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return not self.vertices and not self.edges

    def has_vertex(self, vertex_id: str) -> bool:
        return vertex_id in self.vertices

    def has_edge(self, index: int) -> bool:
        return index in self.edges
