"""Domain layer - Core records and errors.

This module contains immutable topology records, the presentation
side map and the typed errors used throughout the application.
No external dependencies.
"""

from .errors import (
    ConfigurationError,
    EmptyGraphError,
    GraphIntegrityError,
    MapFormatError,
    NoRouteFoundError,
    RenderingError,
    RoadNavError,
    RouteTimeoutError,
    UnsupportedFormatError,
    VertexNotFoundError,
)
from .models import (
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

__all__ = [
    # Models
    "Vertex",
    "Edge",
    "GeoVertex",
    "GeoEdge",
    "Bounds",
    "Graph",
    "RouteResult",
    "Highlights",
    "DistanceMetric",
    # Errors
    "RoadNavError",
    "MapFormatError",
    "GraphIntegrityError",
    "EmptyGraphError",
    "VertexNotFoundError",
    "NoRouteFoundError",
    "RouteTimeoutError",
    "UnsupportedFormatError",
    "ConfigurationError",
    "RenderingError",
]
