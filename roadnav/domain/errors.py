"""Typed domain errors for the road navigator.

Every failure in loading, querying or exporting a road network is
reported through one of these types so that each layer can decide
how to handle it. The command line maps all of them to exit code 1.

All errors inherit from RoadNavError and can optionally wrap a root
cause exception for debugging.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class RoadNavError(Exception):
    """Base error for the road navigator domain.

    Attributes:
        message: Human-readable error description
        cause: Optional underlying exception that caused this error
    """

    message: str
    cause: Optional[Exception] = field(default=None, repr=False)

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message

    def __post_init__(self) -> None:
        super().__init__(self.message)


@dataclass
class MapFormatError(RoadNavError):
    """Input document is malformed or misses required data.

    Raised for unparseable XML or diagram text, missing node attributes
    and bounding boxes that do not hold four numbers. No partial graph
    is ever returned alongside this error.

    Attributes:
        file_path: Path to the offending document if relevant
    """

    file_path: Optional[str] = None


@dataclass
class GraphIntegrityError(RoadNavError):
    """Graph topology violates its invariants.

    Attributes:
        vertex_id: The dangling or mismatched vertex, if a single one
    """

    vertex_id: Optional[str] = None


@dataclass
class EmptyGraphError(RoadNavError):
    """Operation needs at least one vertex but the graph has none."""


@dataclass
class VertexNotFoundError(RoadNavError):
    """Vertex identifier not present in the graph.

    Attributes:
        vertex_id: The identifier that was not found
    """

    vertex_id: str = ""


@dataclass
class NoRouteFoundError(RoadNavError):
    """No path exists between the requested vertices.

    Attributes:
        departure: Source vertex identifier
        arrival: Destination vertex identifier
    """

    departure: str = ""
    arrival: str = ""


@dataclass
class RouteTimeoutError(RoadNavError):
    """Path search exceeded its deadline or was cancelled.

    Attributes:
        timeout_seconds: The configured deadline, None when cancelled
    """

    timeout_seconds: Optional[float] = None


@dataclass
class UnsupportedFormatError(RoadNavError):
    """File type is not handled by any loader or exporter.

    Attributes:
        suffix: The file suffix that was not recognised
    """

    suffix: str = ""


@dataclass
class ConfigurationError(RoadNavError):
    """Invalid or missing configuration.

    Attributes:
        setting_name: Name of the problematic setting
        expected_type: Expected type or format
    """

    setting_name: str = ""
    expected_type: Optional[str] = None


@dataclass
class RenderingError(RoadNavError):
    """Diagram or map export failed.

    Attributes:
        output_path: Path where rendering was attempted
        renderer_type: Type of renderer that failed
    """

    output_path: Optional[str] = None
    renderer_type: str = ""
