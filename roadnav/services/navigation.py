"""Navigation service - Main orchestrator.

Ties the load-then-act use cases together: load a map, then export
it, list its vertices, highlight two vertices or compute and highlight
the fastest path between them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from ..adapters.graph.selector import GraphRepositorySelector
from ..adapters.rendering.console_printer import ConsoleVertexPrinter
from ..adapters.rendering.selector import GraphExporterSelector
from ..config import RoutingConfig, get_config
from ..domain.errors import NoRouteFoundError
from ..domain.models import Highlights, RouteResult
from ..graph.routing_graph import RoutingGraph

TRAVEL_TIME_MESSAGE = (
    "Travel between chosen points will take approximately %0.2f minutes."
)


@dataclass
class NavigationService:
    """Main service for the navigation use cases.

    Attributes:
        repositories: Chooses a map loader by input suffix
        exporters: Chooses an exporter by output suffix
        console: Vertex listing printer
        routing: Path search configuration
    """

    repositories: GraphRepositorySelector
    exporters: GraphExporterSelector
    console: ConsoleVertexPrinter = field(default_factory=ConsoleVertexPrinter)
    routing: RoutingConfig = field(default_factory=lambda: get_config().routing)

    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def load(self, map_path: Path) -> RoutingGraph:
        """Load a road network from ``map_path``.

        Raises:
            UnsupportedFormatError: If the file type is not recognised.
            MapFormatError: If the document is malformed.
        """
        self._logger.info("Loading graph", extra={"path": str(map_path)})
        return self.repositories.for_path(map_path).load()

    def export(
        self,
        routing_graph: RoutingGraph,
        output_path: Path,
        highlights: Optional[Highlights] = None,
    ) -> Path:
        return self.exporters.for_path(output_path).export(
            routing_graph, Path(output_path), highlights
        )

    def show_nodes(self, routing_graph: RoutingGraph) -> int:
        """Print every vertex with its coordinates."""
        return self.console.print_vertices(routing_graph)

    def show_nodes_exact(
        self, routing_graph: RoutingGraph, v1_id: str, v2_id: str, output_path: Path
    ) -> Highlights:
        """Export the graph with two named vertices highlighted.

        Raises:
            VertexNotFoundError: If either vertex does not exist.
        """
        highlights = routing_graph.highlight_vertices([v1_id, v2_id])
        self.export(routing_graph, output_path, highlights)
        return highlights

    def show_nodes_nearest(
        self,
        routing_graph: RoutingGraph,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        output_path: Path,
    ) -> Highlights:
        """Export the graph with the vertices nearest two positions highlighted."""
        v1_id = routing_graph.nearest_vertex(lat1, lon1)
        v2_id = routing_graph.nearest_vertex(lat2, lon2)
        self._logger.debug(
            "Nearest vertices resolved", extra={"start": v1_id, "stop": v2_id}
        )
        return self.show_nodes_exact(routing_graph, v1_id, v2_id, output_path)

    def fastest_path(
        self, routing_graph: RoutingGraph, v1_id: str, v2_id: str
    ) -> RouteResult:
        """Compute the fastest path between two named vertices.

        Raises:
            VertexNotFoundError: If either vertex does not exist.
            NoRouteFoundError: If the destination is unreachable.
            RouteTimeoutError: If the configured deadline passes.
        """
        route = routing_graph.shortest_path_vertices(
            v1_id, v2_id, timeout_seconds=self.routing.timeout_seconds
        )
        if route.is_empty:
            raise NoRouteFoundError(
                f"No path from {v1_id} to {v2_id}",
                departure=v1_id,
                arrival=v2_id,
            )
        self._logger.info(
            "Route computed",
            extra={
                "departure": v1_id,
                "arrival": v2_id,
                "stops": route.num_stops,
                "minutes": route.total_minutes,
            },
        )
        return route

    def midist_exact(
        self, routing_graph: RoutingGraph, v1_id: str, v2_id: str, output_path: Path
    ) -> RouteResult:
        """Export the graph with the fastest path between two vertices highlighted."""
        route = self.fastest_path(routing_graph, v1_id, v2_id)
        highlights = routing_graph.highlight_path(route.path)
        self.export(routing_graph, output_path, highlights)
        return route

    def midist_nearest(
        self,
        routing_graph: RoutingGraph,
        lat1: float,
        lon1: float,
        lat2: float,
        lon2: float,
        output_path: Path,
    ) -> RouteResult:
        """Like ``midist_exact`` for the vertices nearest two positions.

        The two endpoints are highlighted as well as the path.
        """
        v1_id = routing_graph.nearest_vertex(lat1, lon1)
        v2_id = routing_graph.nearest_vertex(lat2, lon2)
        route = self.fastest_path(routing_graph, v1_id, v2_id)
        highlights = routing_graph.highlight_path(route.path)
        routing_graph.highlight_vertices([v1_id, v2_id], highlights)
        self.export(routing_graph, output_path, highlights)
        return route

    @staticmethod
    def format_travel_time(minutes: float) -> str:
        return TRAVEL_TIME_MESSAGE % minutes
