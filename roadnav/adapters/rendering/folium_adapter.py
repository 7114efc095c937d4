"""Folium map renderer adapter.

Draws the road network on an interactive HTML map:
- every segment as a thin grey line
- highlighted segments (the computed route) as a thick red line
- highlighted vertices as markers, first green and the others red
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from ...domain.errors import RenderingError
from ...domain.models import Highlights
from ...graph.routing_graph import RoutingGraph


@dataclass
class FoliumMapRenderer:
    """Folium-based interactive map renderer.

    This adapter implements GraphExporterPort using Folium for
    generating interactive HTML maps.
    """

    network_color: str = "gray"
    route_color: str = "red"
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def export(
        self,
        routing_graph: RoutingGraph,
        output_path: Path,
        highlights: Optional[Highlights] = None,
    ) -> Path:
        """Render the network on a map and save it to ``output_path``.

        Raises:
            RenderingError: If the graph is empty or rendering fails.
        """
        output_path = Path(output_path)
        highlights = highlights or Highlights()

        if len(routing_graph) == 0:
            raise RenderingError(
                "Cannot render an empty graph",
                output_path=str(output_path),
                renderer_type="folium",
            )

        self._logger.info(
            "Rendering network map",
            extra={
                "vertices": len(routing_graph),
                "highlighted_edges": len(highlights.edges),
                "output_path": str(output_path),
            },
        )

        try:
            import folium

            bounds = routing_graph.bounds
            center = [
                (bounds.minlat + bounds.maxlat) / 2,
                (bounds.minlon + bounds.maxlon) / 2,
            ]
            m = folium.Map(location=center, zoom_start=13, control_scale=True)

            network: List[List[List[float]]] = []
            route: List[List[List[float]]] = []
            for index, geo_edge in enumerate(routing_graph.geo_edges):
                segment = [
                    [geo_edge.v1.lat, geo_edge.v1.lon],
                    [geo_edge.v2.lat, geo_edge.v2.lon],
                ]
                (route if highlights.has_edge(index) else network).append(segment)

            if network:
                folium.PolyLine(
                    network, color=self.network_color, weight=2, opacity=0.6
                ).add_to(m)
            if route:
                folium.PolyLine(
                    route, color=self.route_color, weight=5, opacity=0.9
                ).add_to(m)

            for i, vid in enumerate(highlights.vertices):
                vertex = routing_graph.get_vertex(vid)
                folium.Marker(
                    location=[vertex.lat, vertex.lon],
                    popup=f"{vid} ({vertex.lat}, {vertex.lon})",
                    tooltip=vid,
                    icon=folium.Icon(color="green" if i == 0 else "red"),
                ).add_to(m)

            m.fit_bounds([[bounds.minlat, bounds.minlon], [bounds.maxlat, bounds.maxlon]])

            output_path.parent.mkdir(parents=True, exist_ok=True)
            m.save(str(output_path))

            self._logger.info(
                "Map rendered successfully",
                extra={"output_path": str(output_path)},
            )

            return output_path

        except ImportError as e:
            raise RenderingError(
                "Folium not installed",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )
        except Exception as e:
            self._logger.error(
                "Map rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Map rendering failed: {e}",
                output_path=str(output_path),
                renderer_type="folium",
                cause=e,
            )
