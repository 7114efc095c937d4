"""Rendering port - Abstraction for presenting a road network.

This protocol defines the contract for exporters, allowing the
diagram-description writer and the Folium map to be used
interchangeably.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..domain.models import Highlights
    from ..graph.routing_graph import RoutingGraph


class GraphExporterPort(Protocol):
    """Port for graph export.

    Implementations:
    - adapters/rendering/dot_exporter.py (DotGraphExporter)
    - adapters/rendering/folium_adapter.py (FoliumMapRenderer)

    Exporters read the routing graph and the highlight side map; they
    never mutate either.
    """

    def export(
        self,
        routing_graph: RoutingGraph,
        output_path: Path,
        highlights: Optional[Highlights] = None,
    ) -> Path:
        """Write the graph to ``output_path``.

        Args:
            routing_graph: The network to export.
            output_path: Where to save the result.
            highlights: Optional vertices and edges to emphasise.

        Returns:
            Path to the generated file.
        """
        ...
