"""Diagram-description (DOT) exporter adapter.

Builds a ``pydot`` graph in the layout the importer reads back: node
``comment`` holds ``lat,lon``, ``pos`` holds the plot position, edges
carry ``speed`` and ``oneway`` and the graph carries ``bb``. Highlighted
vertices and edges are drawn in red.

The same graph is either written as DOT text or rendered to an image
(pdf, png) by the Graphviz layout program, neato by default.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import pydot

from ...domain.errors import RenderingError
from ...domain.models import Highlights
from ...graph.routing_graph import RoutingGraph

HIGHLIGHT_COLOR = "red"

# pydot format name for plain DOT text; written without running Graphviz
RAW_FORMAT = "raw"


@dataclass
class DotGraphExporter:
    """Exporter producing a neato-ready diagram or its rendering.

    This adapter implements GraphExporterPort.

    Attributes:
        output_format: ``raw`` for DOT text, otherwise a Graphviz output
            format such as ``pdf`` or ``png``
        prog: Graphviz layout program used for rendered formats
        graph_name: Name of the emitted graph
    """

    output_format: str = RAW_FORMAT
    prog: str = "neato"
    graph_name: str = "G"
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def build(
        self, routing_graph: RoutingGraph, highlights: Optional[Highlights] = None
    ) -> pydot.Dot:
        """Return the pydot graph for ``routing_graph``."""
        highlights = highlights or Highlights()
        bounds = routing_graph.bounds

        dot = pydot.Dot(self.graph_name, graph_type="graph")
        dot.set("layout", "neato")
        dot.set("truecolor", "true")
        dot.set("inputscale", str(bounds.scale))
        dot.set("margin", "0")
        dot.set("bb", ",".join(str(v) for v in bounds.as_tuple()))
        dot.set("outputorder", "nodesfirst")

        for vertex in routing_graph.geo_vertices.values():
            x, y = vertex.plot_position
            node = pydot.Node(
                vertex.id,
                shape="point",
                comment=f"{vertex.lat},{vertex.lon}!",
                pos=f"{x},{y}!",
            )
            if highlights.has_vertex(vertex.id):
                node.set("color", HIGHLIGHT_COLOR)
                node.set("height", "0.2")
                node.set("fontsize", "0")
            dot.add_node(node)

        for index, geo_edge in enumerate(routing_graph.geo_edges):
            edge = geo_edge.edge
            dot_edge = pydot.Edge(
                edge.v1,
                edge.v2,
                arrowhead="none",
                speed=str(edge.speed),
                oneway="true" if edge.one_way else "false",
            )
            if highlights.has_edge(index):
                dot_edge.set("color", HIGHLIGHT_COLOR)
                dot_edge.set("penwidth", "3")
            dot.add_edge(dot_edge)

        return dot

    def render(
        self, routing_graph: RoutingGraph, highlights: Optional[Highlights] = None
    ) -> str:
        """Return the DOT text for ``routing_graph``."""
        return self.build(routing_graph, highlights).to_string()

    def export(
        self,
        routing_graph: RoutingGraph,
        output_path: Path,
        highlights: Optional[Highlights] = None,
    ) -> Path:
        """Write the diagram or its rendering to ``output_path``.

        Raises:
            RenderingError: If the file cannot be written or Graphviz fails.
        """
        output_path = Path(output_path)
        self._logger.info(
            "Exporting diagram",
            extra={
                "vertices": len(routing_graph),
                "format": self.output_format,
                "output_path": str(output_path),
            },
        )

        dot = self.build(routing_graph, highlights)
        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            if self.output_format == RAW_FORMAT:
                dot.write(str(output_path), format=RAW_FORMAT, encoding="utf-8")
            else:
                dot.write(str(output_path), prog=self.prog, format=self.output_format)
        except OSError as e:
            raise RenderingError(
                f"Failed to write diagram: {e}",
                output_path=str(output_path),
                renderer_type=self.output_format,
                cause=e,
            )
        except Exception as e:
            self._logger.error(
                "Diagram rendering failed",
                extra={"error": str(e), "output_path": str(output_path)},
            )
            raise RenderingError(
                f"Diagram rendering failed: {e}",
                output_path=str(output_path),
                renderer_type=self.output_format,
                cause=e,
            )
        return output_path
