"""Console listing of vertices."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Iterator, TextIO

from ...graph.routing_graph import RoutingGraph


@dataclass
class ConsoleVertexPrinter:
    """Prints one ``<id> : <lat>, <lon>`` line per vertex."""

    stream: TextIO = field(default_factory=lambda: sys.stdout)

    def lines(self, routing_graph: RoutingGraph) -> Iterator[str]:
        for vertex in routing_graph.geo_vertices.values():
            yield f"{vertex.id} : {vertex.lat}, {vertex.lon}"

    def print_vertices(self, routing_graph: RoutingGraph) -> int:
        """Write the listing and return the number of vertices printed."""
        count = 0
        for line in self.lines(routing_graph):
            print(line, file=self.stream)
            count += 1
        return count
