"""Graph ports - Abstractions for loading road networks.

These protocols define the contract between the application core and
the readers of concrete map formats.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from ..graph.routing_graph import RoutingGraph


class GraphRepositoryPort(Protocol):
    """Port for loading a road network.

    Implementations:
    - adapters/graph/osm_repository.py (tagged-way XML documents)
    - adapters/graph/dot_repository.py (diagram-description documents)

    The repository parses its source once and caches the result.
    """

    path: Path

    def load(self) -> RoutingGraph:
        """Load the road network.

        Returns:
            The routing graph; its ``graph`` attribute is the plain topology.
        """
        ...
