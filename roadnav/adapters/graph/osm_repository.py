"""OSM Graph Repository adapter.

Builds a routing graph from a tagged-way XML document:
- keeps only ways whose road-category tag is in the configured allow-list
- turns consecutive node references into road segments
- drops steps that reference undeclared nodes (logged, never fatal)
- retains the single largest connected component
- computes bounds from the retained vertices only
"""

from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...config import GraphConfig, get_config
from ...domain.errors import EmptyGraphError, MapFormatError
from ...graph.components import largest_component
from ...graph.routing_graph import EdgeRecord, RoutingGraph, VertexRecord


class OSMNode(BaseModel):
    """A ``node`` element; every attribute is required."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class OSMWay(BaseModel):
    """A ``way`` element reduced to its node references and tags."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    refs: Tuple[str, ...] = ()
    tags: Dict[str, str] = Field(default_factory=dict)


def _parse_way(element: ET.Element) -> OSMWay:
    refs: List[str] = []
    tags: Dict[str, str] = {}
    for child in element:
        if child.tag == "nd":
            refs.append(child.attrib["ref"])
        elif child.tag == "tag":
            tags[child.attrib["k"]] = child.attrib["v"]
    return OSMWay(id=element.attrib.get("id", ""), refs=tuple(refs), tags=tags)


@dataclass
class OSMGraphRepository:
    """Graph repository that loads from a tagged-way XML document.

    This adapter implements GraphRepositoryPort.

    Attributes:
        path: Path to the ``.osm``/``.xml`` document
        config: Graph configuration (allow-list, default speed, metric)
    """

    path: Path
    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    _logger: logging.Logger = field(init=False, repr=False)

    _graph: Optional[RoutingGraph] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._logger = logging.getLogger(__name__)

    def load(self) -> RoutingGraph:
        """Load the road network from the document.

        Returns:
            The routing graph restricted to its largest component.

        Raises:
            MapFormatError: If the document is malformed.
            EmptyGraphError: If no allowed way yields a vertex.
        """
        if self._graph is not None:
            return self._graph

        self._logger.debug("Loading map", extra={"path": str(self.path)})

        try:
            root = ET.parse(self.path).getroot()
        except (ET.ParseError, OSError) as e:
            raise MapFormatError(
                f"Failed to parse map document {self.path}",
                file_path=str(self.path),
                cause=e,
            )

        try:
            nodes = self._parse_nodes(root)
            ways = [_parse_way(way) for way in root.iter("way")]
        except KeyError as e:
            raise MapFormatError(
                f"Missing required attribute {e} in {self.path}",
                file_path=str(self.path),
                cause=e,
            )
        except ValidationError as e:
            raise MapFormatError(
                f"Invalid element in {self.path}",
                file_path=str(self.path),
                cause=e,
            )

        graph = self.build(nodes, ways)
        self._graph = graph
        self._logger.info(
            "Map loaded",
            extra={
                "path": str(self.path),
                "vertices": len(graph),
                "edges": len(graph.geo_edges),
            },
        )
        return graph

    def _parse_nodes(self, root: ET.Element) -> Dict[str, OSMNode]:
        nodes: Dict[str, OSMNode] = {}
        for element in root.iter("node"):
            node = OSMNode.model_validate(element.attrib)
            nodes[node.id] = node
        return nodes

    def build(self, nodes: Dict[str, OSMNode], ways: List[OSMWay]) -> RoutingGraph:
        """Assemble the routing graph from parsed nodes and ways.

        Raises:
            EmptyGraphError: If no allowed way yields a vertex.
        """
        allowed = set(self.config.allowed_highways)
        speed = self.config.default_speed_kmh

        positions: Dict[str, OSMNode] = {}
        edges: List[EdgeRecord] = []
        adjacency: Dict[str, List[str]] = {}
        kept_ways = 0
        skipped = 0

        for way in ways:
            category = way.tags.get(self.config.highway_key)
            if category is None or category not in allowed:
                continue
            kept_ways += 1

            for ref in way.refs:
                if ref in nodes:
                    positions.setdefault(ref, nodes[ref])
                    adjacency.setdefault(ref, [])

            for a, b in zip(way.refs, way.refs[1:]):
                if a not in nodes or b not in nodes:
                    skipped += 1
                    continue
                edges.append((a, b, speed, False))
                adjacency[a].append(b)
                adjacency[b].append(a)

        if skipped:
            self._logger.warning(
                "Skipped segments referencing undeclared nodes",
                extra={"path": str(self.path), "skipped": skipped},
            )

        component = set(largest_component(adjacency))
        if not component:
            raise EmptyGraphError(
                f"No routable ways in {self.path} for categories {sorted(allowed)}"
            )

        self._logger.debug(
            "Largest component selected",
            extra={
                "ways": kept_ways,
                "vertices_parsed": len(positions),
                "vertices_kept": len(component),
            },
        )

        vertices: List[VertexRecord] = [
            (vid, node.lat, node.lon, node.lon, node.lat)
            for vid, node in positions.items()
            if vid in component
        ]
        kept_edges = [e for e in edges if e[0] in component and e[1] in component]

        return RoutingGraph.from_records(
            vertices,
            kept_edges,
            metric=self.config.osm_distance_metric,
        )

    def clear_cache(self) -> None:
        """Clear the cached graph."""
        self._graph = None
        self._logger.debug("Graph cache cleared")
