"""Diagram-description (DOT) Graph Repository adapter.

Imports a road network previously exported by this application:
- every node carries ``comment="lat,lon"`` and optionally ``pos="x,y"``
- edges may carry ``speed`` and ``oneway``
- the graph carries ``bb="minlon,minlat,maxlon,maxlat"``

The document is parsed with ``pydot``. Edges naming undeclared nodes
are skipped and logged, the same policy the tagged-way loader applies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import pydot
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

from ...config import GraphConfig, get_config
from ...domain.errors import MapFormatError
from ...graph.routing_graph import BoundsRecord, EdgeRecord, RoutingGraph, VertexRecord

# Names pydot uses for default attribute statements
_DEFAULT_STATEMENTS = ("node", "edge", "graph")


def _unquote(value: Any) -> str:
    text = str(value)
    if len(text) >= 2 and text[0] == text[-1] == '"':
        text = text[1:-1].replace('\\"', '"')
    return text


def _attributes(element: Any) -> Dict[str, str]:
    return {key: _unquote(value) for key, value in element.get_attributes().items()}


def _split_pair(text: str) -> Tuple[str, str]:
    parts = [p.strip() for p in text.replace("!", "").split(",")]
    if len(parts) < 2:
        raise ValueError(f"expected two comma separated numbers, got {text!r}")
    return parts[0], parts[1]


class DotNodeRecord(BaseModel):
    """A declared node with its geographic and plot positions."""

    model_config = ConfigDict(frozen=True)

    id: str
    lat: float
    lon: float
    x: Optional[float] = None
    y: Optional[float] = None

    @model_validator(mode="before")
    @classmethod
    def _split_positions(cls, data: Any) -> Any:
        if not isinstance(data, dict) or "lat" in data:
            return data
        comment = data.get("comment")
        if comment is None:
            raise ValueError("node has no 'comment' attribute holding lat,lon")
        lat, lon = _split_pair(comment)
        record = {"id": data.get("id"), "lat": lat, "lon": lon}
        pos = data.get("pos")
        if pos is not None:
            record["x"], record["y"] = _split_pair(pos)
        return record


class DotEdgeRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    v1: str
    v2: str
    speed: float = Field(gt=0)
    one_way: bool = False


def parse_bounds(text: str) -> BoundsRecord:
    """Parse ``"minlon,minlat,maxlon,maxlat"``.

    Raises:
        ValueError: If the text does not hold exactly four numbers.
    """
    parts = [p.strip() for p in text.split(",")]
    if len(parts) != 4:
        raise ValueError(f"bounding box needs four values, got {text!r}")
    minlon, minlat, maxlon, maxlat = (float(p) for p in parts)
    return minlon, minlat, maxlon, maxlat


@dataclass
class DotGraphRepository:
    """Graph repository that imports a diagram-description document.

    This adapter implements GraphRepositoryPort. Node positions are the
    geographic ``comment`` values, routed with ``config.dot_metric``.

    Attributes:
        path: Path to the ``.dot``/``.gv`` document
        config: Graph configuration (default speed, metric)
    """

    path: Path
    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    _logger: logging.Logger = field(init=False, repr=False)

    _graph: Optional[RoutingGraph] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        self.path = Path(self.path)
        self._logger = logging.getLogger(__name__)

    def load(self) -> RoutingGraph:
        """Import the road network.

        Raises:
            MapFormatError: If the document or one of its records is malformed.
            EmptyGraphError: If there are no nodes and no bounding box.
        """
        if self._graph is not None:
            return self._graph

        self._logger.debug("Importing diagram", extra={"path": str(self.path)})

        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise MapFormatError(
                f"Failed to read diagram {self.path}",
                file_path=str(self.path),
                cause=e,
            )

        try:
            documents = pydot.graph_from_dot_data(text)
        except Exception as e:
            raise MapFormatError(
                f"Failed to parse diagram {self.path}",
                file_path=str(self.path),
                cause=e,
            )
        if not documents:
            raise MapFormatError(
                f"Failed to parse diagram {self.path}",
                file_path=str(self.path),
            )

        try:
            graph = self.build(documents[0])
        except (ValidationError, ValueError) as e:
            raise MapFormatError(
                f"Invalid diagram data in {self.path}",
                file_path=str(self.path),
                cause=e,
            )

        self._graph = graph
        self._logger.info(
            "Diagram imported",
            extra={
                "path": str(self.path),
                "vertices": len(graph),
                "edges": len(graph.geo_edges),
            },
        )
        return graph

    def build(self, document: pydot.Dot) -> RoutingGraph:
        graph_attrs = _attributes(document)
        vertices: List[VertexRecord] = []
        for element in document.get_nodes():
            name = element.get_name()
            if name in _DEFAULT_STATEMENTS:
                if name == "graph":
                    graph_attrs.update(_attributes(element))
                continue
            node = DotNodeRecord.model_validate(
                {**_attributes(element), "id": _unquote(name)}
            )
            vertices.append((node.id, node.lat, node.lon, node.x, node.y))

        declared = {record[0] for record in vertices}
        edges: List[EdgeRecord] = []
        skipped = 0
        for element in document.get_edges():
            a = _unquote(element.get_source())
            b = _unquote(element.get_destination())
            if a not in declared or b not in declared:
                skipped += 1
                continue
            attrs = _attributes(element)
            edge = DotEdgeRecord(
                v1=a,
                v2=b,
                speed=attrs.get("speed", self.config.default_speed_kmh),
                one_way=attrs.get("oneway", False),
            )
            edges.append((edge.v1, edge.v2, edge.speed, edge.one_way))

        if skipped:
            self._logger.warning(
                "Skipped edges referencing undeclared nodes",
                extra={"path": str(self.path), "skipped": skipped},
            )

        bounds: Optional[BoundsRecord] = None
        if "bb" in graph_attrs:
            bounds = parse_bounds(graph_attrs["bb"])

        return RoutingGraph.from_records(
            vertices,
            edges,
            bounds,
            metric=self.config.dot_distance_metric,
        )

    def clear_cache(self) -> None:
        """Clear the cached graph."""
        self._graph = None
        self._logger.debug("Graph cache cleared")
