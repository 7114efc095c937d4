from concurrent.futures import ThreadPoolExecutor

import pytest

from roadnav.domain.errors import (
    EmptyGraphError,
    GraphIntegrityError,
    VertexNotFoundError,
)
from roadnav.domain.models import Bounds, DistanceMetric, GeoVertex, Graph, Vertex
from roadnav.graph.distance import travel_time
from roadnav.graph.routing_graph import RoutingGraph


def _graph(vertices, edges=(), metric=DistanceMetric.HAVERSINE, bounds=None):
    return RoutingGraph.from_records(
        [(vid, lat, lon, None, None) for vid, lat, lon in vertices],
        edges,
        bounds,
        metric=metric,
    )


class TestNearestVertex:
    def test_single_vertex_is_always_nearest(self):
        graph = _graph([("only", 0.0, 0.0)])
        assert graph.nearest_vertex(1.0, 1.0) == "only"

    def test_metric_changes_the_answer(self):
        # At 60N a degree of longitude is half a degree of latitude on the ground.
        vertices = [("east", 60.0, 1.5), ("north", 61.0, 0.0)]

        haversine = _graph(vertices, metric=DistanceMetric.HAVERSINE)
        planar = _graph(vertices, metric=DistanceMetric.EUCLIDEAN)

        assert haversine.nearest_vertex(60.0, 0.0) == "east"
        assert planar.nearest_vertex(60.0, 0.0) == "north"

    def test_tie_goes_to_first_vertex(self):
        graph = _graph([("left", 0.0, -1.0), ("right", 0.0, 1.0)])
        assert graph.nearest_vertex(0.0, 0.0) == "left"

    def test_empty_graph_fails_loudly(self):
        graph = _graph([], bounds=(0.0, 0.0, 0.0, 0.0))
        with pytest.raises(EmptyGraphError):
            graph.nearest_vertex(0.0, 0.0)


class TestShortestPath:
    def test_path_graph_visits_every_vertex_in_order(self, path_graph):
        route = path_graph.shortest_path_vertices("A", "D")

        assert route.path == ("A", "B", "C", "D")

        v = path_graph.geo_vertices
        expected = sum(
            travel_time(DistanceMetric.HAVERSINE, v[a], v[b], 50.0)
            for a, b in [("A", "B"), ("B", "C"), ("C", "D")]
        )
        assert route.total_minutes == pytest.approx(expected)

    def test_source_equals_destination(self, path_graph):
        route = path_graph.shortest_path_vertices("C", "C")

        assert route.path == ("C",)
        assert route.total_minutes == 0.0
        assert not route.is_empty

    def test_disconnected_destination_returns_no_path(self):
        graph = _graph(
            [("a", 0.0, 0.0), ("b", 0.0, 0.01), ("x", 1.0, 1.0), ("y", 1.0, 1.01)],
            [("a", "b", 50.0, False), ("x", "y", 50.0, False)],
        )

        route = graph.shortest_path_vertices("a", "y")

        assert route.is_empty
        assert route.total_minutes == float("inf")

    def test_faster_road_beats_shorter_road(self):
        graph = _graph(
            [("s", 0.0, 0.0), ("m", 0.0, 0.01), ("t", 0.0, 0.02), ("d", 0.01, 0.01)],
            [
                ("s", "m", 10.0, False),
                ("m", "t", 10.0, False),
                ("s", "d", 130.0, False),
                ("d", "t", 130.0, False),
            ],
        )

        assert graph.shortest_path_vertices("s", "t").path == ("s", "d", "t")

    def test_one_way_edge_is_not_traversed_backwards(self):
        graph = _graph(
            [("a", 0.0, 0.0), ("b", 0.0, 0.01)],
            [("a", "b", 50.0, True)],
        )

        assert graph.shortest_path_vertices("a", "b").path == ("a", "b")
        assert graph.shortest_path_vertices("b", "a").is_empty

    def test_unknown_vertex_fails_loudly(self, path_graph):
        with pytest.raises(VertexNotFoundError) as excinfo:
            path_graph.shortest_path_vertices("A", "Z")
        assert excinfo.value.vertex_id == "Z"

    def test_positions_resolve_to_nearest_vertices(self, path_graph):
        route = path_graph.shortest_path_positions(0.001, 0.0, 0.0, 0.029)
        assert route.path == ("A", "B", "C", "D")

    def test_parallel_queries_agree(self, path_graph):
        with ThreadPoolExecutor(max_workers=4) as pool:
            routes = list(
                pool.map(
                    lambda _: path_graph.shortest_path_vertices("A", "D"), range(16)
                )
            )
        assert {r.path for r in routes} == {("A", "B", "C", "D")}


class TestConstruction:
    def test_bounds_are_literal_min_max(self):
        graph = _graph([("p", 10.0, 20.0), ("q", 12.0, 18.0), ("r", 9.0, 25.0)])

        assert graph.bounds == Bounds(minlon=18.0, minlat=9.0, maxlon=25.0, maxlat=12.0)

    def test_explicit_bounds_are_kept(self):
        graph = _graph([("p", 1.0, 1.0)], bounds=(0.0, 0.0, 2.0, 2.0))
        assert graph.bounds.as_tuple() == (0.0, 0.0, 2.0, 2.0)

    def test_inverted_bounds_are_rejected(self):
        with pytest.raises(ValueError):
            Bounds(minlon=5.0, minlat=0.0, maxlon=1.0, maxlat=1.0)

    def test_dangling_edge_is_rejected(self):
        with pytest.raises(GraphIntegrityError):
            _graph([("a", 0.0, 0.0)], [("a", "ghost", 50.0, False)])

    def test_vertex_and_position_keys_must_match(self):
        graph = Graph(vertices={"a": Vertex("a"), "b": Vertex("b")})
        with pytest.raises(GraphIntegrityError):
            RoutingGraph(
                graph=graph,
                geo_vertices={"a": GeoVertex("a", 0.0, 0.0)},
                geo_edges=(),
                bounds=Bounds(0.0, 0.0, 0.0, 0.0),
            )

    def test_non_positive_speed_is_rejected(self):
        with pytest.raises(ValueError):
            _graph([("a", 0.0, 0.0), ("b", 0.0, 1.0)], [("a", "b", 0.0, False)])

    def test_records_round_trip(self, path_graph):
        vertices, edges, bounds = path_graph.to_records()

        rebuilt = RoutingGraph.from_records(vertices, edges, bounds)

        assert rebuilt.to_records() == (vertices, edges, bounds)
        assert set(rebuilt.graph.vertices) == set(rebuilt.geo_vertices)


class TestHighlights:
    def test_highlight_path_marks_edges_between_consecutive_vertices(self, path_graph):
        route = path_graph.shortest_path_vertices("B", "D")

        highlights = path_graph.highlight_path(route.path)

        assert highlights.edges == {1, 2}
        assert highlights.vertices == []

    def test_highlight_path_matches_either_direction(self, path_graph):
        highlights = path_graph.highlight_path(["C", "B", "A"])
        assert highlights.edges == {0, 1}

    def test_highlight_unknown_vertex_fails(self, path_graph):
        with pytest.raises(VertexNotFoundError):
            path_graph.highlight_vertices(["A", "nope"])

    def test_highlights_do_not_touch_topology(self, path_graph):
        before = path_graph.to_records()

        highlights = path_graph.highlight_vertices(["A", "D", "A"])
        path_graph.highlight_path(["A", "B"], highlights)

        assert highlights.vertices == ["A", "D"]
        assert highlights.edges == {0}
        assert path_graph.to_records() == before
