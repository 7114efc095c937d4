"""Tests for the diagram-description import/export adapters."""

import shutil

import pytest

from roadnav.adapters.graph import DotGraphRepository, OSMGraphRepository
from roadnav.adapters.rendering import DotGraphExporter
from roadnav.config import GraphConfig
from roadnav.domain.errors import MapFormatError, RenderingError
from roadnav.domain.models import DistanceMetric
from roadnav.graph.routing_graph import RoutingGraph

needs_neato = pytest.mark.skipif(
    shutil.which("neato") is None, reason="Graphviz neato not installed"
)


def _write(tmp_path, text, name="graph.dot"):
    path = tmp_path / name
    path.write_text(text, encoding="utf-8")
    return path


class TestImport:
    def test_nodes_edges_and_graph_attributes(self, tmp_path):
        path = _write(
            tmp_path,
            """
            // exported by hand
            graph G {
                graph [bb="0,0,10,10"];
                node [shape=point];
                "a" [comment="1.5,2.5!", pos="3,4!"];
                b [comment="1,2"]
                a -- b -- c [speed=30];
                layout = neato;
                /* trailing block comment */
            }
            """,
        )

        graph = DotGraphRepository(path).load()

        assert list(graph.geo_vertices) == ["a", "b"]
        a = graph.geo_vertices["a"]
        assert (a.lat, a.lon, a.x, a.y) == (1.5, 2.5, 3.0, 4.0)
        assert graph.geo_vertices["b"].plot_position == (2.0, 1.0)
        assert [(e.v1, e.v2, e.speed) for e in graph.graph.edges] == [("a", "b", 30.0)]
        assert graph.bounds.as_tuple() == (0.0, 0.0, 10.0, 10.0)

    def test_top_level_bounding_box(self, tmp_path):
        path = _write(
            tmp_path,
            'graph { bb="-1,-2,3,4"; n1 [comment="0,0"]; }',
        )

        graph = DotGraphRepository(path).load()

        assert graph.bounds.as_tuple() == (-1.0, -2.0, 3.0, 4.0)

    def test_quoted_identifiers(self, tmp_path):
        path = _write(
            tmp_path,
            'graph { "x y" [comment="0,0"]; "main st" [comment="0,1"]; "x y" -- "main st"; }',
        )

        graph = DotGraphRepository(path).load()

        assert set(graph.geo_vertices) == {"x y", "main st"}
        assert [(e.v1, e.v2) for e in graph.graph.edges] == [("x y", "main st")]


class TestRoundTrip:
    def test_export_then_import_preserves_graph(self, small_osm, tmp_path):
        original = OSMGraphRepository(small_osm).load()
        out = DotGraphExporter().export(original, tmp_path / "graph.dot")

        imported = DotGraphRepository(out).load()

        assert set(imported.geo_vertices) == set(original.geo_vertices)
        for vid, vertex in original.geo_vertices.items():
            again = imported.geo_vertices[vid]
            assert again.lat == pytest.approx(vertex.lat)
            assert again.lon == pytest.approx(vertex.lon)
            assert again.plot_position == pytest.approx(vertex.plot_position)

        def edge_set(graph):
            return {(e.v1, e.v2, e.speed, e.one_way) for e in graph.graph.edges}

        assert edge_set(imported) == edge_set(original)
        assert imported.bounds.as_tuple() == pytest.approx(original.bounds.as_tuple())

    def test_travel_time_survives_reimport(self, small_osm, tmp_path):
        original = OSMGraphRepository(small_osm).load()
        out = DotGraphExporter().export(original, tmp_path / "graph.dot")

        imported = DotGraphRepository(out).load()

        before = original.shortest_path_vertices("1", "5")
        after = imported.shortest_path_vertices("1", "5")
        assert after.path == before.path
        assert after.total_minutes == pytest.approx(before.total_minutes)
        assert after.total_minutes > 0.1

    def test_one_way_and_speed_survive(self, tmp_path, path_graph):
        vertices, _, bounds = path_graph.to_records()
        graph = RoutingGraph.from_records(
            vertices, [("A", "B", 90.0, True), ("B", "C", 30.0, False)], bounds
        )
        out = DotGraphExporter().export(graph, tmp_path / "graph.gv")

        imported = DotGraphRepository(out).load()

        assert [(e.v1, e.v2, e.speed, e.one_way) for e in imported.graph.edges] == [
            ("A", "B", 90.0, True),
            ("B", "C", 30.0, False),
        ]

    def test_identifier_needing_quotes_survives(self, tmp_path):
        graph = RoutingGraph.from_records(
            [("main st", 0.0, 0.0, None, None), ("b", 0.0, 0.01, None, None)],
            [("main st", "b", 50.0, False)],
        )
        out = DotGraphExporter().export(graph, tmp_path / "graph.dot")

        imported = DotGraphRepository(out).load()

        assert set(imported.geo_vertices) == {"main st", "b"}
        assert [(e.v1, e.v2) for e in imported.graph.edges] == [("main st", "b")]


class TestExport:
    def test_highlights_are_written(self, path_graph):
        highlights = path_graph.highlight_path(["A", "B"])
        path_graph.highlight_vertices(["D"], highlights)

        text = DotGraphExporter().render(path_graph, highlights)

        lines = text.splitlines()
        assert any(line.strip().startswith("A -- B") and "color=red" in line for line in lines)
        assert not any(line.strip().startswith("B -- C") and "color=red" in line for line in lines)
        assert any(line.strip().startswith("D [") and "color=red" in line for line in lines)
        assert "layout=neato" in text

    def test_layout_attributes(self, path_graph):
        dot = DotGraphExporter().build(path_graph)

        assert dot.get_type() == "graph"
        assert dot.get("outputorder") == "nodesfirst"
        node = dot.get_node("B")[0]
        assert node.get("shape") == "point"

    @pytest.mark.parametrize("fmt, magic", [("pdf", b"%PDF"), ("png", b"\x89PNG")])
    @needs_neato
    def test_rendered_formats(self, path_graph, tmp_path, fmt, magic):
        out = DotGraphExporter(output_format=fmt).export(path_graph, tmp_path / f"g.{fmt}")

        assert out.read_bytes().startswith(magic)

    def test_missing_layout_program_fails(self, path_graph, tmp_path):
        exporter = DotGraphExporter(output_format="pdf", prog="roadnav-no-such-layout")

        with pytest.raises(RenderingError) as excinfo:
            exporter.export(path_graph, tmp_path / "g.pdf")
        assert excinfo.value.renderer_type == "pdf"


class TestImportPolicies:
    def test_metric_defaults_to_geographic(self, tmp_path):
        path = _write(tmp_path, 'graph { a [comment="1,1"]; }')

        graph = DotGraphRepository(path).load()

        assert graph.metric is DistanceMetric.HAVERSINE
        assert graph.bounds.as_tuple() == (1.0, 1.0, 1.0, 1.0)

    def test_metric_is_configurable(self, tmp_path):
        path = _write(tmp_path, 'graph { a [comment="1,1"]; }')

        graph = DotGraphRepository(path, GraphConfig(dot_metric="euclidean")).load()

        assert graph.metric is DistanceMetric.EUCLIDEAN

    def test_edge_to_undeclared_node_is_skipped(self, tmp_path):
        path = _write(
            tmp_path,
            'graph { a [comment="1,1"]; b [comment="1,2"]; a -- b; b -- ghost; }',
        )

        graph = DotGraphRepository(path).load()

        assert [(e.v1, e.v2) for e in graph.graph.edges] == [("a", "b")]
        assert graph.graph.edges[0].speed == 50.0

    @pytest.mark.parametrize(
        "text",
        [
            'graph { a [pos="1,1"]; }',
            'graph { a [comment="north,1"]; }',
            'graph { bb="1,2,3"; a [comment="1,1"]; }',
            'graph { bb="3,0,1,0"; a [comment="1,1"]; }',
            'graph { a [comment="1,1"]; b [comment="1,2"]; a -- b [speed=0]; }',
            'graph { a [comment="1,1"]; b [comment="1,2"]; a -- b [oneway=maybe]; }',
            "graph { a -- ",
            "",
        ],
    )
    def test_malformed_data_fails(self, tmp_path, text):
        with pytest.raises(MapFormatError):
            DotGraphRepository(_write(tmp_path, text)).load()

    def test_missing_file_fails(self, tmp_path):
        with pytest.raises(MapFormatError):
            DotGraphRepository(tmp_path / "absent.dot").load()
