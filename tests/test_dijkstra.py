import math
import threading

import pytest

from roadnav.domain.errors import RouteTimeoutError
from roadnav.graph.dijkstra import WeightedAdjacency, dijkstra


def test_dijkstra_finds_direct_edge():
    # Minimal graph with a direct edge A -> B
    graph: WeightedAdjacency = {
        "A": [("B", 10.0)],
        "B": [],
    }

    path, cost = dijkstra(graph, "A", "B")

    assert path == ["A", "B"]
    assert cost == 10.0


def test_dijkstra_chooses_fastest_path():
    # Graph where A can reach C directly, but A->B->C is faster
    graph: WeightedAdjacency = {
        "A": [("B", 3.0), ("C", 10.0)],
        "B": [("C", 4.0)],
        "C": [],
    }

    path, cost = dijkstra(graph, "A", "C")

    assert path == ["A", "B", "C"]
    assert cost == 7.0


def test_dijkstra_no_path_returns_inf():
    graph: WeightedAdjacency = {
        "A": [],
        "B": [],
    }

    path, cost = dijkstra(graph, "A", "B")

    assert path == []
    assert math.isinf(cost)


def test_dijkstra_source_is_destination():
    graph: WeightedAdjacency = {"A": [("B", 1.0)], "B": [("A", 1.0)]}

    path, cost = dijkstra(graph, "A", "A")

    assert path == ["A"]
    assert cost == 0.0


def test_dijkstra_unknown_vertex_returns_inf():
    path, cost = dijkstra({"A": []}, "A", "Z")

    assert path == []
    assert math.isinf(cost)


def test_dijkstra_zero_timeout_aborts():
    graph: WeightedAdjacency = {"A": [("B", 1.0)], "B": []}

    with pytest.raises(RouteTimeoutError) as excinfo:
        dijkstra(graph, "A", "B", timeout_seconds=0.0)

    assert excinfo.value.timeout_seconds == 0.0


def test_dijkstra_cancel_event_aborts():
    graph: WeightedAdjacency = {"A": [("B", 1.0)], "B": []}
    cancel = threading.Event()
    cancel.set()

    with pytest.raises(RouteTimeoutError):
        dijkstra(graph, "A", "B", cancel_event=cancel)


def test_dijkstra_unset_cancel_event_is_ignored():
    graph: WeightedAdjacency = {"A": [("B", 1.0)], "B": []}

    path, _ = dijkstra(graph, "A", "B", cancel_event=threading.Event())

    assert path == ["A", "B"]
