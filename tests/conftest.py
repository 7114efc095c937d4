import logging
from pathlib import Path

import pytest

from roadnav.config import reset_config
from roadnav.domain.models import DistanceMetric
from roadnav.graph.routing_graph import RoutingGraph
from roadnav.logging_setup import reset_logging

DATA_DIR = Path(__file__).resolve().parent / "data"


@pytest.fixture(autouse=True)
def fresh_config():
    """Reload configuration and restore the package logger around each test."""
    reset_config()
    logger = logging.getLogger("roadnav")
    handlers = list(logger.handlers)
    level, propagate = logger.level, logger.propagate
    yield
    reset_logging()
    for handler in list(logger.handlers):
        if handler not in handlers:
            logger.removeHandler(handler)
            handler.close()
    logger.setLevel(level)
    logger.propagate = propagate
    reset_config()


@pytest.fixture
def small_osm() -> Path:
    return DATA_DIR / "small.osm"


@pytest.fixture
def path_graph() -> RoutingGraph:
    """A -- B -- C -- D along the equator, 50 km/h everywhere."""
    return RoutingGraph.from_records(
        [
            ("A", 0.0, 0.00, None, None),
            ("B", 0.0, 0.01, None, None),
            ("C", 0.0, 0.02, None, None),
            ("D", 0.0, 0.03, None, None),
        ],
        [
            ("A", "B", 50.0, False),
            ("B", "C", 50.0, False),
            ("C", "D", 50.0, False),
        ],
        metric=DistanceMetric.HAVERSINE,
    )
