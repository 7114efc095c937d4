"""Graph algorithms for the road network.

This subpackage contains the distance metrics, the connected-component
analysis used by the loaders, the Dijkstra search and the
``RoutingGraph`` that ties them together.
"""

from .components import connected_components, largest_component, undirected_adjacency
from .dijkstra import dijkstra
from .distance import EARTH_RADIUS_M, euclidean, haversine_m, travel_time
from .routing_graph import RoutingGraph

__all__ = [
    "RoutingGraph",
    "dijkstra",
    "connected_components",
    "largest_component",
    "undirected_adjacency",
    "haversine_m",
    "euclidean",
    "travel_time",
    "EARTH_RADIUS_M",
]
