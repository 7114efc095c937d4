"""Top-level package for the road navigator.

This package builds a routable road network from raw map data and
answers fastest-travel-time queries between vertices or geographic
positions. See ``roadnav.graph`` for the algorithms and
``roadnav.services`` for the use cases driven by the command line.
"""

__version__ = "0.1.0"
