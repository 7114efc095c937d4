"""Graph adapters - Implementations of GraphRepositoryPort.

Available implementations:
- OSMGraphRepository: Loads a road network from a tagged-way XML document
- DotGraphRepository: Imports a previously exported diagram
- GraphRepositorySelector: Chooses one of the above by file suffix
"""

from .dot_repository import DotGraphRepository
from .osm_repository import OSMGraphRepository
from .selector import GraphRepositorySelector

__all__ = ["OSMGraphRepository", "DotGraphRepository", "GraphRepositorySelector"]
