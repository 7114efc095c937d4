"""Rendering adapters - Implementations of GraphExporterPort.

Available implementations:
- DotGraphExporter: Diagram-description (DOT) documents and their pdf/png renderings
- FoliumMapRenderer: Folium-based interactive map rendering
- ConsoleVertexPrinter: Plain vertex listing on a text stream
- GraphExporterSelector: Chooses an exporter by file suffix
"""

from .console_printer import ConsoleVertexPrinter
from .dot_exporter import DotGraphExporter
from .folium_adapter import FoliumMapRenderer
from .selector import GraphExporterSelector

__all__ = [
    "DotGraphExporter",
    "FoliumMapRenderer",
    "ConsoleVertexPrinter",
    "GraphExporterSelector",
]
