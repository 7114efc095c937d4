"""Pick a graph exporter by output file suffix."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict

from ...domain.errors import UnsupportedFormatError
from ...ports.rendering import GraphExporterPort
from .dot_exporter import DotGraphExporter
from .folium_adapter import FoliumMapRenderer


def _default_exporters() -> Dict[str, GraphExporterPort]:
    dot = DotGraphExporter()
    return {
        "dot": dot,
        "gv": dot,
        "pdf": DotGraphExporter(output_format="pdf"),
        "png": DotGraphExporter(output_format="png"),
        "html": FoliumMapRenderer(),
    }


@dataclass
class GraphExporterSelector:
    """Maps lower-case output suffixes (without dot) to exporters."""

    exporters: Dict[str, GraphExporterPort] = field(default_factory=_default_exporters)

    def for_path(self, path: Path) -> GraphExporterPort:
        """Return the exporter able to write ``path``.

        Raises:
            UnsupportedFormatError: If the suffix is not registered.
        """
        path = Path(path)
        suffix = path.suffix.lstrip(".").lower()
        exporter = self.exporters.get(suffix)
        if exporter is None:
            raise UnsupportedFormatError(
                f"Output file type not recognized: {path.name}",
                suffix=suffix,
            )
        return exporter
