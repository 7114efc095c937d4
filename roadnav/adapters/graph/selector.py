"""Pick a graph repository by input file suffix."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict

from ...config import GraphConfig, get_config
from ...domain.errors import UnsupportedFormatError
from ...ports.graph import GraphRepositoryPort
from .dot_repository import DotGraphRepository
from .osm_repository import OSMGraphRepository

RepositoryFactory = Callable[[Path, GraphConfig], GraphRepositoryPort]


def _default_factories() -> Dict[str, RepositoryFactory]:
    return {
        "osm": OSMGraphRepository,
        "xml": OSMGraphRepository,
        "dot": DotGraphRepository,
        "gv": DotGraphRepository,
    }


@dataclass
class GraphRepositorySelector:
    """Maps input suffixes to repository factories.

    Attributes:
        config: Graph configuration handed to every repository
        factories: Lower-case suffix (without dot) -> repository factory
    """

    config: GraphConfig = field(default_factory=lambda: get_config().graph)
    factories: Dict[str, RepositoryFactory] = field(default_factory=_default_factories)

    def for_path(self, path: Path) -> GraphRepositoryPort:
        """Return the repository able to read ``path``.

        Raises:
            UnsupportedFormatError: If the suffix is not registered.
        """
        path = Path(path)
        suffix = path.suffix.lstrip(".").lower()
        factory = self.factories.get(suffix)
        if factory is None:
            raise UnsupportedFormatError(
                f"Input file type not recognized: {path.name}",
                suffix=suffix,
            )
        return factory(path, self.config)
