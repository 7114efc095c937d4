"""Command line entry point.

Load a map, then perform one action on it::

    roadnav --load map.osm --export out.dot
    roadnav --load map.osm --show-nodes
    roadnav --load map.osm --show-nodes <id1> <id2> out.html
    roadnav --load map.osm --show-nodes <lat1> <lon1> <lat2> <lon2> out.dot
    roadnav --load map.osm --midist <id1> <id2> out.pdf
    roadnav --load map.osm --midist <lat1> <lon1> <lat2> <lon2> out.html

Any usage or data error exits with status 1.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, NoReturn, Optional, Sequence

from .config import load_config
from .container import Container
from .domain.errors import ConfigurationError, RoadNavError
from .logging_setup import configure_logging
from .services import NavigationService

logger = logging.getLogger(__name__)

EPILOG = """\
input types:  .osm/.xml (tagged-way map), .dot/.gv (exported diagram)
output types: .dot/.gv (diagram), .pdf/.png (neato rendering), .html (interactive map)

--show-nodes without parameters prints '<id> : <lat>, <lon>' per vertex.
With <id1> <id2> <out> or <lat1> <lon1> <lat2> <lon2> <out> it exports the
graph and highlights the two (nearest) vertices.
--midist takes the same parameters and highlights the fastest path.
"""


class UsageError(Exception):
    """Command line arguments do not form a valid command."""


class _ArgumentParser(argparse.ArgumentParser):
    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog="roadnav",
        description="Fastest-route navigation on OpenStreetMap road networks.",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--load", required=True, type=Path, metavar="MAP", help="map file to load"
    )
    action = parser.add_mutually_exclusive_group(required=True)
    action.add_argument("--export", type=Path, metavar="OUT", help="export the graph")
    action.add_argument(
        "--show-nodes", nargs="*", metavar="ARG", help="list or highlight vertices"
    )
    action.add_argument(
        "--midist", nargs="+", metavar="ARG", help="highlight the fastest path"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="log at DEBUG level"
    )
    return parser


def _coordinates(params: Sequence[str]) -> List[float]:
    try:
        return [float(p) for p in params]
    except ValueError:
        raise UsageError(f"Coordinates must be numbers, got {list(params)}") from None


def run(service: NavigationService, args: argparse.Namespace) -> int:
    """Execute the parsed command. Returns the process exit status."""
    if not args.load.is_file():
        raise UsageError(f"File {args.load} does not exist!")

    graph = service.load(args.load)

    if args.export is not None:
        service.export(graph, args.export)
        return 0

    operation = "--show-nodes" if args.show_nodes is not None else "--midist"
    params: List[str] = list(
        args.show_nodes if args.show_nodes is not None else args.midist
    )

    if not params and operation == "--show-nodes":
        service.show_nodes(graph)
        return 0

    if len(params) == 3:
        v1_id, v2_id, out = params
        if operation == "--show-nodes":
            service.show_nodes_exact(graph, v1_id, v2_id, Path(out))
            return 0
        route = service.midist_exact(graph, v1_id, v2_id, Path(out))
    elif len(params) == 5:
        lat1, lon1, lat2, lon2 = _coordinates(params[:4])
        out = Path(params[4])
        if operation == "--show-nodes":
            service.show_nodes_nearest(graph, lat1, lon1, lat2, lon2, out)
            return 0
        route = service.midist_nearest(graph, lat1, lon1, lat2, lon2, out)
    else:
        raise UsageError(f"Wrong parameters for command {operation}!")

    print(service.format_travel_time(route.total_minutes))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = load_config()
    except ConfigurationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    observability = config.observability
    if args.verbose:
        observability = observability.model_copy(update={"level": "DEBUG"})
    configure_logging(observability)

    service: NavigationService = Container.create_default(config).resolve(
        NavigationService
    )

    try:
        return run(service, args)
    except UsageError as e:
        print(str(e), file=sys.stderr)
        parser.print_usage(sys.stderr)
        return 1
    except RoadNavError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1
