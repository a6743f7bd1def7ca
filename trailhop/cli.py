"""Command line entry point.

    trailhop harvest                      # collect stop areas along the stages
    trailhop build                        # build graph, write paths.json
    trailhop search 15000                 # walk-only suggestions around 15 km
    trailhop rank 15000 --origin "Malmö C" --destination "Malmö C"
"""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime
from typing import List, Optional

from .config import AppConfig, ObservabilityConfig
from .container import Container
from .domain.errors import TrailhopError
from .ports.catalogue import CatalogueRepositoryPort
from .services import (
    ItineraryRanker,
    RankingRequest,
    StopAreaService,
    TrailNetworkService,
    format_itinerary,
    format_walk,
    search_walks,
)

logger = logging.getLogger(__name__)


def configure_logging(config: ObservabilityConfig) -> None:
    logging.basicConfig(level=config.level.upper(), format=config.format)


def _positive_float(value: str) -> float:
    number = float(value)
    if number <= 0:
        raise argparse.ArgumentTypeError(f"must be positive: {value}")
    return number


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="trailhop",
        description="Plan Skåneleden day hikes between public transport stops.",
    )
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("harvest", help="Collect stop areas near every stage")
    sub.add_parser("build", help="Build the trail graph and the walk catalogue")

    search = sub.add_parser("search", help="Walk-only suggestions")
    search.add_argument("distance", type=float, help="Desired distance in meters")
    search.add_argument("--tolerance", type=float, help="Accepted deviation in meters")

    rank = sub.add_parser("rank", help="Rank itineraries with live journeys")
    rank.add_argument("distance", type=float, help="Desired distance in meters")
    rank.add_argument("--origin", required=True, help="Stop area to travel from")
    rank.add_argument("--destination", help="Stop area to travel home to")
    rank.add_argument(
        "--depart",
        type=datetime.fromisoformat,
        default=None,
        help="Earliest departure, ISO format (default: now)",
    )
    rank.add_argument(
        "--speed", type=_positive_float, help="Walking speed in meters per hour"
    )
    rank.add_argument("--tolerance", type=float, help="Accepted deviation in meters")
    rank.add_argument("--limit", type=int, default=10, help="Itineraries to show")
    return p.parse_args(argv)


def _harvest(container: Container) -> None:
    repository = container.resolve(CatalogueRepositoryPort)
    stop_areas = container.resolve(StopAreaService).harvest(repository.load_stages())
    repository.save_stop_areas(stop_areas)
    print(f"{len(stop_areas)} stop areas saved")


def _build(container: Container) -> None:
    summary = container.resolve(TrailNetworkService).rebuild()
    for endpoint in summary.build.unstitched:
        print(f"{endpoint.stage} is not close to any other stage")
    print(
        f"Graph: {summary.graph.node_count} nodes, {summary.graph.edge_count} edges "
        f"({summary.simplify.collapsed} collapsed), {len(summary.paths)} walks saved"
    )


def _search(container: Container, args: argparse.Namespace) -> None:
    repository = container.resolve(CatalogueRepositoryPort)
    stop_areas = repository.load_stop_areas()
    tolerance = args.tolerance
    if tolerance is None:
        tolerance = container.config.ranking.tolerance_m
    for path in search_walks(repository.load_paths(), args.distance, tolerance):
        print()
        print(format_walk(path, stop_areas))


def _rank(container: Container, args: argparse.Namespace) -> None:
    repository = container.resolve(CatalogueRepositoryPort)
    resolver = container.resolve(StopAreaService)
    request = RankingRequest(
        distance=args.distance,
        paths=repository.load_paths(),
        stop_areas=repository.load_stop_areas(),
        origin=resolver.resolve(args.origin),
        depart_after=args.depart or datetime.now().replace(second=0, microsecond=0),
        destination=resolver.resolve(args.destination) if args.destination else None,
        tolerance=args.tolerance,
        walking_speed=args.speed,
    )
    itineraries = container.resolve(ItineraryRanker).rank(request)
    if not itineraries:
        print("No itineraries found.")
    for itinerary in itineraries[: args.limit]:
        print()
        print(format_itinerary(itinerary, request.stop_areas))


def main(argv: Optional[List[str]] = None, config: Optional[AppConfig] = None) -> int:
    args = parse_args(argv)

    try:
        container = Container.create_default(config)
        configure_logging(container.config.observability)
        if args.command == "harvest":
            _harvest(container)
        elif args.command == "build":
            _build(container)
        elif args.command == "search":
            _search(container, args)
        elif args.command == "rank":
            _rank(container, args)
    except TrailhopError as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
