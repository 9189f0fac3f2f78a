"""Wiring of adapters and services from configuration."""

import logging
import sys

from rail_trips.adapters.config import AppConfig
from rail_trips.adapters.line_data import JsonLineDataProvider
from rail_trips.adapters.persistence import InMemoryTripRepository, SqlTripRepository
from rail_trips.adapters.uuid_generator import UuidGenerator
from rail_trips.application.services import TripService
from rail_trips.domain.ports import LineDataProvider, TripRepository
from rail_trips.domain.services import GraphBuilder, RouteCalculator

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging for the entry points."""
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )


def build_trip_repository(config: AppConfig) -> TripRepository:
    """Create the trip store selected by storage_backend."""
    if config.storage_backend == "memory":
        logger.info("Using in-memory trip storage")
        return InMemoryTripRepository()
    logger.info(f"Using SQL trip storage at {config.database_url}")
    return SqlTripRepository.from_url(config.database_url)


def build_route_calculator(provider: LineDataProvider) -> RouteCalculator:
    """Build the station graph once and wrap it in a calculator."""
    graph = GraphBuilder().build(provider.get_lines())
    edge_count = sum(len(neighbors) for neighbors in graph.values()) // 2
    logger.info(f"Built network graph with {len(graph)} station(s) and {edge_count} edge(s)")
    return RouteCalculator(graph, UuidGenerator())


def build_trip_service(config: AppConfig) -> TripService:
    """Wire line data, graph, calculator and trip storage into the trip service."""
    provider = JsonLineDataProvider(config.distances_file)
    return TripService(
        route_calculator=build_route_calculator(provider),
        trip_repository=build_trip_repository(config),
    )
