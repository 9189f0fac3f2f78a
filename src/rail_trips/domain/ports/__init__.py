"""Ports (interfaces) for the ports-and-adapters architecture."""

from rail_trips.domain.ports.id_generator import IdGenerator
from rail_trips.domain.ports.line_data_provider import LineDataProvider
from rail_trips.domain.ports.trip_repository import TripRepository
from rail_trips.domain.ports.trip_service import TripService

__all__ = [
    "IdGenerator",
    "LineDataProvider",
    "TripRepository",
    "TripService",
]
