"""Trip persistence adapters."""

from rail_trips.adapters.persistence.in_memory_trip_repository import InMemoryTripRepository
from rail_trips.adapters.persistence.sql_trip_repository import SqlTripRepository

__all__ = ["InMemoryTripRepository", "SqlTripRepository"]
