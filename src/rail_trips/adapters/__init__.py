"""Adapters layer - external system integrations."""

from rail_trips.adapters.config import AppConfig
from rail_trips.adapters.line_data import DataProviderError, JsonLineDataProvider
from rail_trips.adapters.persistence import InMemoryTripRepository, SqlTripRepository
from rail_trips.adapters.uuid_generator import UuidGenerator

__all__ = [
    "AppConfig",
    "DataProviderError",
    "InMemoryTripRepository",
    "JsonLineDataProvider",
    "SqlTripRepository",
    "UuidGenerator",
]
