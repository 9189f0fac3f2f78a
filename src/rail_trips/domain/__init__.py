"""Domain layer - core business logic and models."""

from rail_trips.domain.models import (
    AggregationRow,
    Distance,
    GroupBy,
    StationId,
    Trip,
)
from rail_trips.domain.ports import (
    IdGenerator,
    LineDataProvider,
    TripRepository,
)

__all__ = [
    "AggregationRow",
    "Distance",
    "GroupBy",
    "IdGenerator",
    "LineDataProvider",
    "StationId",
    "Trip",
    "TripRepository",
]
