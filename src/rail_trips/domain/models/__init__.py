"""Domain models for rail trips."""

from rail_trips.domain.models.aggregation import AggregationRow, DistanceReport, GroupBy
from rail_trips.domain.models.distance import Distance
from rail_trips.domain.models.rail_line import LineSegment, RailLine
from rail_trips.domain.models.station_id import StationId
from rail_trips.domain.models.trip import Trip

__all__ = [
    "AggregationRow",
    "Distance",
    "DistanceReport",
    "GroupBy",
    "LineSegment",
    "RailLine",
    "StationId",
    "Trip",
]
