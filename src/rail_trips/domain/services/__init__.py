"""Domain services: graph construction, routing and distance aggregation."""

from rail_trips.domain.services.distance_aggregator import (
    aggregate_distances,
    bucket_label,
    end_of_day,
    is_within_window,
    start_of_window,
)
from rail_trips.domain.services.graph_builder import Graph, GraphBuilder
from rail_trips.domain.services.period_calculator import period_bounds
from rail_trips.domain.services.route_calculator import RouteCalculator

__all__ = [
    "Graph",
    "GraphBuilder",
    "RouteCalculator",
    "aggregate_distances",
    "bucket_label",
    "end_of_day",
    "is_within_window",
    "period_bounds",
    "start_of_window",
]
