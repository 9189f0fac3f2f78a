"""Application layer - use cases orchestrating the domain."""

from rail_trips.application.services import TripService

__all__ = ["TripService"]
