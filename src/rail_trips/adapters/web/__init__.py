"""Web adapters for the trip API."""

from rail_trips.adapters.web.trip_api import TripWebAdapter

__all__ = ["TripWebAdapter"]
