"""Trip service port."""

from datetime import date
from typing import Any, Protocol

from rail_trips.domain.models.aggregation import DistanceReport, GroupBy
from rail_trips.domain.models.trip import Trip


class TripService(Protocol):
    """Port for the trip use cases exposed to the HTTP and CLI adapters."""

    def calculate_trip(self, from_station: str, to_station: str, accounting_code: str) -> Trip:
        """Compute the shortest route between two stations and persist it as a trip.

        Raises:
            StationNotFoundError: If either station is not part of the network.
            NoRouteFoundError: If the stations are not connected.
            InvalidStationIdError: If a station id is empty or too long.
        """
        ...

    def get_trip(self, trip_id: str) -> Trip | None:
        """Return a persisted trip by id, or None."""
        ...

    def find_trips(
        self,
        accounting_code: str,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> list[Trip]:
        """Return persisted trips for an accounting code, newest first."""
        ...

    def get_distances(
        self,
        from_date: date | None = None,
        to_date: date | None = None,
        group_by: GroupBy = GroupBy.NONE,
    ) -> DistanceReport:
        """Aggregate travelled distances per accounting code."""
        ...

    def list_stations(self) -> list[str]:
        """Return the ids of every station in the network, sorted."""
        ...

    def health(self) -> dict[str, Any]:
        """Return a health summary of the service and its storage."""
        ...
