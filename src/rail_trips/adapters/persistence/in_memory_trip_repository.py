"""In-memory trip repository."""

import threading
from datetime import date

from rail_trips.domain.models.aggregation import AggregationRow, GroupBy
from rail_trips.domain.models.trip import Trip
from rail_trips.domain.ports.trip_repository import TripRepository
from rail_trips.domain.services.distance_aggregator import (
    aggregate_distances,
    is_within_window,
)


class InMemoryTripRepository(TripRepository):
    """Keeps trips in a dict keyed by id; contents are lost when the process exits."""

    def __init__(self) -> None:
        self._trips: dict[str, Trip] = {}
        self._lock = threading.Lock()

    def save(self, trip: Trip) -> None:
        with self._lock:
            self._trips[trip.id] = trip

    def find_by_id(self, trip_id: str) -> Trip | None:
        with self._lock:
            return self._trips.get(trip_id)

    def find_by_accounting_code(
        self,
        code: str,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> list[Trip]:
        trips = [
            trip
            for trip in self._snapshot()
            if trip.accounting_code == code
            and is_within_window(trip.created_at, from_date, to_date)
        ]
        return sorted(trips, key=lambda trip: trip.created_at, reverse=True)

    def get_distances_by_accounting_code(
        self,
        from_date: date | None = None,
        to_date: date | None = None,
        group_by: GroupBy = GroupBy.NONE,
    ) -> list[AggregationRow]:
        return aggregate_distances(self._snapshot(), from_date, to_date, group_by)

    def is_available(self) -> bool:
        return True

    def _snapshot(self) -> list[Trip]:
        with self._lock:
            return list(self._trips.values())
