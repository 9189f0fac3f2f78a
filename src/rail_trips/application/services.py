"""Application services (use cases) for trip management."""

import logging
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING, Any

from rail_trips.domain.models import DistanceReport, GroupBy, Trip

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from rail_trips.domain.ports import TripRepository
    from rail_trips.domain.services import RouteCalculator

SERVICE_NAME = "rail-trips"


class TripService:
    """Service for calculating, storing and reporting on rail trips."""

    def __init__(
        self,
        route_calculator: "RouteCalculator",
        trip_repository: "TripRepository",
    ) -> None:
        """Initialize with a route calculator and a trip repository."""
        self._route_calculator = route_calculator
        self._trip_repository = trip_repository

    def calculate_trip(self, from_station: str, to_station: str, accounting_code: str) -> Trip:
        """Compute the shortest trip between two stations and persist it."""
        trip = self._route_calculator.calculate(from_station, to_station, accounting_code)
        self._trip_repository.save(trip)
        logger.info(
            f"Saved trip {trip.id}: {trip.from_station} -> {trip.to_station} "
            f"({trip.distance}, code '{trip.accounting_code}')"
        )
        return trip

    def get_trip(self, trip_id: str) -> Trip | None:
        return self._trip_repository.find_by_id(trip_id)

    def find_trips(
        self,
        accounting_code: str,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> list[Trip]:
        return self._trip_repository.find_by_accounting_code(accounting_code, from_date, to_date)

    def get_distances(
        self,
        from_date: date | None = None,
        to_date: date | None = None,
        group_by: GroupBy = GroupBy.NONE,
    ) -> DistanceReport:
        """Aggregate travelled distances per accounting code over an optional date window."""
        group_by = GroupBy(group_by)
        items = self._trip_repository.get_distances_by_accounting_code(
            from_date, to_date, group_by
        )
        return DistanceReport(
            from_date=from_date,
            to_date=to_date,
            group_by=group_by,
            items=items,
        )

    def list_stations(self) -> list[str]:
        return self._route_calculator.stations()

    def health(self) -> dict[str, Any]:
        """Report overall status, degraded when the trip store does not answer."""
        database_ok = self._trip_repository.is_available()
        return {
            "status": "OK" if database_ok else "DEGRADED",
            "timestamp": datetime.now(UTC).isoformat(timespec="seconds"),
            "service": SERVICE_NAME,
            "database": "OK" if database_ok else "ERROR",
        }
