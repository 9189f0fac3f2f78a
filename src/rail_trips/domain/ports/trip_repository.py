"""Trip repository port."""

from datetime import date
from typing import Protocol

from rail_trips.domain.models.aggregation import AggregationRow, GroupBy
from rail_trips.domain.models.trip import Trip


class TripRepository(Protocol):
    """Port for persisting trips and querying them back."""

    def save(self, trip: Trip) -> None:
        """Persist a newly calculated trip."""
        ...

    def find_by_id(self, trip_id: str) -> Trip | None:
        """Return the trip with this id, or None."""
        ...

    def find_by_accounting_code(
        self,
        code: str,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> list[Trip]:
        """Return trips for an accounting code, newest first.

        to_date is inclusive through 23:59:59 of that day.
        """
        ...

    def get_distances_by_accounting_code(
        self,
        from_date: date | None = None,
        to_date: date | None = None,
        group_by: GroupBy = GroupBy.NONE,
    ) -> list[AggregationRow]:
        """Sum trip distances per accounting code (and per period when grouped).

        Grouped rows are ordered by (group, accounting code), ungrouped rows by
        accounting code.
        """
        ...

    def is_available(self) -> bool:
        """Return True when the backing store answers queries."""
        ...
