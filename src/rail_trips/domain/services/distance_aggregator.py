"""Aggregates trip distances per accounting code and time bucket."""

from collections.abc import Iterable
from datetime import UTC, date, datetime, time

from rail_trips.domain.models.aggregation import AggregationRow, GroupBy
from rail_trips.domain.models.trip import Trip
from rail_trips.domain.services.period_calculator import period_bounds

UNGROUPED_LABEL = "all"

_BUCKET_FORMATS = {
    GroupBy.DAY: "%Y-%m-%d",
    GroupBy.MONTH: "%Y-%m",
    GroupBy.YEAR: "%Y",
}


def _as_utc(moment: datetime) -> datetime:
    if moment.tzinfo is None:
        return moment.replace(tzinfo=UTC)
    return moment.astimezone(UTC)


def start_of_window(from_date: date) -> datetime:
    """Return the first instant included by a lower date bound.

    A plain date starts at midnight UTC; a datetime is used as given.
    """
    if isinstance(from_date, datetime):
        return _as_utc(from_date)
    return datetime.combine(from_date, time.min, tzinfo=UTC)


def end_of_day(to_date: date) -> datetime:
    """Return 23:59:59 UTC of the given day, the last instant included by an upper bound."""
    day = to_date.date() if isinstance(to_date, datetime) else to_date
    return datetime.combine(day, time(23, 59, 59), tzinfo=UTC)


def is_within_window(
    created_at: datetime,
    from_date: date | None = None,
    to_date: date | None = None,
) -> bool:
    """Check whether a creation timestamp falls inside an optional date window."""
    moment = _as_utc(created_at)
    if from_date is not None and moment < start_of_window(from_date):
        return False
    if to_date is not None and moment > end_of_day(to_date):
        return False
    return True


def bucket_label(created_at: datetime, group_by: GroupBy) -> str:
    """Format the time bucket a trip falls into ("all" when ungrouped)."""
    bucket_format = _BUCKET_FORMATS.get(GroupBy(group_by))
    if bucket_format is None:
        return UNGROUPED_LABEL
    return _as_utc(created_at).strftime(bucket_format)


def sort_rows(rows: Iterable[AggregationRow], group_by: GroupBy) -> list[AggregationRow]:
    """Order rows by (group, accounting code) when grouped, by accounting code otherwise."""
    if GroupBy(group_by) is GroupBy.NONE:
        return sorted(rows, key=lambda row: row.accounting_code)
    return sorted(rows, key=lambda row: (row.group or "", row.accounting_code))


def aggregate_distances(
    trips: Iterable[Trip],
    from_date: date | None = None,
    to_date: date | None = None,
    group_by: GroupBy = GroupBy.NONE,
) -> list[AggregationRow]:
    """Sum trip distances per accounting code, optionally bucketed by day, month or year.

    Args:
        trips: Trips to aggregate.
        from_date: Keep trips created on or after this date (inclusive).
        to_date: Keep trips created up to 23:59:59 of this date (inclusive).
        group_by: Bucket granularity; GroupBy.NONE returns one row per code.

    Returns:
        Aggregated rows; grouped rows carry their bucket label and period bounds.
    """
    group_by = GroupBy(group_by)
    totals: dict[tuple[str, str], float] = {}

    for trip in trips:
        if not is_within_window(trip.created_at, from_date, to_date):
            continue
        key = (trip.accounting_code, bucket_label(trip.created_at, group_by))
        totals[key] = totals.get(key, 0.0) + trip.distance_km

    rows = []
    for (accounting_code, group), total in totals.items():
        if group_by is GroupBy.NONE:
            rows.append(AggregationRow(accounting_code=accounting_code, total_distance_km=total))
            continue
        period_start, period_end = period_bounds(group, group_by)
        rows.append(
            AggregationRow(
                accounting_code=accounting_code,
                total_distance_km=total,
                group=group,
                period_start=period_start,
                period_end=period_end,
            )
        )

    return sort_rows(rows, group_by)
