"""Calendar period bounds for aggregation buckets."""

import calendar

from rail_trips.domain.models.aggregation import GroupBy


def period_bounds(group: str, group_by: GroupBy | str) -> tuple[str, str]:
    """Return the (period_start, period_end) dates covered by a bucket label.

    Args:
        group: Bucket label, e.g. "2025-01-15" for day, "2025-01" for month, "2025" for year.
        group_by: Granularity the label was produced with.

    Returns:
        ISO date strings for the first and last day of the period, or ("", "")
        when the granularity has no period (none or unknown).
    """
    try:
        granularity = GroupBy(group_by)
    except ValueError:
        return "", ""

    if granularity is GroupBy.DAY:
        return group, group
    if granularity is GroupBy.MONTH:
        year, month = (int(part) for part in group.split("-")[:2])
        last_day = calendar.monthrange(year, month)[1]
        return f"{group}-01", f"{year:04d}-{month:02d}-{last_day:02d}"
    if granularity is GroupBy.YEAR:
        return f"{group}-01-01", f"{group}-12-31"
    return "", ""
