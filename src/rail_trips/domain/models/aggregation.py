"""Distance aggregation domain models."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Any


class GroupBy(str, Enum):
    """Time granularity used to bucket aggregated distances."""

    DAY = "day"
    MONTH = "month"
    YEAR = "year"
    NONE = "none"


@dataclass(frozen=True)
class AggregationRow:
    """Total distance travelled under one accounting code, optionally per period.

    group, period_start and period_end are only set for grouped queries.
    """

    accounting_code: str
    total_distance_km: float
    group: str | None = None
    period_start: str | None = None
    period_end: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "analyticCode": self.accounting_code,
            "totalDistanceKm": self.total_distance_km,
        }
        if self.group is not None:
            data["group"] = self.group
            data["periodStart"] = self.period_start
            data["periodEnd"] = self.period_end
        return data


@dataclass(frozen=True)
class DistanceReport:
    """Answer to a distances-by-code query, echoing the query parameters."""

    from_date: date | None
    to_date: date | None
    group_by: GroupBy
    items: list[AggregationRow] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "from": self.from_date.isoformat() if self.from_date else None,
            "to": self.to_date.isoformat() if self.to_date else None,
            "groupBy": self.group_by.value,
            "items": [item.to_dict() for item in self.items],
        }
