"""Trip domain model."""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any

from rail_trips.domain.models.distance import Distance
from rail_trips.domain.models.station_id import StationId

ACCOUNTING_CODE_MAX_LENGTH = 50


@dataclass(frozen=True)
class Trip:
    """A computed route between two stations, tagged with an accounting code.

    Created once per successful route calculation, persisted once and never
    modified afterwards.
    """

    id: str
    from_station: StationId
    to_station: StationId
    accounting_code: str
    distance: Distance
    path: tuple[StationId, ...]
    created_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    def __post_init__(self) -> None:
        object.__setattr__(self, "path", tuple(self.path))
        if not self.path:
            raise ValueError("Trip path cannot be empty")
        if self.path[0] != self.from_station or self.path[-1] != self.to_station:
            raise ValueError("Trip path must start at from_station and end at to_station")

    @property
    def distance_km(self) -> float:
        return self.distance.kilometers

    @property
    def path_ids(self) -> list[str]:
        return [station.value for station in self.path]

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the wire shape used by the HTTP API and the CLI."""
        return {
            "id": self.id,
            "fromStationId": self.from_station.value,
            "toStationId": self.to_station.value,
            "analyticCode": self.accounting_code,
            "distanceKm": self.distance_km,
            "path": self.path_ids,
            "createdAt": self.created_at.isoformat(),
        }
