"""Station identifier value object."""

from dataclasses import dataclass

from rail_trips.domain.exceptions import InvalidStationIdError

STATION_ID_MAX_LENGTH = 10


@dataclass(frozen=True)
class StationId:
    """Short code identifying a station on the network (e.g. "MX").

    Surrounding whitespace is trimmed before validation, so two ids built from
    " MX " and "MX" compare equal.
    """

    value: str

    def __post_init__(self) -> None:
        trimmed = str(self.value).strip()
        if not trimmed:
            raise InvalidStationIdError("Station ID cannot be empty")
        if len(trimmed) > STATION_ID_MAX_LENGTH:
            raise InvalidStationIdError(
                f"Station ID cannot exceed {STATION_ID_MAX_LENGTH} characters"
            )
        object.__setattr__(self, "value", trimmed)

    def __str__(self) -> str:
        return self.value
