"""Distance value object."""

import math
from dataclasses import dataclass

from rail_trips.domain.exceptions import InvalidDistanceError

DISTANCE_TOLERANCE_KM = 1e-4


@dataclass(frozen=True, eq=False)
class Distance:
    """A non-negative distance in kilometers.

    Equality tolerates DISTANCE_TOLERANCE_KM of drift so that sums built in a
    different order still compare equal.
    """

    kilometers: float

    def __post_init__(self) -> None:
        kilometers = float(self.kilometers)
        if not math.isfinite(kilometers):
            raise InvalidDistanceError("Distance must be a finite number")
        if kilometers < 0:
            raise InvalidDistanceError("Distance cannot be negative")
        object.__setattr__(self, "kilometers", kilometers)

    @classmethod
    def from_kilometers(cls, kilometers: float) -> "Distance":
        return cls(kilometers)

    @classmethod
    def zero(cls) -> "Distance":
        return cls(0.0)

    def is_zero(self) -> bool:
        return self.kilometers == 0.0

    def is_greater_than(self, other: "Distance") -> bool:
        return self.kilometers > other.kilometers

    def __add__(self, other: "Distance") -> "Distance":
        if not isinstance(other, Distance):
            return NotImplemented
        return Distance(self.kilometers + other.kilometers)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Distance):
            return NotImplemented
        return abs(self.kilometers - other.kilometers) < DISTANCE_TOLERANCE_KM

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return f"{self.kilometers:.2f} km"
