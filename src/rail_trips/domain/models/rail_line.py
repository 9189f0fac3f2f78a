"""Rail line domain models."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LineSegment:
    """A direct connection between two stations on a line."""

    parent: str
    child: str
    distance_km: float


@dataclass(frozen=True)
class RailLine:
    """A named rail line made of consecutive segments."""

    name: str
    segments: list[LineSegment] = field(default_factory=list)
