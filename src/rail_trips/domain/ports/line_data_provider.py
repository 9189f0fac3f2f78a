"""Line data provider port."""

from typing import Protocol

from rail_trips.domain.models.rail_line import RailLine


class LineDataProvider(Protocol):
    """Port for reading the static network description (lines and segment distances)."""

    def get_lines(self) -> list[RailLine]:
        """Return every rail line with its segments."""
        ...
