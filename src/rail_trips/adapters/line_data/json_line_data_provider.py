"""JSON file implementation of the line data provider."""

import json
import logging
import math
from pathlib import Path
from typing import Any

from rail_trips.domain.exceptions import InvalidStationIdError
from rail_trips.domain.models.rail_line import LineSegment, RailLine
from rail_trips.domain.models.station_id import StationId
from rail_trips.domain.ports.line_data_provider import LineDataProvider

logger = logging.getLogger(__name__)


class DataProviderError(RuntimeError):
    """The line data file could not be read or does not describe a network."""

    code = "DATA_PROVIDER_ERROR"

    @classmethod
    def cannot_read_file(cls, path: Path, reason: str) -> "DataProviderError":
        return cls(f"Cannot read data file: {path} ({reason})")

    @classmethod
    def invalid_json(cls, path: Path, error: str) -> "DataProviderError":
        return cls(f"Invalid JSON in data file '{path}': {error}")

    @classmethod
    def invalid_segment(cls, path: Path, line_name: str, error: str) -> "DataProviderError":
        return cls(f"Invalid segment in line '{line_name}' of '{path}': {error}")


class JsonLineDataProvider(LineDataProvider):
    """Reads rail lines from a JSON file of the form:

        [{"name": "...", "distances": [{"parent": "MX", "child": "CGE", "distance": 0.65}]}]

    The file is parsed once; later calls return the cached lines.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lines: list[RailLine] | None = None

    def get_lines(self) -> list[RailLine]:
        if self._lines is None:
            self._lines = self._load()
            segment_count = sum(len(line.segments) for line in self._lines)
            logger.info(
                f"Loaded {len(self._lines)} line(s) with {segment_count} segment(s) "
                f"from {self._path}"
            )
        return self._lines

    def _load(self) -> list[RailLine]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except OSError as e:
            raise DataProviderError.cannot_read_file(self._path, str(e)) from e

        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DataProviderError.invalid_json(self._path, str(e)) from e

        if not isinstance(data, list):
            raise DataProviderError.invalid_json(self._path, "top-level value must be a list")

        return [self._parse_line(line_data) for line_data in data]

    def _parse_line(self, line_data: Any) -> RailLine:
        if not isinstance(line_data, dict):
            raise DataProviderError.invalid_json(self._path, "each line must be an object")

        name = str(line_data.get("name", ""))
        segments = line_data.get("distances", [])
        if not isinstance(segments, list):
            raise DataProviderError.invalid_segment(self._path, name, "'distances' must be a list")

        return RailLine(
            name=name,
            segments=[self._parse_segment(name, segment) for segment in segments],
        )

    def _parse_segment(self, line_name: str, segment: Any) -> LineSegment:
        if not isinstance(segment, dict):
            raise DataProviderError.invalid_segment(
                self._path, line_name, "segment must be an object"
            )

        missing = [key for key in ("parent", "child", "distance") if key not in segment]
        if missing:
            raise DataProviderError.invalid_segment(
                self._path, line_name, f"missing field(s) {', '.join(missing)}"
            )

        try:
            distance_km = float(segment["distance"])
        except (TypeError, ValueError) as e:
            raise DataProviderError.invalid_segment(
                self._path, line_name, f"distance {segment['distance']!r} is not a number"
            ) from e

        if not math.isfinite(distance_km):
            raise DataProviderError.invalid_segment(
                self._path, line_name, f"distance {distance_km} is not finite"
            )
        if distance_km < 0:
            raise DataProviderError.invalid_segment(
                self._path, line_name, f"distance {distance_km} is negative"
            )

        try:
            parent = StationId(str(segment["parent"]))
            child = StationId(str(segment["child"]))
        except InvalidStationIdError as e:
            raise DataProviderError.invalid_segment(self._path, line_name, str(e)) from e

        return LineSegment(parent=parent.value, child=child.value, distance_km=distance_km)
