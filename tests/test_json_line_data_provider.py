"""Tests for the JSON line data provider."""

import json
from pathlib import Path

import pytest

from rail_trips.adapters.line_data import DataProviderError, JsonLineDataProvider
from rail_trips.domain.models import LineSegment

REPOSITORY_DATA_FILE = Path(__file__).parent.parent / "data" / "distances.json"


def write_lines(tmp_path: Path, data: object) -> Path:
    path = tmp_path / "distances.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return path


def test_lines_and_segments_are_parsed(tmp_path: Path) -> None:
    """Given a valid file, when loading, then lines carry their segments in order."""
    path = write_lines(
        tmp_path,
        [
            {
                "name": "Line 1",
                "distances": [
                    {"parent": "MX", "child": "CGE", "distance": 0.65},
                    {"parent": " CGE ", "child": "VUAR", "distance": 1},
                ],
            }
        ],
    )

    lines = JsonLineDataProvider(path).get_lines()

    assert len(lines) == 1
    assert lines[0].name == "Line 1"
    assert lines[0].segments == [
        LineSegment("MX", "CGE", 0.65),
        LineSegment("CGE", "VUAR", 1.0),
    ]


def test_lines_are_read_once(tmp_path: Path) -> None:
    """Given a loaded provider, when the file is removed, then the cached lines are returned."""
    path = write_lines(tmp_path, [{"name": "L", "distances": []}])
    provider = JsonLineDataProvider(path)
    first = provider.get_lines()

    path.unlink()

    assert provider.get_lines() is first


def test_bundled_network_file_loads() -> None:
    lines = JsonLineDataProvider(REPOSITORY_DATA_FILE).get_lines()

    assert lines
    assert all(line.segments for line in lines)


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(DataProviderError, match="Cannot read data file") as exc_info:
        JsonLineDataProvider(tmp_path / "missing.json").get_lines()

    assert exc_info.value.code == "DATA_PROVIDER_ERROR"


def test_malformed_json_raises(tmp_path: Path) -> None:
    path = tmp_path / "distances.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(DataProviderError, match="Invalid JSON"):
        JsonLineDataProvider(path).get_lines()


@pytest.mark.parametrize(
    ("data", "message"),
    [
        ({"name": "L"}, "top-level value must be a list"),
        (["not a line"], "each line must be an object"),
        ([{"name": "L", "distances": {}}], "'distances' must be a list"),
        ([{"name": "L", "distances": ["MX"]}], "segment must be an object"),
        ([{"name": "L", "distances": [{"parent": "MX"}]}], "missing field"),
        (
            [{"name": "L", "distances": [{"parent": "A", "child": "B", "distance": "far"}]}],
            "is not a number",
        ),
        (
            [{"name": "L", "distances": [{"parent": "A", "child": "B", "distance": -1}]}],
            "is negative",
        ),
        (
            [{"name": "L", "distances": [{"parent": "A", "child": "B", "distance": float("nan")}]}],
            "is not finite",
        ),
        (
            [{"name": "L", "distances": [{"parent": "A", "child": "B", "distance": float("inf")}]}],
            "is not finite",
        ),
        (
            [
                {
                    "name": "L",
                    "distances": [{"parent": "VERYLONGSTATION", "child": "B", "distance": 1}],
                }
            ],
            "cannot exceed 10",
        ),
        (
            [{"name": "L", "distances": [{"parent": "A", "child": "  ", "distance": 1}]}],
            "cannot be empty",
        ),
    ],
)
def test_invalid_structure_is_rejected(tmp_path: Path, data: object, message: str) -> None:
    """Given a file that does not describe a network, when loading, then loading fails."""
    path = write_lines(tmp_path, data)

    with pytest.raises(DataProviderError, match=message):
        JsonLineDataProvider(path).get_lines()


def test_station_ids_are_normalized_like_route_requests(tmp_path: Path) -> None:
    """Given padded station codes, when loading, then segments hold the trimmed codes."""
    path = write_lines(
        tmp_path,
        [{"name": "L", "distances": [{"parent": "  MX", "child": "CGE  ", "distance": 2}]}],
    )

    lines = JsonLineDataProvider(path).get_lines()

    assert lines[0].segments == [LineSegment("MX", "CGE", 2.0)]
