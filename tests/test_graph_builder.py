"""Tests for GraphBuilder."""

from rail_trips.domain.models import LineSegment, RailLine
from rail_trips.domain.services import GraphBuilder


def test_segments_are_inserted_in_both_directions() -> None:
    """Given one segment, when building the graph, then both stations see each other."""
    lines = [RailLine(name="L1", segments=[LineSegment("A", "B", 1.5)])]

    graph = GraphBuilder().build(lines)

    assert graph == {"A": {"B": 1.5}, "B": {"A": 1.5}}


def test_lines_sharing_a_station_are_joined() -> None:
    """Given two lines through a common station, when building, then the station links both."""
    lines = [
        RailLine(name="L1", segments=[LineSegment("A", "B", 1.0)]),
        RailLine(name="L2", segments=[LineSegment("B", "C", 2.0)]),
    ]

    graph = GraphBuilder().build(lines)

    assert graph["B"] == {"A": 1.0, "C": 2.0}
    assert set(graph) == {"A", "B", "C"}


def test_repeated_pair_keeps_last_distance() -> None:
    """Given the same pair listed twice, when building, then the last distance wins both ways."""
    lines = [
        RailLine(name="L1", segments=[LineSegment("A", "B", 5.0)]),
        RailLine(name="L2", segments=[LineSegment("B", "A", 3.0)]),
    ]

    graph = GraphBuilder().build(lines)

    assert graph["A"]["B"] == 3.0
    assert graph["B"]["A"] == 3.0


def test_integer_distances_become_floats() -> None:
    graph = GraphBuilder().build([RailLine(name="L1", segments=[LineSegment("A", "B", 2)])])

    assert isinstance(graph["A"]["B"], float)


def test_empty_input_builds_empty_graph() -> None:
    assert GraphBuilder().build([]) == {}
    assert GraphBuilder().build([RailLine(name="empty")]) == {}
