"""Builds the weighted station graph from rail line data."""

from collections.abc import Iterable, Mapping

from rail_trips.domain.models.rail_line import RailLine

# station id -> neighbor station id -> distance in km
Graph = Mapping[str, Mapping[str, float]]


class GraphBuilder:
    """Turns rail line segments into an undirected adjacency map."""

    def build(self, lines: Iterable[RailLine]) -> dict[str, dict[str, float]]:
        """Build the graph, inserting every segment in both directions.

        A pair listed more than once keeps the last distance seen.
        """
        graph: dict[str, dict[str, float]] = {}

        for line in lines:
            for segment in line.segments:
                distance = float(segment.distance_km)
                graph.setdefault(segment.parent, {})[segment.child] = distance
                graph.setdefault(segment.child, {})[segment.parent] = distance

        return graph
