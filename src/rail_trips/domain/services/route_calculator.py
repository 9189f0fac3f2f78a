"""Shortest-path route calculation over the station graph."""

import heapq
import math
from collections.abc import Callable
from datetime import UTC, datetime
from types import MappingProxyType

from rail_trips.domain.exceptions import NoRouteFoundError, StationNotFoundError
from rail_trips.domain.models.distance import Distance
from rail_trips.domain.models.station_id import StationId
from rail_trips.domain.models.trip import Trip
from rail_trips.domain.ports.id_generator import IdGenerator
from rail_trips.domain.services.graph_builder import Graph


def _utc_now() -> datetime:
    return datetime.now(UTC)


class RouteCalculator:
    """Computes shortest trips between stations using Dijkstra's algorithm.

    The graph is frozen on construction and only read afterwards, so one
    calculator can serve concurrent calculations without locking.
    """

    def __init__(
        self,
        graph: Graph,
        id_generator: IdGenerator,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize with a built graph and the trip id generator.

        Args:
            graph: Adjacency map as returned by GraphBuilder.build().
            id_generator: Source of unique trip ids.
            clock: Returns the creation timestamp for new trips (defaults to UTC now).
        """
        self._graph: Graph = MappingProxyType(
            {station: MappingProxyType(dict(neighbors)) for station, neighbors in graph.items()}
        )
        self._id_generator = id_generator
        self._clock = clock or _utc_now

    @property
    def graph(self) -> Graph:
        return self._graph

    def stations(self) -> list[str]:
        """Return every station id known to the graph, sorted."""
        return sorted(self._graph)

    def calculate(self, from_station: str, to_station: str, accounting_code: str) -> Trip:
        """Find the shortest trip from one station to another.

        Raises:
            InvalidStationIdError: If a station id is empty or longer than 10 characters.
            StationNotFoundError: If either station is not in the graph.
            NoRouteFoundError: If no chain of segments connects the two stations.
        """
        source = StationId(from_station)
        target = StationId(to_station)

        if source.value not in self._graph:
            raise StationNotFoundError(source.value)
        if target.value not in self._graph:
            raise StationNotFoundError(target.value)

        if source == target:
            return self._create_trip(source, target, accounting_code, 0.0, [source.value])

        distance_km, path = self._shortest_path(source.value, target.value)
        return self._create_trip(source, target, accounting_code, distance_km, path)

    def _shortest_path(self, source: str, target: str) -> tuple[float, list[str]]:
        """Run Dijkstra from source, stopping once target is settled.

        Heap entries are (distance, station) so that equal distances settle the
        lexicographically smaller station first. A station keeps the first
        predecessor that reached its final distance.
        """
        distances: dict[str, float] = {source: 0.0}
        previous: dict[str, str] = {}
        visited: set[str] = set()
        heap: list[tuple[float, str]] = [(0.0, source)]

        while heap:
            current_distance, current = heapq.heappop(heap)
            if current in visited:
                continue
            if current == target:
                break
            visited.add(current)

            for neighbor, weight in self._graph[current].items():
                if neighbor in visited:
                    continue
                candidate = current_distance + weight
                if candidate < distances.get(neighbor, math.inf):
                    distances[neighbor] = candidate
                    previous[neighbor] = current
                    heapq.heappush(heap, (candidate, neighbor))

        if distances.get(target, math.inf) == math.inf:
            raise NoRouteFoundError(source, target)

        path = [target]
        while path[-1] != source:
            path.append(previous[path[-1]])
        path.reverse()

        return distances[target], path

    def _create_trip(
        self,
        source: StationId,
        target: StationId,
        accounting_code: str,
        distance_km: float,
        path: list[str],
    ) -> Trip:
        return Trip(
            id=self._id_generator.generate(),
            from_station=source,
            to_station=target,
            accounting_code=accounting_code,
            distance=Distance.from_kilometers(distance_km),
            path=tuple(StationId(station) for station in path),
            created_at=self._clock(),
        )
