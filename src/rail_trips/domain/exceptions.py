"""Domain errors raised by the routing core."""


class RailTripsError(Exception):
    """Base class for errors a caller can recover from."""

    code = "RAIL_TRIPS_ERROR"


class StationNotFoundError(RailTripsError):
    """A requested station does not exist in the network graph."""

    code = "STATION_NOT_FOUND"

    def __init__(self, station_id: str) -> None:
        super().__init__(f"Station '{station_id}' not found")
        self.station_id = station_id


class NoRouteFoundError(RailTripsError):
    """Both stations exist but no chain of segments connects them."""

    code = "NO_ROUTE_FOUND"

    def __init__(self, from_station: str, to_station: str) -> None:
        super().__init__(f"No route found from '{from_station}' to '{to_station}'")
        self.from_station = from_station
        self.to_station = to_station


class InvalidDistanceError(RailTripsError, ValueError):
    code = "INVALID_DISTANCE"


class InvalidStationIdError(RailTripsError, ValueError):
    code = "INVALID_STATION_ID"
