"""Starlette web adapter exposing the trip use cases over HTTP."""

from __future__ import annotations

import json
import logging
from datetime import date
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError
from starlette.applications import Starlette
from starlette.concurrency import run_in_threadpool
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.routing import Route

from rail_trips.adapters.config import AppConfig
from rail_trips.domain.exceptions import (
    InvalidStationIdError,
    NoRouteFoundError,
    StationNotFoundError,
)
from rail_trips.domain.models import GroupBy

from .rate_limit_middleware import RateLimitMiddleware
from .schemas import CalculateTripRequest, validation_details

if TYPE_CHECKING:
    from rail_trips.domain.ports import TripService

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def _validation_failed(details: list[str]) -> JSONResponse:
    return JSONResponse({"message": "Validation failed", "details": details}, status_code=400)


def _error(code: str, message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"code": code, "message": message}, status_code=status_code)


def _parse_date(value: str | None) -> date | None:
    if not value:
        return None
    return date.fromisoformat(value)


class TripWebAdapter:
    """HTTP adapter for calculating trips and reading distance statistics."""

    def __init__(self, trip_service: TripService, config: AppConfig) -> None:
        """Initialize the web adapter.

        Args:
            trip_service: Use cases for trips (calculation, lookup, statistics).
            config: Application configuration.
        """
        if not isinstance(config, AppConfig):
            raise TypeError("config must be an AppConfig instance")
        # Protocols can't be checked with isinstance, verify required methods exist
        if not callable(getattr(trip_service, "calculate_trip", None)):
            raise TypeError("trip_service must implement TripService protocol")

        self.trip_service = trip_service
        self.config = config
        self._server: Any | None = None

    def create_app(self) -> Starlette:
        """Build the ASGI application with all routes and rate limiting."""
        routes = [
            Route(f"{API_PREFIX}/routes", self.create_trip, methods=["POST"]),
            Route(f"{API_PREFIX}/routes/{{trip_id}}", self.get_trip, methods=["GET"]),
            Route(f"{API_PREFIX}/stats/distances", self.get_distances, methods=["GET"]),
            Route(f"{API_PREFIX}/stations", self.list_stations, methods=["GET"]),
            Route(f"{API_PREFIX}/health", self.health, methods=["GET"]),
            Route("/healthz", self.healthz, methods=["GET"]),
        ]
        middleware = [
            Middleware(
                RateLimitMiddleware,
                requests_per_minute=self.config.rate_limit_per_minute,
            )
        ]
        return Starlette(routes=routes, middleware=middleware)

    async def create_trip(self, request: Request) -> Response:
        """Calculate the shortest trip for the posted stations and store it."""
        body = await request.body()
        if not body.strip():
            return _validation_failed(["Request body is required"])

        try:
            data = json.loads(body)
        except json.JSONDecodeError:
            return _validation_failed(["Invalid JSON body"])
        if not isinstance(data, dict):
            return _validation_failed(["Request body must be a JSON object"])

        try:
            payload = CalculateTripRequest.model_validate(data)
        except ValidationError as e:
            return _validation_failed(validation_details(e))

        max_length = self.config.accounting_code_max_length
        if len(payload.analytic_code) > max_length:
            return _validation_failed([f"analyticCode cannot exceed {max_length} characters"])

        try:
            trip = await run_in_threadpool(
                self.trip_service.calculate_trip,
                payload.from_station_id,
                payload.to_station_id,
                payload.analytic_code,
            )
        except (StationNotFoundError, NoRouteFoundError, InvalidStationIdError) as e:
            logger.warning(f"Rejected trip request: {e}")
            return _error(e.code, str(e), 422)

        return JSONResponse(trip.to_dict(), status_code=201)

    async def get_trip(self, request: Request) -> Response:
        trip_id = request.path_params["trip_id"]
        trip = await run_in_threadpool(self.trip_service.get_trip, trip_id)
        if trip is None:
            return _error("TRIP_NOT_FOUND", f"Trip '{trip_id}' not found", 404)
        return JSONResponse(trip.to_dict())

    async def get_distances(self, request: Request) -> Response:
        """Return distances aggregated per analytic code, optionally per day, month or year."""
        params = request.query_params

        try:
            group_by = GroupBy(params.get("groupBy") or GroupBy.NONE.value)
        except ValueError:
            valid = ", ".join(option.value for option in GroupBy)
            return _error("INVALID_GROUP_BY", f"groupBy must be one of: {valid}", 400)

        try:
            from_date = _parse_date(params.get("from"))
            to_date = _parse_date(params.get("to"))
        except ValueError:
            return _error("INVALID_DATE", "from and to must be dates formatted YYYY-MM-DD", 400)

        if from_date and to_date and from_date > to_date:
            return _error(
                "INVALID_DATE_RANGE", "from date must be before or equal to to date", 400
            )

        report = await run_in_threadpool(
            self.trip_service.get_distances, from_date, to_date, group_by
        )
        return JSONResponse(report.to_dict())

    async def list_stations(self, _request: Request) -> Response:
        return JSONResponse({"stations": self.trip_service.list_stations()})

    async def health(self, _request: Request) -> Response:
        """Service and storage status for monitoring."""
        return JSONResponse(await run_in_threadpool(self.trip_service.health))

    async def healthz(self, _request: Request) -> Response:
        """Health check endpoint for load balancers."""
        return Response(content="Ok", media_type="text/plain")

    async def start(self) -> None:
        """Start the web server."""
        import uvicorn

        config = uvicorn.Config(
            self.create_app(),
            host=self.config.host,
            port=self.config.port,
            log_level=self.config.log_level.lower(),
        )
        self._server = uvicorn.Server(config)
        logger.info(f"Serving trip API on http://{self.config.host}:{self.config.port}")

        await self._server.serve()

    async def stop(self) -> None:
        """Stop the web server."""
        if self._server:
            self._server.should_exit = True
