"""SQLAlchemy table mapping for trips and conversion to and from the domain model."""

from datetime import UTC, datetime

from sqlalchemy import JSON, Column, DateTime, Float, String
from sqlalchemy.orm import declarative_base

from rail_trips.domain.models.distance import Distance
from rail_trips.domain.models.station_id import STATION_ID_MAX_LENGTH, StationId
from rail_trips.domain.models.trip import ACCOUNTING_CODE_MAX_LENGTH, Trip

Base = declarative_base()


class TripModel(Base):
    """SQLAlchemy model for a persisted trip."""

    __tablename__ = "trips"

    id = Column(String(36), primary_key=True)
    from_station_id = Column(String(STATION_ID_MAX_LENGTH), nullable=False)
    to_station_id = Column(String(STATION_ID_MAX_LENGTH), nullable=False)
    analytic_code = Column(String(ACCOUNTING_CODE_MAX_LENGTH), nullable=False, index=True)
    distance_km = Column(Float, nullable=False)
    path = Column(JSON, nullable=False)
    # Naive UTC; not every backend keeps the offset
    created_at = Column(DateTime, nullable=False, index=True)


def to_db_datetime(moment: datetime) -> datetime:
    """Convert a timestamp to the naive UTC form stored in the created_at column."""
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(UTC).replace(tzinfo=None)


def from_db_datetime(moment: datetime) -> datetime:
    return moment.replace(tzinfo=UTC)


def to_model(trip: Trip) -> TripModel:
    return TripModel(
        id=trip.id,
        from_station_id=trip.from_station.value,
        to_station_id=trip.to_station.value,
        analytic_code=trip.accounting_code,
        distance_km=trip.distance_km,
        path=trip.path_ids,
        created_at=to_db_datetime(trip.created_at),
    )


def to_trip(model: TripModel) -> Trip:
    return Trip(
        id=model.id,
        from_station=StationId(model.from_station_id),
        to_station=StationId(model.to_station_id),
        accounting_code=model.analytic_code,
        distance=Distance.from_kilometers(model.distance_km),
        path=tuple(StationId(station) for station in model.path),
        created_at=from_db_datetime(model.created_at),
    )
