"""Relational trip repository backed by SQLAlchemy."""

import logging
from datetime import date
from typing import Any

from sqlalchemy import Select, create_engine, func, literal_column, select, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from rail_trips.adapters.persistence.sql_models import (
    Base,
    TripModel,
    to_db_datetime,
    to_model,
    to_trip,
)
from rail_trips.domain.models.aggregation import AggregationRow, GroupBy
from rail_trips.domain.models.trip import Trip
from rail_trips.domain.ports.trip_repository import TripRepository
from rail_trips.domain.services.distance_aggregator import end_of_day, start_of_window
from rail_trips.domain.services.period_calculator import period_bounds

logger = logging.getLogger(__name__)

_SQLITE_BUCKET_FORMATS = {
    GroupBy.DAY: "%Y-%m-%d",
    GroupBy.MONTH: "%Y-%m",
    GroupBy.YEAR: "%Y",
}

_POSTGRES_BUCKET_FORMATS = {
    GroupBy.DAY: "YYYY-MM-DD",
    GroupBy.MONTH: "YYYY-MM",
    GroupBy.YEAR: "YYYY",
}


def accounting_code_order(dialect_name: str) -> Any:
    """Order analytic codes by code point, like Python's sorted().

    PostgreSQL databases usually default to a locale collation, so the "C"
    collation is requested explicitly; SQLite already compares bytes.
    """
    if dialect_name == "postgresql":
        return TripModel.analytic_code.collate("C")
    return TripModel.analytic_code


class SqlTripRepository(TripRepository):
    """Stores trips in a relational database and aggregates distances in SQL.

    Supports SQLite and PostgreSQL. Bucketing and date filtering are pushed
    down into the query and give the same rows as the in-memory repository.
    """

    def __init__(self, engine: Engine) -> None:
        """Initialize with an engine; the trips table is created if missing."""
        self._engine = engine
        self._session_factory = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
        Base.metadata.create_all(engine)

    @classmethod
    def from_url(cls, database_url: str) -> "SqlTripRepository":
        return cls(create_engine(database_url, pool_pre_ping=True))

    def save(self, trip: Trip) -> None:
        with self._session_factory() as session:
            try:
                session.add(to_model(trip))
                session.commit()
            except SQLAlchemyError:
                session.rollback()
                logger.exception(f"Failed to save trip {trip.id}")
                raise

    def find_by_id(self, trip_id: str) -> Trip | None:
        with self._session_factory() as session:
            model = session.get(TripModel, trip_id)
            return to_trip(model) if model is not None else None

    def find_by_accounting_code(
        self,
        code: str,
        from_date: date | None = None,
        to_date: date | None = None,
    ) -> list[Trip]:
        stmt = (
            select(TripModel)
            .where(TripModel.analytic_code == code)
            .order_by(TripModel.created_at.desc())
        )
        stmt = self._apply_window(stmt, from_date, to_date)

        with self._session_factory() as session:
            return [to_trip(model) for model in session.scalars(stmt)]

    def get_distances_by_accounting_code(
        self,
        from_date: date | None = None,
        to_date: date | None = None,
        group_by: GroupBy = GroupBy.NONE,
    ) -> list[AggregationRow]:
        group_by = GroupBy(group_by)
        total = func.sum(TripModel.distance_km).label("total_distance_km")
        code_order = accounting_code_order(self._engine.dialect.name)

        if group_by is GroupBy.NONE:
            stmt = (
                select(TripModel.analytic_code, total)
                .group_by(TripModel.analytic_code)
                .order_by(code_order)
            )
        else:
            bucket = self._bucket_expression(group_by)
            stmt = (
                select(TripModel.analytic_code, total, bucket.label("bucket"))
                .group_by(TripModel.analytic_code, bucket)
                .order_by(bucket, code_order)
            )
        stmt = self._apply_window(stmt, from_date, to_date)

        with self._session_factory() as session:
            rows = session.execute(stmt).all()

        return [self._to_row(row, group_by) for row in rows]

    def is_available(self) -> bool:
        try:
            with self._engine.connect() as connection:
                connection.execute(text("SELECT 1"))
        except SQLAlchemyError as e:
            logger.warning(f"Trip database is not reachable: {e}")
            return False
        return True

    def _apply_window(
        self, stmt: Select[Any], from_date: date | None, to_date: date | None
    ) -> Select[Any]:
        if from_date is not None:
            stmt = stmt.where(TripModel.created_at >= to_db_datetime(start_of_window(from_date)))
        if to_date is not None:
            stmt = stmt.where(TripModel.created_at <= to_db_datetime(end_of_day(to_date)))
        return stmt

    def _bucket_expression(self, group_by: GroupBy) -> Any:
        # Formats are inlined as literals so SELECT and GROUP BY render the same expression
        if self._engine.dialect.name == "postgresql":
            pattern = literal_column(f"'{_POSTGRES_BUCKET_FORMATS[group_by]}'")
            return func.to_char(TripModel.created_at, pattern)
        pattern = literal_column(f"'{_SQLITE_BUCKET_FORMATS[group_by]}'")
        return func.strftime(pattern, TripModel.created_at)

    @staticmethod
    def _to_row(row: Any, group_by: GroupBy) -> AggregationRow:
        if group_by is GroupBy.NONE:
            return AggregationRow(
                accounting_code=row.analytic_code,
                total_distance_km=float(row.total_distance_km),
            )
        period_start, period_end = period_bounds(row.bucket, group_by)
        return AggregationRow(
            accounting_code=row.analytic_code,
            total_distance_km=float(row.total_distance_km),
            group=row.bucket,
            period_start=period_start,
            period_end=period_end,
        )
