"""Tests for the in-memory and SQL trip repositories."""

from collections.abc import Iterator
from datetime import UTC, date, datetime, timedelta, timezone

import pytest
from sqlalchemy import create_engine, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.pool import StaticPool

from rail_trips.adapters.persistence import InMemoryTripRepository, SqlTripRepository
from rail_trips.adapters.persistence.sql_models import TripModel
from rail_trips.adapters.persistence.sql_trip_repository import accounting_code_order
from rail_trips.domain.models import Distance, GroupBy, StationId, Trip
from rail_trips.domain.ports import TripRepository


def make_trip(
    trip_id: str,
    code: str,
    distance_km: float,
    created_at: datetime,
    path: tuple[str, ...] = ("MX", "CGE", "VUAR"),
) -> Trip:
    return Trip(
        id=trip_id,
        from_station=StationId(path[0]),
        to_station=StationId(path[-1]),
        accounting_code=code,
        distance=Distance(distance_km),
        path=tuple(StationId(station) for station in path),
        created_at=created_at,
    )


SAMPLE_TRIPS = [
    make_trip("t1", "ANA-2", 10.0, datetime(2025, 1, 10, 8, 0, tzinfo=UTC)),
    make_trip("t2", "ANA-1", 5.0, datetime(2025, 1, 10, 9, 0, tzinfo=UTC)),
    make_trip("t3", "ANA-1", 2.5, datetime(2025, 1, 20, 23, 59, 59, tzinfo=UTC)),
    make_trip("t4", "ANA-1", 4.0, datetime(2025, 2, 3, 12, 0, tzinfo=UTC)),
    make_trip("t5", "ANA-2", 1.0, datetime(2026, 6, 1, 0, 0, tzinfo=UTC)),
]


def sqlite_repository() -> SqlTripRepository:
    engine = create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    return SqlTripRepository(engine)


@pytest.fixture(params=["memory", "sql"])
def repository(request: pytest.FixtureRequest) -> Iterator[TripRepository]:
    """Every repository implementation, empty."""
    if request.param == "memory":
        yield InMemoryTripRepository()
    else:
        yield sqlite_repository()


@pytest.fixture
def filled_repository(repository: TripRepository) -> TripRepository:
    for trip in SAMPLE_TRIPS:
        repository.save(trip)
    return repository


class TestSaveAndFind:
    """Storage and lookup behave the same for every backend."""

    def test_saved_trip_is_found_by_id(self, repository: TripRepository) -> None:
        """Given a saved trip, when looking it up by id, then the same trip comes back."""
        trip = SAMPLE_TRIPS[0]

        repository.save(trip)
        found = repository.find_by_id(trip.id)

        assert found is not None
        assert found.id == trip.id
        assert found.path_ids == ["MX", "CGE", "VUAR"]
        assert found.distance == trip.distance
        assert found.accounting_code == "ANA-2"
        assert found.created_at == trip.created_at

    def test_unknown_id_returns_none(self, repository: TripRepository) -> None:
        assert repository.find_by_id("missing") is None

    def test_find_by_code_returns_newest_first(self, filled_repository: TripRepository) -> None:
        trips = filled_repository.find_by_accounting_code("ANA-1")

        assert [trip.id for trip in trips] == ["t4", "t3", "t2"]

    def test_find_by_code_applies_inclusive_window(
        self, filled_repository: TripRepository
    ) -> None:
        """Given to_date Jan 20, when searching, then a trip at 23:59:59 that day is included."""
        trips = filled_repository.find_by_accounting_code(
            "ANA-1", date(2025, 1, 11), date(2025, 1, 20)
        )

        assert [trip.id for trip in trips] == ["t3"]

    def test_find_by_unknown_code_returns_empty_list(
        self, filled_repository: TripRepository
    ) -> None:
        assert filled_repository.find_by_accounting_code("NOPE") == []

    def test_non_utc_timestamps_are_normalized(self, repository: TripRepository) -> None:
        """Given a trip created at +02:00, when read back, then it is the same instant."""
        created_at = datetime(2025, 5, 1, 1, 30, tzinfo=timezone(timedelta(hours=2)))
        repository.save(make_trip("tz", "ANA-1", 1.0, created_at))

        found = repository.find_by_id("tz")

        assert found is not None
        assert found.created_at == created_at
        assert repository.find_by_accounting_code("ANA-1", date(2025, 4, 30), date(2025, 4, 30))

    def test_repository_is_available(self, repository: TripRepository) -> None:
        assert repository.is_available() is True


class TestDistancesByAccountingCode:
    """Aggregation gives the same rows for every backend."""

    def test_ungrouped_totals(self, filled_repository: TripRepository) -> None:
        rows = filled_repository.get_distances_by_accounting_code()

        assert [(row.accounting_code, row.total_distance_km) for row in rows] == [
            ("ANA-1", pytest.approx(11.5)),
            ("ANA-2", pytest.approx(11.0)),
        ]
        assert rows[0].group is None

    def test_grouped_by_month_with_window(self, filled_repository: TripRepository) -> None:
        rows = filled_repository.get_distances_by_accounting_code(
            date(2025, 1, 1), date(2025, 12, 31), GroupBy.MONTH
        )

        assert [row.to_dict() for row in rows] == [
            {
                "analyticCode": "ANA-1",
                "totalDistanceKm": 7.5,
                "group": "2025-01",
                "periodStart": "2025-01-01",
                "periodEnd": "2025-01-31",
            },
            {
                "analyticCode": "ANA-2",
                "totalDistanceKm": 10.0,
                "group": "2025-01",
                "periodStart": "2025-01-01",
                "periodEnd": "2025-01-31",
            },
            {
                "analyticCode": "ANA-1",
                "totalDistanceKm": 4.0,
                "group": "2025-02",
                "periodStart": "2025-02-01",
                "periodEnd": "2025-02-28",
            },
        ]

    def test_grouped_by_day(self, filled_repository: TripRepository) -> None:
        rows = filled_repository.get_distances_by_accounting_code(group_by=GroupBy.DAY)

        assert [(row.group, row.accounting_code) for row in rows] == [
            ("2025-01-10", "ANA-1"),
            ("2025-01-10", "ANA-2"),
            ("2025-01-20", "ANA-1"),
            ("2025-02-03", "ANA-1"),
            ("2026-06-01", "ANA-2"),
        ]

    def test_grouped_by_year(self, filled_repository: TripRepository) -> None:
        rows = filled_repository.get_distances_by_accounting_code(group_by=GroupBy.YEAR)

        assert [(row.group, row.accounting_code, row.total_distance_km) for row in rows] == [
            ("2025", "ANA-1", pytest.approx(11.5)),
            ("2025", "ANA-2", pytest.approx(10.0)),
            ("2026", "ANA-2", pytest.approx(1.0)),
        ]

    def test_empty_window_returns_no_rows(self, filled_repository: TripRepository) -> None:
        assert (
            filled_repository.get_distances_by_accounting_code(
                date(2030, 1, 1), date(2030, 1, 31), GroupBy.DAY
            )
            == []
        )

    @pytest.mark.parametrize("group_by", [GroupBy.NONE, GroupBy.YEAR])
    def test_codes_are_ordered_by_code_point(
        self, repository: TripRepository, group_by: GroupBy
    ) -> None:
        """Given codes differing in case, when aggregating, then they sort like sorted()."""
        codes = ["ana-2", "ANA-1", "Ana-3", "_x"]
        for index, code in enumerate(codes):
            repository.save(
                make_trip(f"c{index}", code, 1.0, datetime(2025, 3, 1, tzinfo=UTC))
            )

        rows = repository.get_distances_by_accounting_code(group_by=group_by)

        assert [row.accounting_code for row in rows] == sorted(codes)
        assert [row.accounting_code for row in rows] == ["ANA-1", "Ana-3", "_x", "ana-2"]


class TestAccountingCodeOrder:
    def test_postgresql_orders_with_c_collation(self) -> None:
        """Given the PostgreSQL dialect, when ordering by code, then the C collation is used."""
        statement = select(TripModel.analytic_code).order_by(accounting_code_order("postgresql"))

        sql = str(statement.compile(dialect=postgresql.dialect()))

        assert 'COLLATE "C"' in sql

    def test_sqlite_orders_by_plain_column(self) -> None:
        statement = select(TripModel.analytic_code).order_by(accounting_code_order("sqlite"))

        sql = str(statement.compile(dialect=sqlite.dialect()))

        assert "COLLATE" not in sql
        assert sql.rstrip().endswith("ORDER BY trips.analytic_code")


def test_sql_repository_reports_unavailable_database() -> None:
    """Given an engine pointing at an unreachable file, when checking, then it is unavailable."""
    repository = sqlite_repository()
    repository._engine = create_engine("sqlite:////nonexistent-dir/trips.db")

    assert repository.is_available() is False
