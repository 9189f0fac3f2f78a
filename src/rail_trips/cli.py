"""Command-line interface for calculating trips and reading distance statistics."""

import argparse
import json
import sys
from datetime import date
from typing import Any

from rail_trips.adapters.config import AppConfig
from rail_trips.adapters.line_data import DataProviderError
from rail_trips.application.services import TripService
from rail_trips.bootstrap import build_trip_service, configure_logging
from rail_trips.domain.exceptions import RailTripsError
from rail_trips.domain.models import GroupBy, Trip


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2, ensure_ascii=False))


def _print_trip(trip: Trip) -> None:
    print(f"\nTrip {trip.id}")
    print(f"  {trip.from_station} -> {trip.to_station}: {trip.distance}")
    print(f"  Path: {' -> '.join(trip.path_ids)}")
    print(f"  Analytic code: {trip.accounting_code}")
    print(f"  Created at: {trip.created_at.isoformat()}")


def command_route(service: TripService, args: argparse.Namespace, max_code_length: int) -> None:
    if len(args.code) > max_code_length:
        raise ValueError(f"analytic code cannot exceed {max_code_length} characters")
    trip = service.calculate_trip(args.from_station, args.to_station, args.code)
    if args.json:
        _print_json(trip.to_dict())
    else:
        _print_trip(trip)


def command_trips(service: TripService, args: argparse.Namespace) -> None:
    trips = service.find_trips(args.code, args.from_date, args.to_date)
    if args.json:
        _print_json([trip.to_dict() for trip in trips])
        return
    if not trips:
        print(f"No trips found for analytic code '{args.code}'", file=sys.stderr)
        return
    print(f"\nFound {len(trips)} trip(s) for '{args.code}':")
    for trip in trips:
        _print_trip(trip)


def command_stats(service: TripService, args: argparse.Namespace) -> None:
    report = service.get_distances(args.from_date, args.to_date, GroupBy(args.group_by))
    if args.json:
        _print_json(report.to_dict())
        return
    if not report.items:
        print("No trips in the selected period.", file=sys.stderr)
        return
    for item in report.items:
        if item.group is None:
            print(f"  {item.accounting_code:<20} {item.total_distance_km:>10.2f} km")
        else:
            print(
                f"  {item.group:<10} {item.accounting_code:<20} "
                f"{item.total_distance_km:>10.2f} km  ({item.period_start} .. {item.period_end})"
            )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Rail trips - shortest routes and distance accounting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Calculate and store a trip
  rail-trips route MX ZW --code ANA-123

  # List trips for an analytic code
  rail-trips trips ANA-123 --from 2025-01-01

  # Distances per analytic code and month
  rail-trips stats --group-by month --json
        """,
    )
    parser.add_argument("--config-file", help="TOML configuration file")
    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Route command
    route_parser = subparsers.add_parser("route", help="Calculate and store the shortest trip")
    route_parser.add_argument("from_station", help="Departure station ID (e.g., MX)")
    route_parser.add_argument("to_station", help="Arrival station ID (e.g., ZW)")
    route_parser.add_argument("--code", required=True, help="Analytic code to book the trip on")
    route_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Trips command
    trips_parser = subparsers.add_parser("trips", help="List stored trips for an analytic code")
    trips_parser.add_argument("code", help="Analytic code")
    trips_parser.add_argument("--from", dest="from_date", type=date.fromisoformat)
    trips_parser.add_argument("--to", dest="to_date", type=date.fromisoformat)
    trips_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Stats command
    stats_parser = subparsers.add_parser("stats", help="Distances aggregated per analytic code")
    stats_parser.add_argument("--from", dest="from_date", type=date.fromisoformat)
    stats_parser.add_argument("--to", dest="to_date", type=date.fromisoformat)
    stats_parser.add_argument(
        "--group-by",
        choices=[option.value for option in GroupBy],
        default=GroupBy.NONE.value,
        help="Bucket totals per day, month or year",
    )
    stats_parser.add_argument("--json", action="store_true", help="Output as JSON")

    # Stations command
    subparsers.add_parser("stations", help="List every station in the network")

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        config = AppConfig(config_file=args.config_file) if args.config_file else AppConfig()
        config.load_config_file()
        configure_logging("WARNING")
        service = build_trip_service(config)

        if args.command == "route":
            command_route(service, args, config.accounting_code_max_length)
        elif args.command == "trips":
            command_trips(service, args)
        elif args.command == "stats":
            command_stats(service, args)
        elif args.command == "stations":
            for station in service.list_stations():
                print(station)

    except (RailTripsError, DataProviderError, ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Entry point for the rail-trips command."""
    main()


if __name__ == "__main__":
    cli_main()
