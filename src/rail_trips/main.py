"""Main entry point for the rail trips API server."""

import asyncio
import logging
import sys

from rail_trips.adapters.config import AppConfig
from rail_trips.adapters.line_data import DataProviderError
from rail_trips.adapters.web import TripWebAdapter
from rail_trips.bootstrap import build_trip_service, configure_logging

logger = logging.getLogger(__name__)


async def main() -> None:
    """Main application entry point."""
    try:
        config = AppConfig().load_config_file()
    except (ValueError, FileNotFoundError) as e:
        configure_logging()
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    configure_logging(config.log_level)

    try:
        trip_service = build_trip_service(config)
    except DataProviderError as e:
        logger.error(f"Cannot load network data: {e}")
        sys.exit(1)

    if not trip_service.list_stations():
        logger.error(f"No stations found in {config.distances_file}.")
        sys.exit(1)

    web_adapter = TripWebAdapter(trip_service, config)

    try:
        await web_adapter.start()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
        await web_adapter.stop()


def run() -> None:
    """Synchronous entry point for the server command."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
