"""Line data adapters."""

from rail_trips.adapters.line_data.json_line_data_provider import (
    DataProviderError,
    JsonLineDataProvider,
)

__all__ = ["DataProviderError", "JsonLineDataProvider"]
