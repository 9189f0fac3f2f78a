"""Request models for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field, ValidationError


class CalculateTripRequest(BaseModel):
    """Body of POST /api/v1/routes."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, str_strip_whitespace=True)

    from_station_id: str = Field(alias="fromStationId", min_length=1)
    to_station_id: str = Field(alias="toStationId", min_length=1)
    analytic_code: str = Field(alias="analyticCode", min_length=1)


def validation_details(error: ValidationError) -> list[str]:
    """Flatten pydantic errors into "field: message" strings."""
    details = []
    for item in error.errors():
        field_name = ".".join(str(part) for part in item["loc"]) or "body"
        details.append(f"{field_name}: {item['msg']}")
    return details
