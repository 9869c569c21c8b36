from __future__ import annotations

from typing import Dict

from pydantic import Field

from .base import WeatherProvider, format_coordinate
from ..entities import Coordinates, WeatherSnapshot, _Schema


class _Metadata(_Schema):
    latitude: float = 0.0
    longitude: float = 0.0
    height: float = 0.0
    # meteoblue spells it this way on the wire
    timezone_abbrevation: str = ""
    utc_timeoffset: float = 0.0  # hours


class _Response(_Schema):
    metadata: _Metadata = Field(default_factory=_Metadata)


class MeteoblueProvider(WeatherProvider):
    """meteoblue.com packages API.

    Only the location metadata is mapped; every other canonical field stays
    at its zero value.
    """

    name = "meteoblue"

    def query_params(self, coordinates: Coordinates) -> Dict[str, str]:
        return {
            "lat": format_coordinate(coordinates.latitude),
            "lon": format_coordinate(coordinates.longitude),
            "tz": "GMT",
            "format": "json",
            "forecast_days": "1",
            "apikey": self.settings.api_key,
        }

    def map_response(self, payload: bytes) -> WeatherSnapshot:
        metadata = _Response.model_validate_json(payload).metadata
        return WeatherSnapshot(
            latitude=metadata.latitude,
            longitude=metadata.longitude,
            elevation=metadata.height,
            timezone_abbreviation=metadata.timezone_abbrevation,
            utc_offset_seconds=int(round(metadata.utc_timeoffset * 3600)),
        )


__all__ = ["MeteoblueProvider"]
