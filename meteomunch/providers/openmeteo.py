from __future__ import annotations

from typing import Dict

from .base import WeatherProvider, format_coordinate
from ..entities import Coordinates, CurrentReading, DailyReadings, HourlyReadings, WeatherSnapshot, reading_fields


class OpenMeteoProvider(WeatherProvider):
    """open-meteo.com forecast API.

    The upstream body is shaped like :class:`WeatherSnapshot` already, so
    mapping is a straight validation of the JSON document.
    """

    name = "open-meteo"

    current_fields = ",".join(reading_fields(CurrentReading))
    hourly_fields = ",".join(reading_fields(HourlyReadings))
    daily_fields = ",".join(reading_fields(DailyReadings))

    def query_params(self, coordinates: Coordinates) -> Dict[str, str]:
        return {
            "latitude": format_coordinate(coordinates.latitude),
            "longitude": format_coordinate(coordinates.longitude),
            "current": self.current_fields,
            "hourly": self.hourly_fields,
            "daily": self.daily_fields,
            "timeformat": "unixtime",
            "timezone": "GMT",
            "forecast_days": "1",
            "forecast_hours": "24",
            "cell_selection": "nearest",
            "models": "best_match",
        }

    def map_response(self, payload: bytes) -> WeatherSnapshot:
        return WeatherSnapshot.model_validate_json(payload)


__all__ = ["OpenMeteoProvider"]
