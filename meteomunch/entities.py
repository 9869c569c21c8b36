"""Canonical weather schema every provider maps into.

Field names follow the open-meteo wire format so that the primary provider can
validate its response body directly into :class:`WeatherSnapshot`. Values keep
the units declared in :mod:`meteomunch.units`; no conversion happens here.

Fields a provider does not supply stay at their zero value (``0``, ``0.0``,
``""`` or an empty list). Hourly and daily readings are parallel series: every
non-empty series must have one slot per entry of ``time``.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator


FloatSeries = List[Optional[float]]
IntSeries = List[Optional[int]]


@dataclass(frozen=True)
class Coordinates:
    latitude: float  # degrees, [-90, 90]
    longitude: float  # degrees, [-180, 180]


class _Schema(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _null_as_zero(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


class _Series(_Schema):
    time: List[int] = Field(default_factory=list)  # unix timestamps

    @model_validator(mode="after")
    def _check_alignment(self) -> "_Series":
        expected = len(self.time)
        for name in type(self).model_fields:
            values = getattr(self, name)
            if values and len(values) != expected:
                raise ValueError(f"{name} has {len(values)} values, expected {expected}")
        return self

    def __len__(self) -> int:
        return len(self.time)


class Location(_Schema):
    """Geocoding record, populated only by providers exposing geocoding."""

    id: int = 0
    name: str = ""
    coordinates: Coordinates = Field(default_factory=lambda: Coordinates(0.0, 0.0))
    elevation: float = 0.0  # metres above mean sea level
    timezone: str = ""  # tz database name
    feature_code: str = ""  # GeoNames feature code
    country_code: str = ""
    country: str = ""
    country_id: int = 0
    population: int = 0
    postcodes: List[str] = Field(default_factory=list)


class CurrentReading(_Schema):
    time: int = 0  # unix timestamp
    interval: int = 0  # seconds
    temperature_2m: float = 0.0
    relative_humidity_2m: int = 0
    apparent_temperature: float = 0.0
    is_day: int = 0
    precipitation: float = 0.0
    rain: float = 0.0
    showers: float = 0.0
    snowfall: float = 0.0
    weather_code: int = 0  # WMO code
    cloud_cover: int = 0
    pressure_msl: float = 0.0
    surface_pressure: float = 0.0
    wind_speed_10m: float = 0.0
    wind_direction_10m: int = 0
    wind_gusts_10m: float = 0.0


def _wire_name(name: str) -> str:
    # open-meteo spells pressure levels as temperature_850hPa
    return name[:-3] + "hPa" if name.endswith("hpa") else name


class HourlyReadings(_Series):
    model_config = ConfigDict(alias_generator=_wire_name, populate_by_name=True)

    temperature_2m: FloatSeries = Field(default_factory=list)
    relative_humidity_2m: IntSeries = Field(default_factory=list)
    dew_point_2m: FloatSeries = Field(default_factory=list)
    apparent_temperature: FloatSeries = Field(default_factory=list)
    precipitation_probability: IntSeries = Field(default_factory=list)
    precipitation: FloatSeries = Field(default_factory=list)
    weather_code: IntSeries = Field(default_factory=list)
    pressure_msl: FloatSeries = Field(default_factory=list)
    surface_pressure: FloatSeries = Field(default_factory=list)
    cloud_cover: IntSeries = Field(default_factory=list)
    cloud_cover_low: IntSeries = Field(default_factory=list)
    cloud_cover_mid: IntSeries = Field(default_factory=list)
    cloud_cover_high: IntSeries = Field(default_factory=list)
    visibility: FloatSeries = Field(default_factory=list)
    evapotranspiration: FloatSeries = Field(default_factory=list)
    et0_fao_evapotranspiration: FloatSeries = Field(default_factory=list)
    vapour_pressure_deficit: FloatSeries = Field(default_factory=list)
    wind_speed_10m: FloatSeries = Field(default_factory=list)
    wind_speed_80m: FloatSeries = Field(default_factory=list)
    wind_speed_120m: FloatSeries = Field(default_factory=list)
    wind_speed_180m: FloatSeries = Field(default_factory=list)
    wind_direction_10m: IntSeries = Field(default_factory=list)
    wind_direction_80m: IntSeries = Field(default_factory=list)
    wind_direction_120m: IntSeries = Field(default_factory=list)
    wind_direction_180m: IntSeries = Field(default_factory=list)
    wind_gusts_10m: FloatSeries = Field(default_factory=list)
    temperature_80m: FloatSeries = Field(default_factory=list)
    temperature_120m: FloatSeries = Field(default_factory=list)
    temperature_180m: FloatSeries = Field(default_factory=list)
    uv_index: FloatSeries = Field(default_factory=list)
    uv_index_clear_sky: FloatSeries = Field(default_factory=list)
    is_day: IntSeries = Field(default_factory=list)
    sunshine_duration: FloatSeries = Field(default_factory=list)
    total_column_integrated_water_vapour: FloatSeries = Field(default_factory=list)
    cape: FloatSeries = Field(default_factory=list)
    lifted_index: FloatSeries = Field(default_factory=list)
    convective_inhibition: FloatSeries = Field(default_factory=list)
    freezing_level_height: FloatSeries = Field(default_factory=list)
    boundary_layer_height: FloatSeries = Field(default_factory=list)
    # pressure levels
    temperature_1000hpa: FloatSeries = Field(default_factory=list)
    temperature_975hpa: FloatSeries = Field(default_factory=list)
    temperature_950hpa: FloatSeries = Field(default_factory=list)
    temperature_925hpa: FloatSeries = Field(default_factory=list)
    temperature_900hpa: FloatSeries = Field(default_factory=list)
    temperature_850hpa: FloatSeries = Field(default_factory=list)
    temperature_800hpa: FloatSeries = Field(default_factory=list)
    temperature_700hpa: FloatSeries = Field(default_factory=list)
    temperature_600hpa: FloatSeries = Field(default_factory=list)
    temperature_500hpa: FloatSeries = Field(default_factory=list)
    temperature_400hpa: FloatSeries = Field(default_factory=list)
    relative_humidity_1000hpa: IntSeries = Field(default_factory=list)
    relative_humidity_975hpa: IntSeries = Field(default_factory=list)
    relative_humidity_950hpa: IntSeries = Field(default_factory=list)
    relative_humidity_925hpa: IntSeries = Field(default_factory=list)
    relative_humidity_900hpa: IntSeries = Field(default_factory=list)
    relative_humidity_850hpa: IntSeries = Field(default_factory=list)
    relative_humidity_800hpa: IntSeries = Field(default_factory=list)
    relative_humidity_700hpa: IntSeries = Field(default_factory=list)
    relative_humidity_600hpa: IntSeries = Field(default_factory=list)
    relative_humidity_500hpa: IntSeries = Field(default_factory=list)
    relative_humidity_400hpa: IntSeries = Field(default_factory=list)
    cloud_cover_1000hpa: IntSeries = Field(default_factory=list)
    cloud_cover_975hpa: IntSeries = Field(default_factory=list)
    cloud_cover_950hpa: IntSeries = Field(default_factory=list)
    cloud_cover_925hpa: IntSeries = Field(default_factory=list)
    cloud_cover_900hpa: IntSeries = Field(default_factory=list)
    cloud_cover_850hpa: IntSeries = Field(default_factory=list)
    cloud_cover_800hpa: IntSeries = Field(default_factory=list)
    cloud_cover_700hpa: IntSeries = Field(default_factory=list)
    cloud_cover_600hpa: IntSeries = Field(default_factory=list)
    cloud_cover_500hpa: IntSeries = Field(default_factory=list)
    cloud_cover_400hpa: IntSeries = Field(default_factory=list)
    wind_speed_1000hpa: FloatSeries = Field(default_factory=list)
    wind_speed_975hpa: FloatSeries = Field(default_factory=list)
    wind_speed_950hpa: FloatSeries = Field(default_factory=list)
    wind_speed_925hpa: FloatSeries = Field(default_factory=list)
    wind_speed_900hpa: FloatSeries = Field(default_factory=list)
    wind_speed_850hpa: FloatSeries = Field(default_factory=list)
    wind_speed_800hpa: FloatSeries = Field(default_factory=list)
    wind_speed_700hpa: FloatSeries = Field(default_factory=list)
    wind_speed_600hpa: FloatSeries = Field(default_factory=list)
    wind_speed_500hpa: FloatSeries = Field(default_factory=list)
    wind_speed_400hpa: FloatSeries = Field(default_factory=list)
    wind_direction_1000hpa: IntSeries = Field(default_factory=list)
    wind_direction_975hpa: IntSeries = Field(default_factory=list)
    wind_direction_950hpa: IntSeries = Field(default_factory=list)
    wind_direction_925hpa: IntSeries = Field(default_factory=list)
    wind_direction_900hpa: IntSeries = Field(default_factory=list)
    wind_direction_850hpa: IntSeries = Field(default_factory=list)
    wind_direction_800hpa: IntSeries = Field(default_factory=list)
    wind_direction_700hpa: IntSeries = Field(default_factory=list)
    wind_direction_600hpa: IntSeries = Field(default_factory=list)
    wind_direction_500hpa: IntSeries = Field(default_factory=list)
    wind_direction_400hpa: IntSeries = Field(default_factory=list)
    geopotential_height_1000hpa: FloatSeries = Field(default_factory=list)
    geopotential_height_975hpa: FloatSeries = Field(default_factory=list)
    geopotential_height_950hpa: FloatSeries = Field(default_factory=list)
    geopotential_height_925hpa: FloatSeries = Field(default_factory=list)
    geopotential_height_900hpa: FloatSeries = Field(default_factory=list)
    geopotential_height_850hpa: FloatSeries = Field(default_factory=list)
    geopotential_height_800hpa: FloatSeries = Field(default_factory=list)
    geopotential_height_700hpa: FloatSeries = Field(default_factory=list)
    geopotential_height_600hpa: FloatSeries = Field(default_factory=list)
    geopotential_height_500hpa: FloatSeries = Field(default_factory=list)
    geopotential_height_400hpa: FloatSeries = Field(default_factory=list)


class DailyReadings(_Series):
    weather_code: IntSeries = Field(default_factory=list)
    temperature_2m_max: FloatSeries = Field(default_factory=list)
    temperature_2m_min: FloatSeries = Field(default_factory=list)
    apparent_temperature_max: FloatSeries = Field(default_factory=list)
    apparent_temperature_min: FloatSeries = Field(default_factory=list)
    sunrise: IntSeries = Field(default_factory=list)  # unix timestamps
    sunset: IntSeries = Field(default_factory=list)  # unix timestamps
    daylight_duration: FloatSeries = Field(default_factory=list)
    sunshine_duration: FloatSeries = Field(default_factory=list)
    uv_index_max: FloatSeries = Field(default_factory=list)
    uv_index_clear_sky_max: FloatSeries = Field(default_factory=list)
    precipitation_sum: FloatSeries = Field(default_factory=list)
    precipitation_hours: FloatSeries = Field(default_factory=list)
    precipitation_probability_max: IntSeries = Field(default_factory=list)
    wind_speed_10m_max: FloatSeries = Field(default_factory=list)
    wind_gusts_10m_max: FloatSeries = Field(default_factory=list)
    wind_direction_10m_dominant: IntSeries = Field(default_factory=list)
    shortwave_radiation_sum: FloatSeries = Field(default_factory=list)
    et0_fao_evapotranspiration: FloatSeries = Field(default_factory=list)


class WeatherSnapshot(_Schema):
    """One fetched reading set for a coordinate pair."""

    latitude: float = 0.0
    longitude: float = 0.0
    utc_offset_seconds: int = 0
    timezone: str = ""
    timezone_abbreviation: str = ""
    elevation: float = 0.0
    current: CurrentReading = Field(default_factory=CurrentReading)
    hourly: HourlyReadings = Field(default_factory=HourlyReadings)
    daily: DailyReadings = Field(default_factory=DailyReadings)


def reading_fields(model: type) -> List[str]:
    """Wire names of the reading fields of ``model``, without the time axis."""
    return [field.alias or name for name, field in model.model_fields.items() if name not in ("time", "interval")]


__all__ = [
    "Coordinates",
    "CurrentReading",
    "DailyReadings",
    "HourlyReadings",
    "Location",
    "WeatherSnapshot",
    "reading_fields",
]
