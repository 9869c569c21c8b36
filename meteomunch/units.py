"""Units of the canonical weather schema.

Providers may prefer other units upstream; these tables document the units the
canonical schema is expressed in. They are read-only reference data.
"""
from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping

PRESSURE_LEVELS = (1000, 975, 950, 925, 900, 850, 800, 700, 600, 500, 400)

_LEVEL_UNITS = {
    "Temperature": "°C",
    "RelativeHumidity": "%",
    "CloudCover": "%",
    "WindSpeed": "km/h",
    "WindDirection": "°",
    "GeopotentialHeight": "m",
}


def _build_common() -> Dict[str, str]:
    units = {
        "Temperature": "°C",
        "WindSpeed": "km/h",
        "Humidity": "%",
        "Pressure": "hPa",
        "Visibility": "km",
        "Precipitation": "mm",
        "CloudCover": "%",
        "SunshineHours": "s",
        "IsDay": "",
        "Time": "unixtime",
        "Interval": "seconds",
        "WindGust": "km/h",
        "WindDirection": "°",
        "DewPoint": "°C",
        "UVIndex": "",
        "WeatherCode": "wmo code",
        "Snowfall": "cm",
        "SnowDepth": "cm",
        "Rain": "mm",
        "FreezingLevel": "m",
        "SoilTemperature": "°C",
        "SoilMoisture": "m³/m³",
        "Sunrise": "unixtime",
        "Sunset": "unixtime",
        "DaylightDuration": "s",
        "PrecipitationProbability": "%",
        "Evapotranspiration": "mm",
        "ET0FAOEvapotranspiration": "mm",
        "VapourPressureDeficit": "kPa",
        "GeopotentialHeight": "m",
        "ShortwaveRadiationSum": "MJ/m²",
        "ConvectiveInhibition": "J/kg",
        "LiftedIndex": "",
        "BoundaryLayerHeight": "m",
    }
    for quantity, unit in _LEVEL_UNITS.items():
        for level in PRESSURE_LEVELS:
            units[f"{quantity}{level}hPa"] = unit
    return units


COMMON_UNITS: Mapping[str, str] = MappingProxyType(_build_common())

_CURRENT_KEYS = (
    "Temperature",
    "WindSpeed",
    "Humidity",
    "Pressure",
    "Visibility",
    "IsDay",
    "Time",
    "WindGust",
    "WindDirection",
    "DewPoint",
    "UVIndex",
    "WeatherCode",
    "Snowfall",
    "SnowDepth",
    "Rain",
    "FreezingLevel",
    "SoilTemperature",
    "SoilMoisture",
)

_HOURLY_EXTRA_KEYS = (
    "Precipitation",
    "CloudCover",
    "Interval",
    "PrecipitationProbability",
    "Evapotranspiration",
    "ET0FAOEvapotranspiration",
    "VapourPressureDeficit",
    "GeopotentialHeight",
    "ShortwaveRadiationSum",
    "ConvectiveInhibition",
    "LiftedIndex",
    "BoundaryLayerHeight",
)

CURRENT_UNITS: Mapping[str, str] = MappingProxyType({key: COMMON_UNITS[key] for key in _CURRENT_KEYS})

HOURLY_UNITS: Mapping[str, str] = MappingProxyType(
    {
        **{key: COMMON_UNITS[key] for key in _CURRENT_KEYS + _HOURLY_EXTRA_KEYS},
        **{key: unit for key, unit in COMMON_UNITS.items() if key.endswith("hPa")},
    }
)

DAILY_UNITS: Mapping[str, str] = MappingProxyType(
    {
        "Time": COMMON_UNITS["Time"],
        "WeatherCode": COMMON_UNITS["WeatherCode"],
        "TemperatureMax": COMMON_UNITS["Temperature"],
        "TemperatureMin": COMMON_UNITS["Temperature"],
        "ApparentTemperatureMax": COMMON_UNITS["Temperature"],
        "ApparentTemperatureMin": COMMON_UNITS["Temperature"],
        "Sunrise": COMMON_UNITS["Sunrise"],
        "Sunset": COMMON_UNITS["Sunset"],
        "DaylightDuration": COMMON_UNITS["DaylightDuration"],
        "SunshineDuration": COMMON_UNITS["SunshineHours"],
        "UVIndexMax": COMMON_UNITS["UVIndex"],
        "UVIndexClearSkyMax": COMMON_UNITS["UVIndex"],
        "PrecipitationSum": COMMON_UNITS["Precipitation"],
        "PrecipitationHours": "h",
        "PrecipitationProbabilityMax": COMMON_UNITS["PrecipitationProbability"],
        "WindSpeedMax": COMMON_UNITS["WindSpeed"],
        "WindGustsMax": COMMON_UNITS["WindGust"],
        "WindDirectionDominant": COMMON_UNITS["WindDirection"],
        "ShortwaveRadiationSum": COMMON_UNITS["ShortwaveRadiationSum"],
        "ET0FAOEvapotranspiration": COMMON_UNITS["ET0FAOEvapotranspiration"],
    }
)

VIEWS: Mapping[str, Mapping[str, str]] = MappingProxyType(
    {
        "common": COMMON_UNITS,
        "current": CURRENT_UNITS,
        "hourly": HOURLY_UNITS,
        "daily": DAILY_UNITS,
    }
)


def unit_for(field: str, view: str = "common") -> str:
    """Return the unit of ``field``; raises ``KeyError`` for unknown names."""
    return VIEWS[view][field]


__all__ = ["COMMON_UNITS", "CURRENT_UNITS", "DAILY_UNITS", "HOURLY_UNITS", "PRESSURE_LEVELS", "VIEWS", "unit_for"]
