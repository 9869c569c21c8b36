"""meteomunch: normalized weather data from multiple upstream providers."""

__version__ = "0.1.0"
