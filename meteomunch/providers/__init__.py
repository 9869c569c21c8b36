"""Weather providers and the factory that selects them by name.

Add a provider by subclassing :class:`WeatherProvider` and registering it in
``PROVIDERS``.
"""
from __future__ import annotations

from typing import Dict, List, Optional, Type

from ..config import Configuration
from ..rest import HTTPClient
from .base import (
    MappingError,
    ProviderConfigNotFound,
    ProviderError,
    TransportError,
    UnknownProviderError,
    UpstreamStatusError,
    WeatherProvider,
)
from .meteoblue import MeteoblueProvider
from .openmeteo import OpenMeteoProvider


PROVIDERS: Dict[str, Type[WeatherProvider]] = {
    OpenMeteoProvider.name: OpenMeteoProvider,
    MeteoblueProvider.name: MeteoblueProvider,
}


def available_providers() -> List[str]:
    return list(PROVIDERS)


def new_provider(name: str, cfg: Configuration, client: Optional[HTTPClient] = None) -> WeatherProvider:
    """Build the provider registered as ``name`` from its configuration entry."""
    try:
        provider_cls = PROVIDERS[name]
    except KeyError:
        raise UnknownProviderError(f"unknown provider: {name}") from None
    return provider_cls.from_config(cfg, client=client)


__all__ = [
    "MappingError",
    "MeteoblueProvider",
    "OpenMeteoProvider",
    "PROVIDERS",
    "ProviderConfigNotFound",
    "ProviderError",
    "TransportError",
    "UnknownProviderError",
    "UpstreamStatusError",
    "WeatherProvider",
    "available_providers",
    "new_provider",
]
