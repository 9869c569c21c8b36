from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import replace
from typing import Dict, Optional

from ..config import Configuration, ProviderSettings
from ..entities import Coordinates, WeatherSnapshot
from ..rest import HTTPClient, RequestConfig, RequestFailed, RestClient, RestResponse


class ProviderError(RuntimeError):
    """Base provider error."""


class UnknownProviderError(ProviderError):
    """Raised when no provider is registered under the requested name."""


class ProviderConfigNotFound(ProviderError):
    """Raised when the configuration has no entry for the provider."""


class UpstreamStatusError(ProviderError):
    """Raised when the upstream API answers with a non-success status."""

    def __init__(self, status: str, status_code: int) -> None:
        super().__init__(f"received error response: {status}")
        self.status = status
        self.status_code = status_code


class TransportError(ProviderError):
    """Raised when the upstream API could not be reached, retries included."""

    retryable = True


class MappingError(ProviderError):
    """Raised when a response body does not fit the expected shape."""


class WeatherProvider(ABC):
    """Base class for upstream integrations.

    Instances hold their provider settings and a bound client only; each
    :meth:`fetch_data` call builds its own request.
    """

    name: str = ""

    def __init__(self, settings: ProviderSettings, client: HTTPClient, debug: bool = False) -> None:
        self.settings = replace(settings)
        self.client = client
        self.debug = debug
        self._log = logging.getLogger(self.__class__.__name__)

    @classmethod
    def from_config(cls, cfg: Configuration, client: Optional[HTTPClient] = None) -> "WeatherProvider":
        settings = cfg.provider(cls.name)
        if settings is None:
            raise ProviderConfigNotFound(f"{cls.name} provider configuration not found")
        debug = cfg.munch.debug
        if client is None:
            client = RestClient(settings.base_uri, request_config=RequestConfig(), debug=debug, trace=debug)
        return cls(settings, client, debug=debug)

    @abstractmethod
    def query_params(self, coordinates: Coordinates) -> Dict[str, str]:
        """Return the upstream query parameters for ``coordinates``."""

    @abstractmethod
    def map_response(self, payload: bytes) -> WeatherSnapshot:
        """Translate a response body into the canonical schema."""

    def fetch_data(self, coordinates: Coordinates) -> WeatherSnapshot:
        response = self._request(self.query_params(coordinates))
        try:
            return self.map_response(response.body)
        except ValueError as exc:  # pydantic.ValidationError included
            self._log.error("Failed to map %s response", self.name, exc_info=exc)
            raise MappingError(f"failed to map upstream response: {exc}") from exc

    # helpers ------------------------------------------------------------
    def _request(self, params: Dict[str, str]) -> RestResponse:
        try:
            response = self.client.get(self.settings.api_path, params=params)
        except RequestFailed as exc:
            raise TransportError(str(exc)) from exc
        if self.debug:
            self._log.debug("Response status: %s", response.status)
            self._log.debug("Response body: %s", response.body.decode("utf-8", errors="replace"))
            self._log.debug("Response trace: %s", response.trace)
        return self._handle_response(response)

    def _handle_response(self, response: RestResponse) -> RestResponse:
        if not response.ok:
            self._log.error("Provider %s returned %s", self.name, response.status)
            raise UpstreamStatusError(response.status, response.status_code)
        return response


def format_coordinate(value: float) -> str:
    return f"{value:f}"


__all__ = [
    "MappingError",
    "ProviderConfigNotFound",
    "ProviderError",
    "TransportError",
    "UnknownProviderError",
    "UpstreamStatusError",
    "WeatherProvider",
    "format_coordinate",
]
