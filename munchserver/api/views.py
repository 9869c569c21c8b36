"""REST API views serving canonical weather snapshots."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

from django.http import HttpResponse
from django.views.decorators.http import require_GET
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView

from meteomunch import config
from meteomunch.entities import Coordinates, WeatherSnapshot
from meteomunch.providers import ProviderError, new_provider


logger = logging.getLogger(__name__)

UPSTREAM_FAILURE = "upstream weather provider failed"


@require_GET
def health(request):
    return HttpResponse("OK\n", content_type="text/plain")


def parse_coordinates(query_params) -> Tuple[Optional[Coordinates], Optional[str]]:
    """Return coordinates from ``lat``/``lon`` or an error message."""
    try:
        latitude = float(query_params["lat"])
        longitude = float(query_params["lon"])
    except KeyError:
        return None, "lat and lon query parameters are required"
    except ValueError:
        return None, "lat and lon must be valid floating point numbers"
    if not -90.0 <= latitude <= 90.0 or not -180.0 <= longitude <= 180.0:
        return None, "lat must be within [-90, 90] and lon within [-180, 180]"
    return Coordinates(latitude=latitude, longitude=longitude), None


def fetch_snapshot(provider_name: str, coordinates: Coordinates) -> WeatherSnapshot:
    provider = new_provider(provider_name, config.get())
    return provider.fetch_data(coordinates)


class ProviderView(APIView):
    """Fetch a snapshot from ``provider_name`` for the requested coordinates."""

    provider_name = ""

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the weather snapshot for the specified coordinates."""
        coordinates, error = parse_coordinates(request.query_params)
        if coordinates is None:
            return Response({"detail": error}, status=status.HTTP_400_BAD_REQUEST)

        try:
            snapshot = fetch_snapshot(self.provider_name, coordinates)
        except (config.ConfigError, ProviderError) as exc:
            logger.error("Couldn't fetch data from %s: %s", self.provider_name, exc, exc_info=exc)
            return Response({"detail": UPSTREAM_FAILURE}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

        logger.debug("API data fetched", extra={"provider": self.provider_name})
        return Response(snapshot.model_dump(mode="json", by_alias=True), status=status.HTTP_200_OK)


class OpenMeteoView(ProviderView):
    provider_name = "open-meteo"


class MeteoblueView(ProviderView):
    provider_name = "meteoblue"
