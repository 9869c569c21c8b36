"""Management command to fetch weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from meteomunch import config
from meteomunch.entities import Coordinates
from meteomunch.providers import ProviderError, available_providers, new_provider


class Command(BaseCommand):
    help = "Fetch a weather snapshot for the provided coordinates"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--provider", default=config.DEFAULT_PROVIDER, choices=available_providers())
        parser.add_argument("--lat", type=float, required=True, help="Latitude")
        parser.add_argument("--lon", type=float, required=True, help="Longitude")
        parser.add_argument("--config", default="", help="Config file (default is ./munch.yml)")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        try:
            cfg = config.load(source_path=options["config"]) if options["config"] else config.get()
        except config.ConfigError as exc:
            raise CommandError(f"Invalid configuration: {exc}") from exc

        coordinates = Coordinates(latitude=options["lat"], longitude=options["lon"])
        try:
            snapshot = new_provider(options["provider"], cfg).fetch_data(coordinates)
        except ProviderError as exc:
            raise CommandError(f"Couldn't fetch data from {options['provider']}: {exc}") from exc

        self.stdout.write(json.dumps(snapshot.model_dump(mode="json", by_alias=True)))
