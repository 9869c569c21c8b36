"""Serve the meteomunch API on the configured hostname and port."""
from __future__ import annotations

from typing import Any

from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError

from meteomunch import config


class Command(BaseCommand):
    help = "Serve meteo data on Munch.Server.Hostname:Port"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--config", default="", help="Config file (default is ./munch.yml)")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        if options["config"]:
            # views read the memoized configuration; rebuild it before the server threads start
            config.reset()
        try:
            cfg = config.get(options["config"] or None)
        except config.ConfigError as exc:
            raise CommandError(f"Invalid configuration: {exc}") from exc

        address = f"{cfg.munch.server.hostname}:{cfg.munch.server.port}"
        self.stdout.write(f"Serving meteomunch on {address}")
        call_command("runserver", address, use_reloader=False)
