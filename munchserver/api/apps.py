"""Startup hook that resolves the munch configuration once per process."""
from __future__ import annotations

import logging

from django.apps import AppConfig
from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from meteomunch import config
from meteomunch.logger import configure_logging


logger = logging.getLogger(__name__)


class ApiConfig(AppConfig):
    name = "munchserver.api"
    label = "munch_api"

    def ready(self) -> None:
        # config.get() memoizes without locking; resolve it before any request thread exists.
        try:
            cfg = config.get(settings.MUNCH_CONFIG)
        except config.CriticalErrors as exc:
            for error in exc.errors:
                logger.error("Invalid configuration: %s", error)
            raise ImproperlyConfigured("critical config values are missing") from exc
        configure_logging(cfg.munch.log_level)
        logger.debug("Configuration loaded", extra={"providers": [p.name for p in cfg.providers]})
