"""Start the weather service after checking that providers are configured."""
from __future__ import annotations

import logging
from typing import Any

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured
from django.core.management import call_command
from django.core.management.base import BaseCommand, CommandError

from backend.core.config import WeatherConfig
from backend.core.providers.registry import require_providers


logger = logging.getLogger(__name__)


class Command(BaseCommand):
    help = "Run the weather HTTP service on the configured port"

    def add_arguments(self, parser) -> None:
        parser.add_argument("addrport", nargs="?", help="Optional ip:port, defaults to 0.0.0.0:$PORT")

    def handle(self, *args: Any, **options: Any) -> None:
        try:
            providers = require_providers(settings.WEATHERSTACK_KEY, settings.OPENWEATHER_KEY)
        except ImproperlyConfigured as exc:
            raise CommandError(str(exc)) from exc

        config = WeatherConfig.from_settings(settings)
        addrport = options.get("addrport") or config.addr
        logger.info(
            "Providers in priority order: %s", ", ".join(provider.name for provider in providers)
        )
        logger.info("listening on %s", addrport)
        call_command("runserver", addrport, use_reloader=False)
