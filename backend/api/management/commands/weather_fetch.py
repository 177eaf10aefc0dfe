"""Management command to fetch weather using the same stack as the API."""
from __future__ import annotations

import json
from typing import Any

from django.core.management.base import BaseCommand, CommandError

from backend.api.views import get_weather_service
from backend.core.services.weather_service import WeatherServiceError


class Command(BaseCommand):
    help = "Fetch current weather for a city through the provider failover chain"

    def add_arguments(self, parser) -> None:  # noqa: D401
        parser.add_argument("--city", type=str, default="", help="City name (default city when omitted)")

    def handle(self, *args: Any, **options: Any) -> None:  # noqa: D401
        service = get_weather_service()
        if not service.providers:
            self.stderr.write("No providers configured; only cached data can be served")
        try:
            weather = service.get_weather(options.get("city") or "")
        except WeatherServiceError as exc:
            raise CommandError("All weather providers failed") from exc

        self.stdout.write(json.dumps(weather.as_dict()))
