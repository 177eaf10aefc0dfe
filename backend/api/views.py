"""REST API views for weather information."""
from __future__ import annotations

import logging
from typing import Optional

from django.conf import settings
from django.http import HttpResponse
from django.views.decorators.http import require_GET
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from backend.core.cache import MeasurementCache
from backend.core.config import WeatherConfig
from backend.core.providers.registry import load_providers
from backend.core.services.weather_service import WeatherLookupService, WeatherServiceError


logger = logging.getLogger(__name__)

_weather_service: Optional[WeatherLookupService] = None


def build_weather_service() -> WeatherLookupService:
    config = WeatherConfig.from_settings(settings)
    providers = load_providers(settings.WEATHERSTACK_KEY, settings.OPENWEATHER_KEY)
    return WeatherLookupService(
        providers=providers,
        cache=MeasurementCache(ttl=config.cache_ttl),
        config=config,
    )


def get_weather_service() -> WeatherLookupService:
    global _weather_service
    if _weather_service is None:
        _weather_service = build_weather_service()
    return _weather_service


def reset_weather_service(service: Optional[WeatherLookupService] = None) -> None:
    """Helper for tests to swap the weather service instance."""
    global _weather_service
    _weather_service = service


class WeatherView(APIView):
    """Provide normalized weather data for the requested city."""

    permission_classes = [AllowAny]

    def get(self, request, *args, **kwargs):  # noqa: D401
        """Return the weather snapshot for ``?city=`` (default city when empty)."""
        city = request.query_params.get("city", "")
        try:
            weather = get_weather_service().get_weather(city)
        except WeatherServiceError as exc:
            logger.error("Weather lookup for %r failed: %s", city, exc)
            return HttpResponse(
                "all providers unavailable",
                status=status.HTTP_502_BAD_GATEWAY,
                content_type="text/plain; charset=utf-8",
            )
        return Response(weather.as_dict(), status=status.HTTP_200_OK)


@require_GET
def healthz(request):
    return HttpResponse("ok", content_type="text/plain; charset=utf-8")
