"""Weather service that bridges multiple providers with caching."""
from __future__ import annotations

import logging
import math
import time
from typing import Callable, Iterable, Optional, Tuple

from backend.core.abstractions import Deadline, Measurement, Weather, WeatherProvider
from backend.core.cache import MeasurementCache
from backend.core.config import WeatherConfig
from backend.core.providers.base import DeadlineExceeded


logger = logging.getLogger(__name__)


class WeatherServiceError(RuntimeError):
    """Raised when no provider can return weather data and nothing is cached."""


def round1(value: float) -> float:
    """Round half-up to one decimal place."""
    return math.floor(value * 10 + 0.5) / 10


def normalize(measurement: Measurement) -> Weather:
    return Weather(
        wind_speed=round1(measurement.wind_speed_kph),
        temperature_degrees=round1(measurement.temperature_c),
    )


class WeatherLookupService:
    """Serve weather from cache, then providers in order, then stale cache.

    Every provider attempt gets its own full ``http_timeout`` window. Only the
    first window is capped by the caller's deadline, so a lookup that walks
    the whole provider list can take up to ``len(providers) * http_timeout``.
    """

    def __init__(
        self,
        providers: Iterable[WeatherProvider],
        cache: MeasurementCache,
        config: WeatherConfig,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._providers: Tuple[WeatherProvider, ...] = tuple(providers)
        self._cache = cache
        self._config = config
        self._clock = clock

    @property
    def providers(self) -> Tuple[WeatherProvider, ...]:
        return self._providers

    def normalize_city(self, city: Optional[str]) -> str:
        city = (city or "").strip()
        return (city or self._config.default_city).lower()

    def get_weather(self, city: Optional[str], deadline: Optional[Deadline] = None) -> Weather:
        key = self.normalize_city(city)

        cached = self._cache.get_fresh(key)
        if cached is not None:
            logger.debug("Serving %s from fresh cache", key)
            return cached

        last_error: Optional[Exception] = None
        for attempt, provider in enumerate(self._providers):
            attempt_deadline = Deadline.after(self._config.http_timeout, self._clock)
            if attempt == 0:
                attempt_deadline = attempt_deadline.earliest(deadline)
            try:
                measurement = provider.get(key, attempt_deadline)
                if attempt_deadline.expired():
                    raise DeadlineExceeded(f"{provider.name}: answered after deadline")
                weather = normalize(measurement)
            except Exception as exc:  # noqa: BLE001 - provider failures are logged and skipped
                logger.warning("Weather provider %s failed: %s", provider.name, exc)
                last_error = exc
                continue

            self._cache.set(key, weather)
            logger.info("Provider %s returned weather for %s", provider.name, key)
            return weather

        stale = self._cache.get_stale(key)
        if stale is not None:
            logger.warning("All providers failed for %s, serving stale cache", key)
            return stale

        raise WeatherServiceError("all providers unavailable") from last_error


__all__ = ["WeatherLookupService", "WeatherServiceError", "normalize", "round1"]
