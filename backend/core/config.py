"""Runtime configuration for the weather lookup service."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class WeatherConfig:
    port: int = 8080
    cache_ttl: float = 3.0
    http_timeout: float = 1.5
    default_city: str = "melbourne"

    @property
    def addr(self) -> str:
        return f"0.0.0.0:{self.port}"

    @classmethod
    def from_settings(cls, settings: Any) -> "WeatherConfig":
        """Build the config from a Django settings object (millisecond values)."""
        return cls(
            port=int(settings.WEATHER_PORT),
            cache_ttl=settings.WEATHER_CACHE_TTL_MS / 1000,
            http_timeout=settings.WEATHER_HTTP_TIMEOUT_MS / 1000,
            default_city=settings.WEATHER_DEFAULT_CITY,
        )


__all__ = ["WeatherConfig"]
