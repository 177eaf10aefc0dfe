"""Core abstractions for the weather domain."""
from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, Optional, Protocol


@dataclass(frozen=True, slots=True)
class Measurement:
    """Raw reading reported by a provider.

    Units are fixed so providers are interchangeable:
    - temperature in Celsius
    - wind speed in kilometres per hour (km/h)
    """

    temperature_c: float
    wind_speed_kph: float


@dataclass(frozen=True, slots=True)
class Weather:
    """Normalized observation served to callers and kept in the cache."""

    wind_speed: float
    temperature_degrees: float

    def as_dict(self) -> dict:
        return {
            "wind_speed": _json_number(self.wind_speed),
            "temperature_degrees": _json_number(self.temperature_degrees),
        }


def _json_number(value: float):
    # whole readings render as 30, not 30.0
    return int(value) if float(value).is_integer() else value


class Deadline:
    """Point in time after which a provider call must be abandoned."""

    def __init__(self, expires_at: float, clock: Callable[[], float] = time.monotonic) -> None:
        self.expires_at = expires_at
        self._clock = clock

    @classmethod
    def after(cls, seconds: float, clock: Callable[[], float] = time.monotonic) -> "Deadline":
        return cls(clock() + seconds, clock)

    def remaining(self) -> float:
        return max(0.0, self.expires_at - self._clock())

    def expired(self) -> bool:
        return self._clock() >= self.expires_at

    def earliest(self, other: Optional["Deadline"]) -> "Deadline":
        if other is None or self.expires_at <= other.expires_at:
            return self
        return other

    def __repr__(self) -> str:
        return f"Deadline(remaining={self.remaining():.3f}s)"


class WeatherProvider(Protocol):
    """A data source capable of returning a measurement for a city."""

    name: str

    def get(self, city: str, deadline: Deadline) -> Measurement:
        """Fetch a single measurement, giving up once ``deadline`` passes."""
        ...


__all__ = ["Deadline", "Measurement", "Weather", "WeatherProvider"]
