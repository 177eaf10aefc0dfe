"""Build the ordered provider list from configured credentials."""
from __future__ import annotations

import logging
from typing import Optional, Tuple

import requests
from django.core.exceptions import ImproperlyConfigured

from backend.core.abstractions import WeatherProvider

from .openweather import OpenWeatherProvider
from .weatherstack import WeatherstackProvider


logger = logging.getLogger(__name__)

# (env var, provider class) in failover priority order.
PROVIDER_KEYS = (
    ("WEATHERSTACK_KEY", WeatherstackProvider),
    ("OPENWEATHER_KEY", OpenWeatherProvider),
)


def load_providers(
    weatherstack_key: Optional[str] = None,
    openweather_key: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> Tuple[WeatherProvider, ...]:
    """Return every provider that has a credential, first-listed first-tried."""
    session = session or requests.Session()
    keys = {"WEATHERSTACK_KEY": weatherstack_key, "OPENWEATHER_KEY": openweather_key}
    providers = []
    for env_name, provider_cls in PROVIDER_KEYS:
        api_key = keys[env_name]
        if not api_key:
            logger.info("Provider %s disabled: %s is not set", provider_cls.name, env_name)
            continue
        providers.append(provider_cls(api_key=api_key, session=session))
    return tuple(providers)


def require_providers(
    weatherstack_key: Optional[str] = None,
    openweather_key: Optional[str] = None,
    session: Optional[requests.Session] = None,
) -> Tuple[WeatherProvider, ...]:
    providers = load_providers(weatherstack_key, openweather_key, session=session)
    if not providers:
        missing = ", ".join(env_name for env_name, _ in PROVIDER_KEYS)
        raise ImproperlyConfigured(f"no providers configured; set at least one of {missing}")
    return providers


__all__ = ["PROVIDER_KEYS", "load_providers", "require_providers"]
