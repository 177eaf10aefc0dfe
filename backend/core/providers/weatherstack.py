"""Weatherstack weather provider."""
from __future__ import annotations

from typing import Optional

import requests

from backend.core.abstractions import Deadline, Measurement

from .base import HTTPWeatherProvider, ProviderError, _require_float, _section


class WeatherstackProvider(HTTPWeatherProvider):
    """Integration with the Weatherstack ``/current`` endpoint.

    Weatherstack answers application errors (bad key, unknown city, quota)
    with HTTP 200 and an ``error`` object in the body, so the payload has to
    be inspected before it is trusted.
    """

    name = "weatherstack"
    base_url = "http://api.weatherstack.com/current"

    def __init__(
        self,
        *,
        api_key: str,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        super().__init__(session=session)
        self.api_key = api_key
        self.base_url = base_url or self.base_url

    def get(self, city: str, deadline: Deadline) -> Measurement:
        params = {"access_key": self.api_key, "query": city}
        response = self._request("GET", self.base_url, deadline, params=params)
        data = self._json(response)

        error = data.get("error")
        if error or data.get("success") is False:
            if isinstance(error, dict):
                info = error.get("info") or "unknown error"
            else:
                info = str(error or "unknown error")
            self._log.warning("Weatherstack reported an error: %s", info)
            raise ProviderError(info)

        current = _section(data, "current")
        if not current:
            raise ProviderError("missing current in response")
        # wind_speed is already km/h in the default metric units
        return Measurement(
            temperature_c=_require_float(current.get("temperature"), "current.temperature"),
            wind_speed_kph=_require_float(current.get("wind_speed"), "current.wind_speed"),
        )


__all__ = ["WeatherstackProvider"]
