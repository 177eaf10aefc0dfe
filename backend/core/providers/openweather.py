"""OpenWeather weather provider."""
from __future__ import annotations

from typing import Optional

import requests

from backend.core.abstractions import Deadline, Measurement

from .base import HTTPWeatherProvider, _require_float, _section

# OpenWeather metric units report wind speed in m/s.
MPS_TO_KPH = 3.6


class OpenWeatherProvider(HTTPWeatherProvider):
    """Integration with the OpenWeather current weather endpoint."""

    name = "openweather"
    base_url = "https://api.openweathermap.org/data/2.5/weather"
    country_code = "AU"

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

    def get(self, city: str, deadline: Deadline) -> Measurement:  # noqa: D401
        """Return the current measurement from OpenWeather."""
        params = {"q": f"{city},{self.country_code}", "appid": self.api_key, "units": "metric"}
        response = self._request("GET", self.base_url, deadline, params=params)
        data = self._json(response)
        main = _section(data, "main")
        wind = _section(data, "wind")

        return Measurement(
            temperature_c=_require_float(main.get("temp"), "main.temp"),
            wind_speed_kph=_require_float(wind.get("speed"), "wind.speed") * MPS_TO_KPH,
        )


__all__ = ["MPS_TO_KPH", "OpenWeatherProvider"]
