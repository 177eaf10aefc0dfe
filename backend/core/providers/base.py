from __future__ import annotations

import logging
import math
from typing import Any, Dict, Optional

import requests
from requests import Response

from backend.core.abstractions import Deadline, Measurement


class ProviderError(RuntimeError):
    """Base provider error."""


class DeadlineExceeded(ProviderError):
    """Raised when a provider call runs past its deadline."""


class HTTPWeatherProvider:
    """Base class that bounds HTTP provider calls by a deadline."""

    name = "http"

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self.session = session or requests.Session()
        self._log = logging.getLogger(self.__class__.__name__)

    def get(self, city: str, deadline: Deadline) -> Measurement:
        raise NotImplementedError

    def _handle_response(self, response: Response) -> Response:
        if response.status_code != 200:
            body = response.text[:1024]
            self._log.error("Provider returned %s: %s", response.status_code, body)
            raise ProviderError(f"status {response.status_code} body: {body}")
        return response

    def _request(self, method: str, url: str, deadline: Deadline, **kwargs) -> Response:
        if deadline.expired():
            raise DeadlineExceeded(f"{self.name}: deadline exceeded before request")
        try:
            response = self.session.request(
                method,
                url,
                timeout=deadline.remaining(),
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise DeadlineExceeded(f"{self.name}: timeout") from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise ProviderError(f"{self.name}: request failed") from exc
        return self._handle_response(response)

    def _json(self, response: Response) -> Dict[str, Any]:
        try:
            data = response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise ProviderError("invalid json") from exc
        if not isinstance(data, dict):
            raise ProviderError("unexpected payload")
        return data


def _require_float(value: Any, field: str) -> float:
    if value is None:
        raise ProviderError(f"missing {field}")
    try:
        result = float(value)
    except (TypeError, ValueError) as exc:
        raise ProviderError(f"invalid {field}: {value!r}") from exc
    if not math.isfinite(result):
        raise ProviderError(f"invalid {field}: {value!r}")
    return result


def _section(data: Dict[str, Any], field: str) -> Dict[str, Any]:
    value = data.get(field)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ProviderError(f"unexpected {field}: {value!r}")
    return value


__all__ = ["DeadlineExceeded", "HTTPWeatherProvider", "ProviderError"]
