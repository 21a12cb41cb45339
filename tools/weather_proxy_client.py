"""Client for the deployed ``/weather`` proxy endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict

import requests
from pydantic import ValidationError

from models.weather import (
    CityQuery,
    CoordinatesQuery,
    ErrorKind,
    LocationQuery,
    QueryResult,
    Source,
    WeatherRecord,
)


LOGGER = logging.getLogger(__name__)


class WeatherProxyClient:
    """Calls the proxy over HTTP and unwraps its envelope into a result."""

    def __init__(self, base_url: str, timeout_seconds: float = 10.0) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds

    @staticmethod
    def _params(query: LocationQuery) -> Dict[str, Any]:
        if isinstance(query, CoordinatesQuery):
            return {"lat": query.latitude, "lon": query.longitude}
        if isinstance(query, CityQuery):
            return {"city": query.city}
        raise TypeError(f"unsupported location query: {type(query).__name__}")

    def fetch(self, query: LocationQuery) -> QueryResult:
        url = f"{self.base_url}/weather"
        try:
            response = requests.get(url, params=self._params(query), timeout=self.timeout_seconds)
        except (requests.Timeout, requests.ConnectionError) as exc:
            LOGGER.error("Weather proxy unreachable", exc_info=exc)
            return QueryResult.failure(ErrorKind.SERVICE_UNAVAILABLE, str(exc))
        except requests.RequestException as exc:
            LOGGER.error("Weather proxy request failed", exc_info=exc)
            return QueryResult.failure(ErrorKind.MALFORMED_RESPONSE, str(exc))

        try:
            body = response.json()
        except ValueError as exc:
            # Gateways answer 5xx with HTML pages.
            if response.status_code >= 500:
                LOGGER.error("Weather proxy returned HTTP %s", response.status_code)
                return QueryResult.failure(ErrorKind.SERVICE_UNAVAILABLE, f"HTTP {response.status_code}")
            LOGGER.error("Weather proxy returned an unreadable body", exc_info=exc)
            return QueryResult.failure(ErrorKind.MALFORMED_RESPONSE, str(exc))

        if response.status_code != 200:
            return self._error_from_body(response.status_code, body)
        return self._unwrap(body)

    @staticmethod
    def _error_from_body(status_code: int, body: Any) -> QueryResult:
        body = body if isinstance(body, dict) else {}
        message = str(body.get("error") or f"HTTP {status_code}")
        try:
            kind = ErrorKind(body.get("kind"))
        except ValueError:
            kind = ErrorKind.SERVICE_UNAVAILABLE if status_code >= 500 else ErrorKind.UNKNOWN
        return QueryResult.failure(kind, message)

    @staticmethod
    def _unwrap(body: Any) -> QueryResult:
        weather_data = body.get("weatherData") if isinstance(body, dict) else None
        if not isinstance(weather_data, dict):
            return QueryResult.failure(ErrorKind.MALFORMED_RESPONSE, "weatherData is missing")
        # Location-not-found travels as a 200 with the model's error nested inside.
        if weather_data.get("error"):
            return QueryResult.failure(ErrorKind.LOCATION_NOT_FOUND, str(weather_data["error"]))
        try:
            record = WeatherRecord.model_validate(weather_data)
            sources = [Source.model_validate(item) for item in body.get("sources") or []]
        except ValidationError as exc:
            LOGGER.error("Weather proxy payload schema validation failed", exc_info=exc)
            return QueryResult.failure(ErrorKind.INCOMPLETE_DATA, str(exc))
        return QueryResult.success(record, sources)


__all__ = ["WeatherProxyClient"]
