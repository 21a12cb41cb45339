"""View-side state for the weather panel, guarding against stale results."""

from __future__ import annotations

import logging
from typing import Dict, Optional

from orientall_app.logging_config import get_logger, log_event
from agents.weather_agent import WeatherAgent
from models.weather import CityQuery, CoordinatesQuery, LocationQuery, QueryResult


LOGGER = get_logger(__name__)

GEOLOCATION_MESSAGES: Dict[str, str] = {
    "permission-denied": "Location permission denied. You can manually search for a city below.",
    "position-unavailable": "Location information is unavailable. Please check your connection or try again.",
    "timeout": "The request to get user location timed out. Please try again.",
    "unsupported": "Geolocation is not supported by your browser.",
}
_GEOLOCATION_FALLBACK = "An unknown error occurred while fetching your location."


class WeatherPanel:
    """Keeps the newest weather result for one panel instance.

    Every refresh gets a sequence number; a result that resolves after a newer
    refresh started is discarded rather than shown.
    """

    def __init__(self, agent: WeatherAgent) -> None:
        self.agent = agent
        self.result: Optional[QueryResult] = None
        self.notice: Optional[str] = None
        self._sequence = 0
        self._in_flight = 0

    @property
    def loading(self) -> bool:
        return self._in_flight > 0

    @property
    def error_message(self) -> Optional[str]:
        if self.notice:
            return self.notice
        if self.result is not None and not self.result.ok:
            return self.result.error.user_message
        return None

    async def refresh(self, query: LocationQuery) -> Optional[QueryResult]:
        """Fetch weather for ``query``; returns None when a newer call superseded it."""

        self._sequence += 1
        ticket = self._sequence
        self._in_flight += 1
        self.notice = None
        try:
            result = await self.agent.fetch_weather(query)
        finally:
            self._in_flight -= 1

        if ticket != self._sequence:
            log_event(LOGGER, logging.DEBUG, "weather_result_discarded", ticket=ticket, latest=self._sequence)
            return None
        self.result = result
        return result

    async def refresh_for_coordinates(self, latitude: float, longitude: float) -> Optional[QueryResult]:
        return await self.refresh(CoordinatesQuery(latitude=latitude, longitude=longitude))

    async def refresh_for_city(self, city: str) -> Optional[QueryResult]:
        return await self.refresh(CityQuery(city=city))

    def record_geolocation_failure(self, code: str) -> str:
        """Show a message for a browser geolocation failure code."""

        # A failed position lookup also supersedes any in-flight request.
        self._sequence += 1
        self.result = None
        self.notice = GEOLOCATION_MESSAGES.get(code, _GEOLOCATION_FALLBACK)
        return self.notice


__all__ = ["GEOLOCATION_MESSAGES", "WeatherPanel"]
