"""Weather agent that asks a search-grounded model for current conditions."""

from __future__ import annotations

import asyncio
import logging

from orientall_app.config import AppConfig
from orientall_app.logging_config import get_logger, log_event, operation_context
from logic.errors import BACKEND_FAILURES, classify_backend_error
from logic.prompts import build_weather_prompt
from logic.reply_parser import parse_weather_reply
from models.weather import CityQuery, CoordinatesQuery, ErrorKind, LocationQuery, QueryResult
from tools.generative_backend import GenerativeBackend
from tools.observability import instrument_call


LOGGER = get_logger(__name__)


class WeatherAgent:
    """Fetches weather for a location and returns a typed result.

    Expected failures come back as error results; only unexpected exceptions
    propagate. Each call makes at most one backend request.
    """

    def __init__(self, config: AppConfig, backend: GenerativeBackend) -> None:
        self.config = config
        self.backend = backend
        self._generate = instrument_call("generative_backend.generate")(backend.generate)

    async def fetch_weather(self, query: LocationQuery) -> QueryResult:
        """Run one grounded lookup for ``query``."""

        with operation_context("agent:weather.fetch_weather") as correlation_id:
            if not self.config.is_configured:
                result = QueryResult.failure(ErrorKind.CONFIGURATION_ERROR, "no API key configured")
                self._log_result(result, query, correlation_id)
                return result

            prompt = build_weather_prompt(query)
            try:
                reply = await asyncio.wait_for(
                    self._generate(prompt, enable_search=True),
                    timeout=self.config.request_timeout_seconds,
                )
            except BACKEND_FAILURES as exc:
                result = classify_backend_error(exc)
            else:
                result = parse_weather_reply(reply.text, reply.citations)

            self._log_result(result, query, correlation_id)
            return result

    async def fetch_weather_by_coordinates(self, latitude: float, longitude: float) -> QueryResult:
        return await self.fetch_weather(CoordinatesQuery(latitude=latitude, longitude=longitude))

    async def fetch_weather_by_city(self, city: str) -> QueryResult:
        return await self.fetch_weather(CityQuery(city=city))

    def _log_result(self, result: QueryResult, query: LocationQuery, correlation_id: str) -> None:
        if result.ok:
            log_event(
                LOGGER,
                level=logging.INFO,
                event="agent_call_completed",
                agent="weather",
                method="fetch_weather",
                correlation_id=correlation_id,
                query_kind=query.kind,
                source_count=len(result.sources),
            )
            return
        log_event(
            LOGGER,
            level=logging.WARNING,
            event="agent_call_failed",
            agent="weather",
            method="fetch_weather",
            correlation_id=correlation_id,
            query_kind=query.kind,
            error_kind=result.error.kind.value,
            detail=result.error.message,
        )


__all__ = ["WeatherAgent"]
