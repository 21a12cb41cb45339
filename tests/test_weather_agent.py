"""Weather agent behaviour with offline backends."""

import asyncio
import json

import pytest
from google.api_core import exceptions as api_exceptions
from pydantic import ValidationError

from agents.weather_agent import WeatherAgent
from logic.errors import USER_MESSAGES, classify_backend_error
from models.weather import CityQuery, ErrorKind
from orientall_app.config import AppConfig
from tools.generative_backend import GenerationReply, GenerativeBackend, MockGenerativeBackend

PARIS_REPLY = json.dumps(
    {"city": "Paris", "temperature": 18, "condition": "Clear", "humidity": 60, "windSpeed": 10, "icon": "☀️"},
    ensure_ascii=False,
)


def _demo_config(**overrides) -> AppConfig:
    values = {"api_key": "dummy-key", "request_timeout_seconds": 0.5}
    values.update(overrides)
    return AppConfig(**values)


class _SlowBackend(GenerativeBackend):
    async def generate(self, prompt: str, enable_search: bool = True) -> GenerationReply:
        await asyncio.sleep(5)
        return GenerationReply(text=PARIS_REPLY)


def test_successful_lookup_returns_record_and_sources() -> None:
    backend = MockGenerativeBackend(
        text=f"```json\n{PARIS_REPLY}\n```",
        citations=[("https://weather.example/paris", "Paris weather")],
    )
    agent = WeatherAgent(config=_demo_config(), backend=backend)

    result = asyncio.run(agent.fetch_weather_by_city("Paris"))

    assert result.ok
    assert result.record.city == "Paris"
    assert [source.title for source in result.sources] == ["Paris weather"]
    assert backend.call_count == 1
    assert 'for the city "Paris"' in backend.calls[0]


def test_coordinate_lookup_embeds_both_numbers() -> None:
    backend = MockGenerativeBackend(text=PARIS_REPLY)
    agent = WeatherAgent(config=_demo_config(), backend=backend)

    asyncio.run(agent.fetch_weather_by_coordinates(12.9, 77.6))

    assert "12.9" in backend.calls[0]
    assert "77.6" in backend.calls[0]


@pytest.mark.parametrize("api_key", [None, "", "   ", "DISABLED"])
def test_missing_credential_makes_no_backend_call(api_key) -> None:
    backend = MockGenerativeBackend(text=PARIS_REPLY)
    agent = WeatherAgent(config=_demo_config(api_key=api_key), backend=backend)

    result = asyncio.run(agent.fetch_weather(CityQuery(city="Chennai")))

    assert result.error.kind is ErrorKind.CONFIGURATION_ERROR
    assert "GOOGLE_API_KEY" in result.error.user_message
    assert backend.call_count == 0


def test_location_not_found_reply() -> None:
    agent = WeatherAgent(
        config=_demo_config(), backend=MockGenerativeBackend(text='{"error": "City not found"}')
    )

    result = asyncio.run(agent.fetch_weather_by_city("Atlantis"))

    assert result.error.kind is ErrorKind.LOCATION_NOT_FOUND
    assert result.error.message == "City not found"


def test_empty_reply_from_backend() -> None:
    agent = WeatherAgent(config=_demo_config(), backend=MockGenerativeBackend(text=""))

    assert asyncio.run(agent.fetch_weather_by_city("Paris")).error.kind is ErrorKind.EMPTY_RESPONSE


@pytest.mark.parametrize(
    "error, expected",
    [
        (api_exceptions.PermissionDenied("API key not valid"), ErrorKind.INVALID_CREDENTIAL),
        (api_exceptions.Unauthenticated("bad credentials"), ErrorKind.INVALID_CREDENTIAL),
        (api_exceptions.ServiceUnavailable("backend overloaded"), ErrorKind.SERVICE_UNAVAILABLE),
        (api_exceptions.InternalServerError("boom"), ErrorKind.SERVICE_UNAVAILABLE),
        (api_exceptions.DeadlineExceeded("too slow"), ErrorKind.SERVICE_UNAVAILABLE),
        (ConnectionError("connection reset"), ErrorKind.SERVICE_UNAVAILABLE),
        (api_exceptions.NotFound("model missing"), ErrorKind.UNKNOWN),
    ],
)
def test_backend_failures_are_classified(error, expected) -> None:
    agent = WeatherAgent(config=_demo_config(), backend=MockGenerativeBackend(error=error))

    result = asyncio.run(agent.fetch_weather_by_city("Paris"))

    assert result.error.kind is expected


def test_unknown_failure_keeps_original_message() -> None:
    result = classify_backend_error(api_exceptions.NotFound("model gemini-x is not available"))

    assert result.error.kind is ErrorKind.UNKNOWN
    assert "model gemini-x is not available" in result.error.message
    assert result.error.user_message == USER_MESSAGES[ErrorKind.UNKNOWN]


def test_timeout_is_service_unavailable() -> None:
    agent = WeatherAgent(config=_demo_config(request_timeout_seconds=0.05), backend=_SlowBackend())

    result = asyncio.run(agent.fetch_weather_by_city("Paris"))

    assert result.error.kind is ErrorKind.SERVICE_UNAVAILABLE


def test_unexpected_exceptions_propagate() -> None:
    agent = WeatherAgent(config=_demo_config(), backend=MockGenerativeBackend(error=KeyError("bug")))

    with pytest.raises(KeyError):
        asyncio.run(agent.fetch_weather_by_city("Paris"))


def test_blank_city_is_a_caller_error() -> None:
    agent = WeatherAgent(config=_demo_config(), backend=MockGenerativeBackend(text=PARIS_REPLY))

    with pytest.raises(ValidationError):
        asyncio.run(agent.fetch_weather_by_city("   "))


def test_user_messages_are_distinct() -> None:
    assert set(USER_MESSAGES) == set(ErrorKind)
    assert len(set(USER_MESSAGES.values())) == len(ErrorKind)
