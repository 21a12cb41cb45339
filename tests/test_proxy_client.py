"""Proxy client unwrapping with a stubbed HTTP layer."""

import pytest
import requests

from models.weather import CityQuery, CoordinatesQuery, ErrorKind
from tools import weather_proxy_client
from tools.weather_proxy_client import WeatherProxyClient


class _FakeResponse:
    def __init__(self, status_code: int, body) -> None:
        self.status_code = status_code
        self._body = body

    def json(self):
        if isinstance(self._body, Exception):
            raise self._body
        return self._body


def _stub_get(monkeypatch: pytest.MonkeyPatch, response=None, error: Exception | None = None) -> list:
    calls: list = []

    def fake_get(url, params=None, timeout=None):
        calls.append({"url": url, "params": params, "timeout": timeout})
        if error is not None:
            raise error
        return response

    monkeypatch.setattr(weather_proxy_client.requests, "get", fake_get)
    return calls


def test_success_envelope_becomes_record(monkeypatch: pytest.MonkeyPatch) -> None:
    body = {
        "weatherData": {
            "city": "Bengaluru",
            "temperature": 24.5,
            "condition": "Partly Cloudy",
            "humidity": 72,
            "windSpeed": 14,
            "icon": "⛅",
        },
        "sources": [{"uri": "https://weather.example/blr", "title": "Bengaluru"}],
    }
    calls = _stub_get(monkeypatch, _FakeResponse(200, body))

    result = WeatherProxyClient("https://orientall.example/").fetch(CoordinatesQuery(latitude=12.9, longitude=77.6))

    assert result.ok
    assert result.record.city == "Bengaluru"
    assert result.sources[0].uri == "https://weather.example/blr"
    assert calls[0]["url"] == "https://orientall.example/weather"
    assert calls[0]["params"] == {"lat": 12.9, "lon": 77.6}


def test_nested_error_is_location_not_found(monkeypatch: pytest.MonkeyPatch) -> None:
    _stub_get(monkeypatch, _FakeResponse(200, {"weatherData": {"error": "City not found"}, "sources": []}))

    result = WeatherProxyClient("https://orientall.example").fetch(CityQuery(city="Atlantis"))

    assert result.error.kind is ErrorKind.LOCATION_NOT_FOUND
    assert result.error.message == "City not found"


def test_server_error_keeps_reported_kind(monkeypatch: pytest.MonkeyPatch) -> None:
    _stub_get(monkeypatch, _FakeResponse(500, {"error": "not configured", "kind": "ConfigurationError"}))

    result = WeatherProxyClient("https://orientall.example").fetch(CityQuery(city="Paris"))

    assert result.error.kind is ErrorKind.CONFIGURATION_ERROR


def test_server_error_without_kind(monkeypatch: pytest.MonkeyPatch) -> None:
    _stub_get(monkeypatch, _FakeResponse(502, {"error": "Bad gateway"}))

    result = WeatherProxyClient("https://orientall.example").fetch(CityQuery(city="Paris"))

    assert result.error.kind is ErrorKind.SERVICE_UNAVAILABLE


def test_transport_failure_is_service_unavailable(monkeypatch: pytest.MonkeyPatch) -> None:
    _stub_get(monkeypatch, error=requests.ConnectionError("refused"))

    result = WeatherProxyClient("https://orientall.example").fetch(CityQuery(city="Paris"))

    assert result.error.kind is ErrorKind.SERVICE_UNAVAILABLE


def test_incomplete_weather_data(monkeypatch: pytest.MonkeyPatch) -> None:
    _stub_get(monkeypatch, _FakeResponse(200, {"weatherData": {"city": "Paris"}, "sources": []}))

    result = WeatherProxyClient("https://orientall.example").fetch(CityQuery(city="Paris"))

    assert result.error.kind is ErrorKind.INCOMPLETE_DATA


@pytest.mark.parametrize("status_code", [502, 503])
def test_gateway_html_page_is_service_unavailable(monkeypatch: pytest.MonkeyPatch, status_code: int) -> None:
    body = ValueError("Expecting value: line 1 column 1 (char 0)")
    _stub_get(monkeypatch, _FakeResponse(status_code, body))

    result = WeatherProxyClient("https://orientall.example").fetch(CityQuery(city="Paris"))

    assert result.error.kind is ErrorKind.SERVICE_UNAVAILABLE


def test_unreadable_ok_body_is_malformed(monkeypatch: pytest.MonkeyPatch) -> None:
    _stub_get(monkeypatch, _FakeResponse(200, ValueError("Expecting value")))

    result = WeatherProxyClient("https://orientall.example").fetch(CityQuery(city="Paris"))

    assert result.error.kind is ErrorKind.MALFORMED_RESPONSE
