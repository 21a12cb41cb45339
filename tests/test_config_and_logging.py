"""Configuration loading and log redaction."""

import json
import logging
from pathlib import Path

import pytest

from orientall_app.config import DEFAULT_GEMINI_MODEL, AppConfig
from orientall_app.logging_config import JsonFormatter, correlation_context, redact_for_log

_ENV_KEYS = ("APP_ENV", "APP_CONFIG_PATH", "GOOGLE_API_KEY", "API_KEY", "MODEL", "REQUEST_TIMEOUT_SECONDS")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


def test_defaults_without_environment() -> None:
    config = AppConfig.from_env()

    assert not config.is_configured
    assert config.model == DEFAULT_GEMINI_MODEL
    assert config.request_timeout_seconds == 10.0


def test_api_key_from_either_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("API_KEY", "legacy-key")
    assert AppConfig.from_env().api_key == "legacy-key"

    monkeypatch.setenv("GOOGLE_API_KEY", " primary-key ")
    assert AppConfig.from_env().api_key == "primary-key"


def test_placeholder_key_is_not_configured(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("GOOGLE_API_KEY", "DISABLED")

    assert not AppConfig.from_env().is_configured
    assert not AppConfig(api_key="DISABLED").is_configured


def test_environment_overrides_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_file = tmp_path / "staging.yaml"
    config_file.write_text(
        "# staging\n"
        'google_api_key: "file-key"\n'
        "model: gemini-1.5-flash\n"
        "request_timeout_seconds: 4\n"
    )
    monkeypatch.setenv("APP_CONFIG_PATH", str(config_file))
    monkeypatch.setenv("MODEL", "gemini-2.5-flash")

    config = AppConfig.from_env()

    assert config.api_key == "file-key"
    assert config.model == "gemini-2.5-flash"
    assert config.request_timeout_seconds == 4.0


def test_invalid_timeout_is_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REQUEST_TIMEOUT_SECONDS", "soon")

    with pytest.raises(ValueError):
        AppConfig.from_env()


def test_config_is_immutable() -> None:
    config = AppConfig(api_key="dummy-key")

    with pytest.raises(AttributeError):
        config.api_key = "other"  # type: ignore[misc]


def test_location_fields_are_redacted() -> None:
    scrubbed = redact_for_log(
        {"city": "Chennai", "nested": {"latitude": 12.9}, "detail": "key AIzaSyA1234567890abcdefghijklmnop leaked"}
    )

    assert scrubbed["city"] == "[redacted]"
    assert scrubbed["nested"]["latitude"] == "[redacted]"
    assert "AIza" not in scrubbed["detail"]


def test_json_formatter_includes_correlation_id() -> None:
    record = logging.LogRecord("orientall", logging.INFO, __file__, 1, "weather_lookup", None, None)
    record.city = "Paris"

    with correlation_context("abc123"):
        payload = json.loads(JsonFormatter().format(record))

    assert payload["correlation_id"] == "abc123"
    assert payload["city"] == "[redacted]"
    assert payload["message"] == "weather_lookup"
