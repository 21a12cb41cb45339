"""OrientAll backend bootstrap."""

import logging
from typing import Any, Dict, Mapping, Optional

from orientall_app.config import AppConfig
from orientall_app.logging_config import configure_logging, get_logger, log_event
from agents.weather_agent import WeatherAgent
from logic.orientation import classify, reading_from_payload, tool_for_mode
from tools.generative_backend import GeminiSearchBackend, GenerativeBackend


LOGGER = get_logger(__name__)


class OrientAllApp:
    """Wires together configuration, the generative backend and the agents."""

    def __init__(self, config: AppConfig | None = None, backend: GenerativeBackend | None = None) -> None:
        self.config = config or AppConfig.from_env()
        configure_logging()

        if not self.config.is_configured:
            log_event(
                LOGGER,
                level=logging.WARNING,
                event="app_missing_api_key",
                detail="weather lookups will report a configuration error until GOOGLE_API_KEY is set",
            )

        self.backend = backend or GeminiSearchBackend(self.config)
        self.weather_agent = WeatherAgent(config=self.config, backend=self.backend)

    @staticmethod
    def describe_orientation(payload: Optional[Mapping[str, Any]]) -> Dict[str, str]:
        """Classify a browser orientation payload and name the tool to show."""

        mode = classify(reading_from_payload(payload))
        tool = tool_for_mode(mode)
        return {"mode": mode.value, "tool": tool.value, "label": tool.label}


__all__ = ["OrientAllApp"]
