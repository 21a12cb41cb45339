"""Configuration helpers for the OrientAll backend."""

from dataclasses import dataclass
from pathlib import Path
import os
from typing import Optional

DEFAULT_GEMINI_MODEL = "models/gemini-1.5-flash-002"
DEFAULT_REQUEST_TIMEOUT_SECONDS = 10.0
API_KEY_ENV_VAR = "GOOGLE_API_KEY"

# Placeholder some deployments export instead of leaving the variable unset.
_DISABLED_KEY = "DISABLED"


@dataclass(frozen=True)
class AppConfig:
    """Configuration values for the OrientAll backend.

    The config is read once at startup and never mutated afterwards. A missing
    credential is not an error here: the weather service reports it as a
    configuration failure on first use, so the rest of the app keeps working.
    """

    api_key: Optional[str] = None
    model: str = DEFAULT_GEMINI_MODEL
    request_timeout_seconds: float = DEFAULT_REQUEST_TIMEOUT_SECONDS
    environment: str | None = None

    @property
    def is_configured(self) -> bool:
        """Return True when an AI-service credential is available."""

        return _clean_key(self.api_key) is not None

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Build a config from environment variables or an environment YAML file.

        Environment specific YAML lives in ``config/environments/<env>.yaml`` by
        default and is merged with environment variables so that the API key
        can be injected by the hosting platform.
        """

        env_name = os.getenv("APP_ENV")
        config_path = os.getenv("APP_CONFIG_PATH")
        config_dir = Path(os.getenv("ORIENTALL_CONFIG_DIR", "config/environments"))
        yaml_config: dict = {}

        if config_path:
            path = Path(config_path)
        elif env_name:
            path = config_dir / f"{env_name}.yaml"
        else:
            path = None

        if path and path.exists():
            yaml_config = cls._load_yaml_config(path)

        def get_value(key: str, default: Optional[str] = None) -> Optional[str]:
            env_key = key.upper()
            return os.getenv(env_key, yaml_config.get(key, default))

        api_key = _clean_key(get_value("google_api_key")) or _clean_key(get_value("api_key"))
        model = get_value("model", DEFAULT_GEMINI_MODEL)
        raw_timeout = get_value("request_timeout_seconds")

        return cls(
            api_key=api_key,
            model=str(model or DEFAULT_GEMINI_MODEL),
            request_timeout_seconds=_parse_timeout(raw_timeout),
            environment=env_name,
        )

    @staticmethod
    def _load_yaml_config(path: Path) -> dict:
        """Parse a minimal YAML/INI-style config without external dependencies."""

        config: dict[str, str] = {}
        for line in path.read_text().splitlines():
            stripped = line.strip()
            if not stripped or stripped.startswith("#"):
                continue
            if ":" not in stripped:
                continue
            key, raw_value = stripped.split(":", 1)
            value = raw_value.strip()
            if (value.startswith("\"") and value.endswith("\"")) or (
                value.startswith("'") and value.endswith("'")
            ):
                value = value[1:-1]
            config[key.strip()] = value
        return config


def _clean_key(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    stripped = value.strip()
    if not stripped or stripped == _DISABLED_KEY:
        return None
    return stripped


def _parse_timeout(raw: Optional[str]) -> float:
    if raw is None or not str(raw).strip():
        return DEFAULT_REQUEST_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError as exc:
        raise ValueError(f"request_timeout_seconds must be a number, got {raw!r}") from exc
    if timeout <= 0:
        raise ValueError("request_timeout_seconds must be positive")
    return timeout


__all__ = ["AppConfig", "API_KEY_ENV_VAR", "DEFAULT_GEMINI_MODEL", "DEFAULT_REQUEST_TIMEOUT_SECONDS"]
