"""Orientation readings, modes and the tool views they select."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class OrientationMode(str, Enum):
    """Discrete device orientation understood by the view layer."""

    PORTRAIT_PRIMARY = "portrait-primary"
    PORTRAIT_SECONDARY = "portrait-secondary"
    LANDSCAPE_PRIMARY = "landscape-primary"
    LANDSCAPE_SECONDARY = "landscape-secondary"
    UNKNOWN = "unknown"


class ToolView(str, Enum):
    """Tool shown for an orientation."""

    HOME = "home"
    ALARM_CLOCK = "alarm-clock"
    STOPWATCH = "stopwatch"
    TIMER = "timer"
    WEATHER = "weather"

    @property
    def label(self) -> str:
        return _TOOL_LABELS[self]


_TOOL_LABELS = {
    ToolView.HOME: "Home",
    ToolView.ALARM_CLOCK: "Alarm Clock",
    ToolView.STOPWATCH: "Stopwatch",
    ToolView.TIMER: "Timer",
    ToolView.WEATHER: "Weather",
}


@dataclass(frozen=True)
class ScreenOrientationReading:
    """Modern platform reading: a named orientation type plus its angle."""

    type: Optional[str] = None
    angle: Optional[float] = None


@dataclass(frozen=True)
class LegacyOrientationReading:
    """Older platforms only report a signed rotation angle in degrees."""

    angle: Optional[float] = None


OrientationReading = Union[ScreenOrientationReading, LegacyOrientationReading]


__all__ = [
    "LegacyOrientationReading",
    "OrientationMode",
    "OrientationReading",
    "ScreenOrientationReading",
    "ToolView",
]
