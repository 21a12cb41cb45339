"""Deterministic mapping from platform orientation readings to modes and tools."""

from __future__ import annotations

import math
from typing import Any, Dict, Mapping, Optional

from models.orientation import (
    LegacyOrientationReading,
    OrientationMode,
    OrientationReading,
    ScreenOrientationReading,
    ToolView,
)

_NAMED_MODES: Dict[str, OrientationMode] = {
    mode.value: mode for mode in OrientationMode if mode is not OrientationMode.UNKNOWN
}

_ANGLE_MODES: Dict[int, OrientationMode] = {
    0: OrientationMode.PORTRAIT_PRIMARY,
    90: OrientationMode.LANDSCAPE_PRIMARY,
    180: OrientationMode.PORTRAIT_SECONDARY,
    270: OrientationMode.LANDSCAPE_SECONDARY,
    -90: OrientationMode.LANDSCAPE_SECONDARY,
}

_MODE_TOOLS: Dict[OrientationMode, ToolView] = {
    OrientationMode.PORTRAIT_PRIMARY: ToolView.ALARM_CLOCK,
    OrientationMode.LANDSCAPE_PRIMARY: ToolView.STOPWATCH,
    OrientationMode.PORTRAIT_SECONDARY: ToolView.TIMER,
    OrientationMode.LANDSCAPE_SECONDARY: ToolView.WEATHER,
    OrientationMode.UNKNOWN: ToolView.HOME,
}


def _mode_from_type(orientation_type: Optional[str]) -> Optional[OrientationMode]:
    if not isinstance(orientation_type, str):
        return None
    if not orientation_type.startswith(("portrait", "landscape")):
        return None
    return _NAMED_MODES.get(orientation_type)


def _mode_from_angle(angle: Any) -> OrientationMode:
    if isinstance(angle, bool) or not isinstance(angle, (int, float)):
        return OrientationMode.UNKNOWN
    if not math.isfinite(angle) or angle != int(angle):
        return OrientationMode.UNKNOWN
    return _ANGLE_MODES.get(int(angle), OrientationMode.UNKNOWN)


def classify(reading: Optional[OrientationReading]) -> OrientationMode:
    """Return the orientation mode for the latest platform reading.

    A recognised named type wins over the angle. Anything that cannot be
    resolved, including a missing reading, is ``UNKNOWN``.
    """

    if reading is None:
        return OrientationMode.UNKNOWN
    if isinstance(reading, ScreenOrientationReading):
        named = _mode_from_type(reading.type)
        if named is not None:
            return named
    return _mode_from_angle(getattr(reading, "angle", None))


def reading_from_payload(payload: Optional[Mapping[str, Any]]) -> Optional[OrientationReading]:
    """Build a reading from a loose JSON payload sent by the browser."""

    if not payload:
        return None
    if payload.get("type") is not None:
        return ScreenOrientationReading(type=payload.get("type"), angle=payload.get("angle"))
    if payload.get("angle") is not None:
        return LegacyOrientationReading(angle=payload.get("angle"))
    return None


def tool_for_mode(mode: OrientationMode) -> ToolView:
    """Pick the tool the view layer shows for an orientation."""

    return _MODE_TOOLS[mode]


__all__ = ["classify", "reading_from_payload", "tool_for_mode"]
