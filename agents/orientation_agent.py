"""Orientation watcher that republishes the mode on every platform event."""

from __future__ import annotations

import logging
from typing import Callable, List, Optional

from orientall_app.logging_config import get_logger, log_event
from logic.orientation import classify
from models.orientation import OrientationMode, OrientationReading


LOGGER = get_logger(__name__)

ModeListener = Callable[[OrientationMode], None]


class OrientationWatcher:
    """Classifies platform readings and notifies subscribers.

    Subscribers are notified on every change event, even when the computed
    mode did not change; deduplication is up to them.
    """

    def __init__(self, read_orientation: Callable[[], Optional[OrientationReading]]) -> None:
        self._read_orientation = read_orientation
        self._listeners: List[ModeListener] = []
        self.current: OrientationMode = classify(read_orientation())

    def subscribe(self, listener: ModeListener) -> Callable[[], None]:
        """Register ``listener`` and return a callable that removes it."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def handle_change(self, reading: Optional[OrientationReading] = None) -> OrientationMode:
        """Platform change hook: reclassify and publish."""

        latest = reading if reading is not None else self._read_orientation()
        self.current = classify(latest)
        for listener in list(self._listeners):
            try:
                listener(self.current)
            except Exception:
                log_event(
                    LOGGER,
                    logging.ERROR,
                    "orientation_listener_failed",
                    mode=self.current.value,
                    exc_info=True,
                )
        return self.current


__all__ = ["ModeListener", "OrientationWatcher"]
