"""Observer fan-out for adventure events."""

from __future__ import annotations

import logging
from collections.abc import Callable

from mudadventure.events import Event

logger = logging.getLogger(__name__)

Observer = Callable[[Event], None]


class EventEmitter:
    """Delivers each event to every registered observer, in registration order.

    Usage:
        emitter = EventEmitter()
        emitter.subscribe(print)
        emitter.emit(GainedLevel())
    """

    def __init__(self) -> None:
        self._observers: list[Observer] = []

    def subscribe(self, observer: Observer) -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: Observer) -> None:
        try:
            self._observers.remove(observer)
        except ValueError:
            logger.debug("Unsubscribe of unknown observer %r ignored", observer)

    @property
    def observer_count(self) -> int:
        return len(self._observers)

    def emit(self, event: Event) -> None:
        # Copy so observers may unsubscribe themselves while being notified
        for observer in list(self._observers):
            try:
                observer(event)
            except Exception:
                logger.exception("Observer %r failed on %s", observer, event.kind.value)


class LoggingObserver:
    """Diagnostic observer: logs every event, never influences delivery."""

    def __init__(self, level: int = logging.DEBUG) -> None:
        self._level = level

    def __call__(self, event: Event) -> None:
        logger.log(self._level, "Event %s: %r", event.kind.value, event)
