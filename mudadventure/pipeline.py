"""Adventure tracking pipeline: text/GMCP input -> classifier/router -> observers."""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable

from mudadventure.config import TrackerConfig
from mudadventure.emitter import EventEmitter, LoggingObserver, Observer
from mudadventure.gmcp import GmcpMessage, ProtocolMessageRouter
from mudadventure.journal import AdventureJournal
from mudadventure.parser import TextPatternClassifier
from mudadventure.session import AdventureSession, SessionTracker
from mudadventure.text_utils import strip_line_ending
from mudadventure.window import LineWindow

logger = logging.getLogger(__name__)


class AdventureTracker:
    """Orchestrates event recognition for one MUD connection.

    Flow: text line -> line window -> pattern classifier -> observers, and
    GMCP message -> router -> session tracker -> observers.

    Usage:
        tracker = AdventureTracker()
        tracker.subscribe(journal)
        tracker.on_text("An orc is dead! R.I.P.")
        tracker.on_gmcp('Char.Vitals {"xp": 1200}')

    Observers run while the input is being processed and may call
    ``reset()`` or feed further input; that input is handled immediately,
    nested inside the current one.
    """

    def __init__(
        self,
        config: TrackerConfig | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or TrackerConfig()
        # Text and GMCP may be delivered from different threads. Reentrant so
        # an observer may call back into the tracker during delivery.
        self._lock = threading.RLock()

        self._emitter = EventEmitter()
        self._emitter.subscribe(LoggingObserver())
        self._journal = AdventureJournal(self._config.journal_max_lines)
        self._emitter.subscribe(self._journal)
        self._window = LineWindow(self._config.window_size)
        self._sessions = SessionTracker(self._emitter.emit, clock=clock)
        self._classifier = TextPatternClassifier(
            self._window,
            self._sessions.checkpoint,
            self._config.classifier_rules(),
        )
        self._router = ProtocolMessageRouter(self._sessions, self._emitter.emit)

    @property
    def session(self) -> AdventureSession | None:
        return self._sessions.session

    @property
    def window(self) -> LineWindow:
        return self._window

    @property
    def journal(self) -> AdventureJournal:
        return self._journal

    @property
    def emitter(self) -> EventEmitter:
        """For adapters such as QtEventBridge that attach to the emitter directly."""
        return self._emitter

    def subscribe(self, observer: Observer) -> None:
        self._emitter.subscribe(observer)

    def unsubscribe(self, observer: Observer) -> None:
        self._emitter.unsubscribe(observer)

    def on_text(self, line: str) -> None:
        """Process one line of MUD text (ANSI already removed)."""
        line = strip_line_ending(line)
        with self._lock:
            self._window.push(line)
            for event in self._classifier.classify():
                self._emitter.emit(event)

    def on_gmcp(self, message: GmcpMessage | str) -> None:
        """Process one GMCP message, either decoded or as a raw ``Package json`` frame."""
        if isinstance(message, str):
            try:
                message = GmcpMessage.from_raw(message)
            except ValueError as e:
                logger.warning("Dropping GMCP frame: %s", e)
                return
        with self._lock:
            self._router.dispatch(message)

    def reset(self) -> None:
        """Forget recent text and end any active session (e.g. on disconnect)."""
        with self._lock:
            self._window.clear()
            self._sessions.end_session()
