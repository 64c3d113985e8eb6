"""Qt signal adapter so display widgets can connect to tracker events."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from mudadventure.emitter import EventEmitter
from mudadventure.events import (
    AccomplishedTask,
    Achievement,
    Died,
    Event,
    GainedLevel,
    KilledMob,
    LostLevel,
    ReceivedHint,
    ReceivedNarrate,
    ReceivedTell,
    SessionEnded,
    SessionStarted,
    UpdatedXP,
)

logger = logging.getLogger(__name__)


class QtEventBridge(QObject):
    """Re-emits tracker events as Qt signals.

    Signals are delivered through Qt's connection machinery, so widgets
    living in the GUI thread get queued delivery when the tracker runs in
    a worker thread.
    """

    event_emitted = pyqtSignal(object)  # any Event

    killed_mob = pyqtSignal(str, float)  # mob name, xp gained
    gained_level = pyqtSignal()
    lost_level = pyqtSignal(float)
    achieved_something = pyqtSignal(str, float)
    accomplished_task = pyqtSignal(float)
    died = pyqtSignal(float)
    received_hint = pyqtSignal(str)
    received_tell = pyqtSignal(str)
    received_narrate = pyqtSignal(str)
    updated_xp = pyqtSignal(float)
    session_started = pyqtSignal(object)  # AdventureSession snapshot
    session_ended = pyqtSignal(object)

    def __init__(self, emitter: EventEmitter | None = None, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._emitter: EventEmitter | None = None
        if emitter is not None:
            self.attach(emitter)

    def attach(self, emitter: EventEmitter) -> None:
        self.detach()
        emitter.subscribe(self.on_event)
        self._emitter = emitter

    def detach(self) -> None:
        if self._emitter is not None:
            self._emitter.unsubscribe(self.on_event)
            self._emitter = None

    def on_event(self, event: Event) -> None:
        self.event_emitted.emit(event)
        if isinstance(event, KilledMob):
            self.killed_mob.emit(event.mob_name, event.xp_gained)
        elif isinstance(event, GainedLevel):
            self.gained_level.emit()
        elif isinstance(event, LostLevel):
            self.lost_level.emit(event.xp_lost)
        elif isinstance(event, Achievement):
            self.achieved_something.emit(event.text, event.xp_gained)
        elif isinstance(event, AccomplishedTask):
            self.accomplished_task.emit(event.xp_gained)
        elif isinstance(event, Died):
            self.died.emit(event.xp_lost)
        elif isinstance(event, ReceivedHint):
            self.received_hint.emit(event.text)
        elif isinstance(event, ReceivedTell):
            self.received_tell.emit(event.text)
        elif isinstance(event, ReceivedNarrate):
            self.received_narrate.emit(event.text)
        elif isinstance(event, UpdatedXP):
            self.updated_xp.emit(event.current)
        elif isinstance(event, SessionStarted):
            self.session_started.emit(event.session)
        elif isinstance(event, SessionEnded):
            self.session_ended.emit(event.session)
        else:
            logger.warning("No Qt signal for event %r", event)
