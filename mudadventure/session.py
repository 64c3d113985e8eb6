"""Per-character adventure session and its XP checkpoint bookkeeping."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, replace

from mudadventure.events import Event, SessionEnded, SessionStarted, UpdatedXP

logger = logging.getLogger(__name__)

_SECONDS_PER_HOUR = 3600.0


@dataclass(frozen=True, slots=True)
class XPProgress:
    """Experience values of a session once the MUD has reported XP at least once."""

    initial: float
    checkpoint: float
    current: float


@dataclass
class AdventureSession:
    """Tracking data for one identified character."""

    character_name: str
    started_at: float
    ended_at: float | None = None
    xp: XPProgress | None = None

    @property
    def xp_initial(self) -> float:
        return self.xp.initial if self.xp else 0.0

    @property
    def xp_checkpoint(self) -> float:
        return self.xp.checkpoint if self.xp else 0.0

    @property
    def xp_current(self) -> float:
        return self.xp.current if self.xp else 0.0

    @property
    def xp_gained(self) -> float:
        """XP earned since the first reading of this session."""
        return self.xp_current - self.xp_initial

    @property
    def is_ended(self) -> bool:
        return self.ended_at is not None

    def update_xp(self, xp: float) -> None:
        if self.xp is None:
            logger.info("Adventure: initial XP for %s: %.0f", self.character_name, xp)
            self.xp = XPProgress(initial=xp, checkpoint=xp, current=xp)
        else:
            self.xp = replace(self.xp, current=xp)

    def checkpoint(self) -> float:
        """Return XP gained since the previous checkpoint and advance it."""
        if self.xp is None:
            return 0.0
        gained = self.xp.current - self.xp.checkpoint
        self.xp = replace(self.xp, checkpoint=self.xp.current)
        return gained

    def end(self, now: float) -> None:
        self.ended_at = now

    def xp_per_hour(self, now: float | None = None) -> float:
        """Average XP rate over the session, up to its end or ``now``."""
        until = self.ended_at if self.ended_at is not None else now
        if until is None:
            until = time.time()
        elapsed = until - self.started_at
        if elapsed <= 0:
            return 0.0
        return self.xp_gained * _SECONDS_PER_HOUR / elapsed

    def snapshot(self) -> AdventureSession:
        """Independent copy for handing out to observers."""
        return replace(self)


class SessionTracker:
    """Owns the single live AdventureSession, or none.

    No session and an active session are the only two states. All
    transitions publish through ``emit``; a new character always ends
    the previous session before the new one starts.
    """

    def __init__(
        self,
        emit: Callable[[Event], None],
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._emit = emit
        self._clock = clock
        self._session: AdventureSession | None = None

    @property
    def is_active(self) -> bool:
        return self._session is not None

    @property
    def session(self) -> AdventureSession | None:
        """Snapshot of the active session, or None."""
        return self._session.snapshot() if self._session else None

    def update_identity(self, name: str) -> None:
        """Start tracking ``name``, replacing any other active character."""
        current = self._session
        if current is not None and current.character_name == name:
            return

        if current is None:
            logger.info("Adventure: new adventure for %s", name)
        else:
            logger.info(
                "Adventure: new adventure for %s replacing %s",
                name, current.character_name,
            )
            self._finish(current)

        self._session = AdventureSession(character_name=name, started_at=self._clock())
        self._emit(SessionStarted(self._session.snapshot()))

    def end_session(self) -> None:
        """End the active session on logout. Does nothing without one."""
        if self._session is None:
            return
        logger.info("Adventure: ending session for %s", self._session.character_name)
        self._finish(self._session)

    def update_xp(self, xp: float) -> None:
        if self._session is None:
            logger.warning("Adventure: XP update %.0f without an active session", xp)
            return
        self._session.update_xp(xp)
        self._emit(UpdatedXP(xp))

    def checkpoint(self) -> float:
        """XP gained since the last checkpoint. Consuming: a second call returns 0."""
        if self._session is None:
            logger.warning("Adventure: checkpoint requested without an active session")
            return 0.0
        return self._session.checkpoint()

    def _finish(self, session: AdventureSession) -> None:
        session.end(self._clock())
        self._session = None
        self._emit(SessionEnded(session.snapshot()))
