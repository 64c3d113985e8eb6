"""Adventure journal: human-readable entries for tracked events."""

from __future__ import annotations

import logging
from collections import deque
from functools import singledispatch

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
from mudadventure.text_utils import format_xp

logger = logging.getLogger(__name__)

DEFAULT_MSG = "Your progress in Middle Earth will be tracked here!"
DEFAULT_MAX_LINES = 1024

TROPHY_MSG = "Trophy: {mob} ({xp} xp)"
GAINED_LEVEL_MSG = "You gained a level! Congratulations."
LOST_LEVEL_MSG = "You lost a level ({xp} xp)."
ACHIEVE_MSG = "Achievement: {text} ({xp} xp)"
TASK_MSG = "Task accomplished! ({xp} xp)"
DIED_MSG = "You are dead! Sorry... ({xp} xp)"
HINT_MSG = "Hint: {text}"
XP_UPDATED_MSG = "Char XP updated: {xp}"
SESSION_STARTED_MSG = "Adventure started for {name}."
SESSION_ENDED_MSG = "Adventure ended for {name}: {xp} xp gained."


@singledispatch
def format_event(event: Event) -> str | None:
    """Render an event as a journal line, or None for events with no text."""
    return None


@format_event.register
def _(event: KilledMob) -> str:
    return TROPHY_MSG.format(mob=event.mob_name, xp=format_xp(event.xp_gained))


@format_event.register
def _(event: GainedLevel) -> str:
    return GAINED_LEVEL_MSG


@format_event.register
def _(event: LostLevel) -> str:
    return LOST_LEVEL_MSG.format(xp=format_xp(event.xp_lost))


@format_event.register
def _(event: Achievement) -> str:
    return ACHIEVE_MSG.format(text=event.text, xp=format_xp(event.xp_gained))


@format_event.register
def _(event: AccomplishedTask) -> str:
    return TASK_MSG.format(xp=format_xp(event.xp_gained))


@format_event.register
def _(event: Died) -> str:
    return DIED_MSG.format(xp=format_xp(event.xp_lost))


@format_event.register
def _(event: ReceivedHint) -> str:
    return HINT_MSG.format(text=event.text)


@format_event.register
def _(event: ReceivedTell) -> str:
    return event.text


@format_event.register
def _(event: ReceivedNarrate) -> str:
    return event.text


@format_event.register
def _(event: UpdatedXP) -> str:
    return XP_UPDATED_MSG.format(xp=format_xp(event.current))


@format_event.register
def _(event: SessionStarted) -> str:
    return SESSION_STARTED_MSG.format(name=event.session.character_name)


@format_event.register
def _(event: SessionEnded) -> str:
    return SESSION_ENDED_MSG.format(
        name=event.session.character_name,
        xp=format_xp(event.session.xp_gained),
    )


class AdventureJournal:
    """Observer that keeps the most recent rendered entries.

    Starts with a placeholder entry, which the first real entry replaces.
    """

    def __init__(self, max_lines: int = DEFAULT_MAX_LINES) -> None:
        self._entries: deque[str] = deque([DEFAULT_MSG], maxlen=max_lines)
        self._received = 0

    def __call__(self, event: Event) -> None:
        text = format_event(event)
        if text is None:
            return
        if self._received == 0:
            self._entries.clear()
        self._entries.append(text)
        self._received += 1
        logger.debug("Journal: %s", text)

    @property
    def entries(self) -> list[str]:
        return list(self._entries)

    @property
    def received(self) -> int:
        return self._received

    def text(self) -> str:
        return "\n".join(self._entries)
