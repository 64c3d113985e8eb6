"""Heuristic recognition of adventure events in MUD text lines.

Rules look at a sliding window of recent lines. Most of them are anchored
single-line matches against the newest line; achievements and hints are
two-line patterns where the marker line comes first and the payload line
second.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from mudadventure.events import (
    AccomplishedTask,
    Achievement,
    Died,
    Event,
    GainedLevel,
    KilledMob,
    LostLevel,
    ReceivedHint,
)
from mudadventure.text_utils import find_any, starts_with
from mudadventure.window import LineWindow

logger = logging.getLogger(__name__)

# Kill announcements, matched anywhere in the line; the mob name is the
# text before the match:
#   An orc is dead! R.I.P.
#   The Barrow-wight disappears into nothing.
KILL_PHRASES = (
    " is dead! R.I.P.",
    " disappears into nothing.",
)

# A kill only counts if one of these shows up somewhere in the window.
# Deaths of mobs we had nothing to do with are not reported.
KILL_REWARD_PHRASES = (
    "You receive your share of experience.",
    "You gain a level!",
    "You feel revitalized as the dark power within",
)

GAINED_LEVEL_PREFIX = "You gain a level!"
LOST_LEVEL_PREFIX = "You lose a level!"
ACCOMPLISHED_TASK_PREFIX = "With the completion of your task, you feel more experienced."
DIED_PREFIX = "You are dead! Sorry..."

# Two-line patterns: marker at window[1], payload at window[0]
#   You achieved something new!
#   Visited the Prancing Pony.
ACHIEVEMENT_MARKER = "You achieved something new!"
#   # Hint:
#   #   Type 'help rent' to learn about storing your items.
HINT_MARKER = "# Hint:"
HINT_INDENT = 4


@dataclass
class ClassifierRules:
    """Toggles for rules whose server wording is less certain."""

    lost_level: bool = True
    accomplished_task: bool = True
    died: bool = True


class TextPatternClassifier:
    """Turns the current window contents into zero or more events.

    ``checkpoint`` is called for every event that reports an XP delta, so
    the order of rules below is also the order in which XP is attributed.
    """

    def __init__(
        self,
        window: LineWindow,
        checkpoint: Callable[[], float],
        rules: ClassifierRules | None = None,
    ) -> None:
        self._window = window
        self._checkpoint = checkpoint
        self._rules = rules or ClassifierRules()

    def classify(self) -> list[Event]:
        """Evaluate all rules against the window. Call once after each push."""
        newest = self._window.get(0)
        if newest is None:
            return []

        events: list[Event] = []

        kill = self._match_kill(newest)
        if kill is not None:
            events.append(kill)

        if newest.startswith(GAINED_LEVEL_PREFIX):
            events.append(GainedLevel())

        if self._rules.lost_level and newest.startswith(LOST_LEVEL_PREFIX):
            events.append(LostLevel(xp_lost=self._checkpoint()))

        if starts_with(self._window.get(1), ACHIEVEMENT_MARKER):
            events.append(Achievement(text=newest, xp_gained=self._checkpoint()))

        if self._rules.accomplished_task and newest.startswith(ACCOMPLISHED_TASK_PREFIX):
            events.append(AccomplishedTask(xp_gained=self._checkpoint()))

        if self._rules.died and newest.startswith(DIED_PREFIX):
            events.append(Died(xp_lost=self._checkpoint()))

        if starts_with(self._window.get(1), HINT_MARKER):
            events.append(ReceivedHint(text=newest[HINT_INDENT:]))

        return events

    def _match_kill(self, line: str) -> KilledMob | None:
        offset = find_any(line, KILL_PHRASES)
        if offset < 0:
            return None

        mob_name = line[:offset]
        if not any(self._window.contains(phrase) for phrase in KILL_REWARD_PHRASES):
            logger.debug("Ignoring death of %s: no reward in window", mob_name)
            return None

        return KilledMob(mob_name=mob_name, xp_gained=self._checkpoint())
