"""Events derived from the MUD text and GMCP streams."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, ClassVar, Union

if TYPE_CHECKING:
    from mudadventure.session import AdventureSession


class EventKind(Enum):
    KILLED_MOB = "killed_mob"
    GAINED_LEVEL = "gained_level"
    LOST_LEVEL = "lost_level"
    ACHIEVEMENT = "achievement"
    ACCOMPLISHED_TASK = "accomplished_task"
    DIED = "died"
    RECEIVED_HINT = "received_hint"
    RECEIVED_TELL = "received_tell"
    RECEIVED_NARRATE = "received_narrate"
    UPDATED_XP = "updated_xp"
    SESSION_STARTED = "session_started"
    SESSION_ENDED = "session_ended"


@dataclass(frozen=True, slots=True)
class KilledMob:
    kind: ClassVar[EventKind] = EventKind.KILLED_MOB

    mob_name: str
    xp_gained: float


@dataclass(frozen=True, slots=True)
class GainedLevel:
    kind: ClassVar[EventKind] = EventKind.GAINED_LEVEL


@dataclass(frozen=True, slots=True)
class LostLevel:
    kind: ClassVar[EventKind] = EventKind.LOST_LEVEL

    xp_lost: float


@dataclass(frozen=True, slots=True)
class Achievement:
    kind: ClassVar[EventKind] = EventKind.ACHIEVEMENT

    text: str
    xp_gained: float


@dataclass(frozen=True, slots=True)
class AccomplishedTask:
    kind: ClassVar[EventKind] = EventKind.ACCOMPLISHED_TASK

    xp_gained: float


@dataclass(frozen=True, slots=True)
class Died:
    kind: ClassVar[EventKind] = EventKind.DIED

    xp_lost: float


@dataclass(frozen=True, slots=True)
class ReceivedHint:
    kind: ClassVar[EventKind] = EventKind.RECEIVED_HINT

    text: str


@dataclass(frozen=True, slots=True)
class ReceivedTell:
    kind: ClassVar[EventKind] = EventKind.RECEIVED_TELL

    text: str


@dataclass(frozen=True, slots=True)
class ReceivedNarrate:
    kind: ClassVar[EventKind] = EventKind.RECEIVED_NARRATE

    text: str


@dataclass(frozen=True, slots=True)
class UpdatedXP:
    kind: ClassVar[EventKind] = EventKind.UPDATED_XP

    current: float


@dataclass(frozen=True, slots=True)
class SessionStarted:
    """A character session began. ``session`` is a snapshot, not the live object."""

    kind: ClassVar[EventKind] = EventKind.SESSION_STARTED

    session: AdventureSession


@dataclass(frozen=True, slots=True)
class SessionEnded:
    """A character session ended (goodbye or replaced by another character)."""

    kind: ClassVar[EventKind] = EventKind.SESSION_ENDED

    session: AdventureSession


Event = Union[
    KilledMob,
    GainedLevel,
    LostLevel,
    Achievement,
    AccomplishedTask,
    Died,
    ReceivedHint,
    ReceivedTell,
    ReceivedNarrate,
    UpdatedXP,
    SessionStarted,
    SessionEnded,
]
