"""GMCP side-channel messages and their routing into the adventure tracker.

GMCP frames arrive as ``Package.Name <json>``; see
https://mume.org/help/generic_mud_communication_protocol
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from mudadventure.events import Event, ReceivedNarrate, ReceivedTell
from mudadventure.session import SessionTracker

logger = logging.getLogger(__name__)

CHAR_NAME = "char.name"
CHAR_STATUS_VARS = "char.statusvars"
CHAR_VITALS = "char.vitals"
COMM_CHANNEL_TEXT = "comm.channel.text"
CORE_GOODBYE = "core.goodbye"

# Comm channel -> event; any other channel is ignored
_CHANNEL_EVENTS: dict[str, Callable[[str], Event]] = {
    "tells": ReceivedTell,
    "tales": ReceivedNarrate,
}


@dataclass(frozen=True, slots=True)
class GmcpMessage:
    """One decoded GMCP frame. Package names compare case-insensitively."""

    package: str
    json_text: str | None = None

    @classmethod
    def from_raw(cls, raw: str) -> GmcpMessage:
        """Parse the wire form ``Package.Name[ <json>]``.

        Raises ValueError if there is no package name.
        """
        package, _, payload = raw.strip().partition(" ")
        if not package:
            raise ValueError(f"GMCP frame without package name: {raw!r}")
        payload = payload.strip()
        return cls(package=package, json_text=payload or None)

    def _is(self, name: str) -> bool:
        return self.package.lower() == name

    def is_char_name(self) -> bool:
        return self._is(CHAR_NAME)

    def is_char_status_vars(self) -> bool:
        return self._is(CHAR_STATUS_VARS)

    def is_char_vitals(self) -> bool:
        return self._is(CHAR_VITALS)

    def is_comm_channel_text(self) -> bool:
        return self._is(COMM_CHANNEL_TEXT)

    def is_core_goodbye(self) -> bool:
        return self._is(CORE_GOODBYE)

    def payload(self) -> str | None:
        return self.json_text


def decode_payload(message: GmcpMessage) -> dict[str, Any] | None:
    """Decode a message's JSON payload, or return None if it isn't a JSON object."""
    text = message.payload()
    if text is None:
        logger.warning("GMCP %s: empty payload, dropped", message.package)
        return None
    try:
        data = json.loads(text)
    # ValueError covers JSONDecodeError and oversized integer literals
    except (ValueError, RecursionError) as e:
        logger.warning("GMCP %s: malformed JSON (%s), dropped: %r", message.package, e, text[:120])
        return None
    if not isinstance(data, dict):
        logger.warning("GMCP %s: payload is not an object, dropped: %r", message.package, text[:120])
        return None
    return data


class ProtocolMessageRouter:
    """Routes GMCP messages to the session tracker and channel events.

    A message is offered to every handler whose predicate matches. Bad
    payloads only cost that one message.
    """

    def __init__(self, sessions: SessionTracker, emit: Callable[[Event], None]) -> None:
        self._sessions = sessions
        self._emit = emit

    def dispatch(self, message: GmcpMessage) -> None:
        if message.is_char_name() or message.is_char_status_vars():
            self._on_identity(message)

        if message.is_char_vitals():
            self._on_vitals(message)

        if message.is_comm_channel_text():
            self._on_comm(message)

        if message.is_core_goodbye():
            # Goodbye payloads are not needed, don't decode them
            self._sessions.end_session()

    def _on_identity(self, message: GmcpMessage) -> None:
        data = decode_payload(message)
        if data is None:
            return
        name = data.get("name")
        if not isinstance(name, str) or not name:
            logger.debug("GMCP %s without character name", message.package)
            return
        self._sessions.update_identity(name)

    def _on_vitals(self, message: GmcpMessage) -> None:
        data = decode_payload(message)
        if data is None:
            return
        xp = data.get("xp")
        # bool is an int subclass, but never a valid XP value
        if isinstance(xp, bool) or not isinstance(xp, (int, float)):
            if "xp" in data:
                logger.warning("GMCP %s: non-numeric xp %r", message.package, xp)
            return
        try:
            value = float(xp)
        except OverflowError:
            value = math.inf
        if not math.isfinite(value):
            logger.warning("GMCP %s: xp out of range, dropped", message.package)
            return
        self._sessions.update_xp(value)

    def _on_comm(self, message: GmcpMessage) -> None:
        data = decode_payload(message)
        if data is None:
            return
        if "channel" not in data or "text" not in data:
            logger.debug("GMCP %s without channel/text", message.package)
            return
        channel = data["channel"]
        make_event = _CHANNEL_EVENTS.get(channel) if isinstance(channel, str) else None
        if make_event is None:
            return
        text = data["text"]
        # JSON null reads as empty text
        self._emit(make_event("" if text is None else str(text)))
