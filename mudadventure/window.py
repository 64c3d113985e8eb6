"""Sliding window over the most recent MUD text lines."""

from __future__ import annotations

from collections import deque
from collections.abc import Iterator

DEFAULT_WINDOW_SIZE = 5


class LineWindow:
    """Fixed-capacity look-back buffer, index 0 is the newest line.

    Pushing past capacity drops the oldest line. Slots that were never
    filled read back as None.
    """

    def __init__(self, capacity: int = DEFAULT_WINDOW_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"Window capacity must be positive, got {capacity}")
        self._lines: deque[str] = deque(maxlen=capacity)

    @property
    def capacity(self) -> int:
        return self._lines.maxlen or 0

    def push(self, line: str) -> None:
        self._lines.appendleft(line)

    def get(self, age: int) -> str | None:
        """Return the line pushed ``age`` pushes ago, or None if there is none."""
        if 0 <= age < len(self._lines):
            return self._lines[age]
        return None

    def contains(self, phrase: str) -> bool:
        """Check whether any stored line contains ``phrase``."""
        return any(phrase in line for line in self._lines)

    def clear(self) -> None:
        self._lines.clear()

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)
