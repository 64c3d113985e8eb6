"""Text helpers shared by the line classifier and the journal."""

from __future__ import annotations


def strip_line_ending(line: str) -> str:
    """Drop trailing CR/LF left over from the telnet stream, keep everything else."""
    return line.rstrip("\r\n")


def starts_with(line: str | None, prefix: str) -> bool:
    """Anchored match that treats a missing window slot as no match."""
    return line is not None and line.startswith(prefix)


def find_any(line: str | None, phrases: tuple[str, ...]) -> int:
    """Return offset of the first phrase found in ``line``, or -1.

    Phrases are tried in order, so the first listed phrase wins even if a
    later one occurs earlier in the line.
    """
    if line is None:
        return -1
    for phrase in phrases:
        offset = line.find(phrase)
        if offset >= 0:
            return offset
    return -1


def format_xp(xp: float) -> str:
    """Format an XP amount for display: 950, 1.5k, 42k."""
    if abs(xp) < 1000:
        return _format_number(xp)
    if abs(xp) < 20 * 1000:
        return f"{xp / 1000:.1f}k"
    return f"{xp / 1000:.0f}k"


def _format_number(value: float) -> str:
    # 120.0 -> "120", 12.5 -> "12.5"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"
