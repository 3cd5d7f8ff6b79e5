"""Clock-time conversions between ``HH:MM`` strings and minutes since midnight."""

from __future__ import annotations

import re

from ...errors import TimeFormatError

MINUTES_PER_DAY = 24 * 60

_CLOCK_PATTERN = re.compile(r"^([01]?[0-9]|2[0-3]):([0-5][0-9])$")


def is_valid_time(value: object) -> bool:
    return isinstance(value, str) and _CLOCK_PATTERN.match(value) is not None


def time_to_minutes(value: str) -> int:
    """Convert ``HH:MM`` to minutes since midnight (0-1439)."""
    match = _CLOCK_PATTERN.match(value) if isinstance(value, str) else None
    if match is None:
        raise TimeFormatError(f"Time must be in HH:MM format, got {value!r}")
    return int(match.group(1)) * 60 + int(match.group(2))


def minutes_to_time(minutes: int) -> str:
    if not 0 <= minutes < MINUTES_PER_DAY:
        raise ValueError(f"Minute offset must be within 0-{MINUTES_PER_DAY - 1}, got {minutes}")
    hours, mins = divmod(minutes, 60)
    return f"{hours:02d}:{mins:02d}"
