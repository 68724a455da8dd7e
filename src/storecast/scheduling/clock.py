"""
Wall-clock math for the broadcast day.

Pure conversions between ``"HH:MM:SS"`` strings and integer seconds since
local midnight. No dates, no time zones.
"""

from __future__ import annotations

from storecast.infra.exceptions import InvalidTimeFormat, InvalidWindow

SECONDS_PER_DAY = 24 * 3600  # 86_400


def to_seconds(text: str) -> int:
    """Parse ``HH:MM:SS`` (or ``HH:MM``) into seconds since midnight.

    Raises:
        InvalidTimeFormat: Wrong number of parts, non-numeric parts, or a
            component out of range (HH > 23, MM or SS > 59).
    """
    if not isinstance(text, str):
        raise InvalidTimeFormat(f"Invalid time format: {text!r} (expected HH:MM[:SS])")
    parts = text.strip().split(":")
    if len(parts) not in (2, 3):
        raise InvalidTimeFormat(f"Invalid time format: {text!r} (expected HH:MM[:SS])")
    if not all(p.isascii() and p.isdigit() for p in parts):
        raise InvalidTimeFormat(f"Invalid time format: {text!r} (non-numeric component)")

    hours, minutes = int(parts[0]), int(parts[1])
    seconds = int(parts[2]) if len(parts) == 3 else 0
    if hours > 23 or minutes > 59 or seconds > 59:
        raise InvalidTimeFormat(f"Invalid time format: {text!r} (component out of range)")
    return hours * 3600 + minutes * 60 + seconds


def to_clock_string(seconds: int) -> str:
    """Format seconds since midnight as zero-padded ``HH:MM:SS``.

    ``SECONDS_PER_DAY`` itself renders as ``24:00:00`` so an entry ending
    exactly at midnight keeps a readable end boundary. Anything later is
    rejected rather than wrapped.
    """
    if seconds < 0 or seconds > SECONDS_PER_DAY:
        raise InvalidTimeFormat(
            f"Offset {seconds}s is outside the broadcast day [0, {SECONDS_PER_DAY}]"
        )
    h, r = divmod(seconds, 3600)
    m, s = divmod(r, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def parse_window(text: str) -> tuple[int, int]:
    """Parse a ``"HH:MM-HH:MM"`` time slot into ``(start_seconds, end_seconds)``."""
    bounds = text.split("-")
    if len(bounds) != 2:
        raise InvalidTimeFormat(f"Invalid time slot: {text!r} (expected HH:MM-HH:MM)")
    start, end = to_seconds(bounds[0]), to_seconds(bounds[1])
    if end <= start:
        raise InvalidWindow(f"Time slot {text!r} must end after it starts")
    return start, end


def format_range(start_seconds: int, end_seconds: int) -> str:
    """Render a playlist key: ``"HH:MM:SS-HH:MM:SS"``."""
    return f"{to_clock_string(start_seconds)}-{to_clock_string(end_seconds)}"


def format_slot(start_seconds: int, end_seconds: int) -> str:
    """Render a window back into the catalog's ``"HH:MM-HH:MM"`` form.

    Seconds are kept only when a bound is not on a whole minute.
    """
    def _short(value: int) -> str:
        text = to_clock_string(value)
        return text[:5] if text.endswith(":00") else text

    return f"{_short(start_seconds)}-{_short(end_seconds)}"
