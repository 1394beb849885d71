"""Parsing of free-form movie runtimes into whole minutes."""

import re

_HOURS = r"(?:h|hr|hrs|hour|hours)"
_MINUTES = r"(?:m|min|mins|minute|minutes)"

_BARE_NUMBER = re.compile(r"^\d+$")
_HOURS_MINUTES = re.compile(rf"(\d+)\s*{_HOURS}\s*(\d+)\s*(?:{_MINUTES})?")
_HOURS_ONLY = re.compile(rf"(\d+)\s*{_HOURS}\b")
_MINUTES_ONLY = re.compile(rf"(\d+)\s*{_MINUTES}\b")
_CLOCK_LIKE = re.compile(r"^(\d{1,2}):(\d{2})$")
_ANY_NUMBER = re.compile(r"\d+")


def parse_duration(raw: str | int | float | None) -> int | None:
    """
    Parse a movie runtime into minutes.

    Accepted shapes (case-insensitive, whitespace-tolerant):
    - Numbers: 130, "130" (minutes)
    - Minutes: "130m", "130 min", "150 minutes"
    - Hours: "2h", "2hr", "2 hours"
    - Combined: "2h 10m", "2 hr 10"
    - Clock-like: "2:10" (2 hours 10 minutes, not a time of day)
    - Anything else containing a number: the first number is taken as minutes

    Args:
        raw: Runtime as stored on the movie record

    Returns:
        Positive number of minutes, or None if no runtime can be recovered
    """
    if raw is None or isinstance(raw, bool):
        return None

    if isinstance(raw, (int, float)):
        minutes = round(raw)
        return minutes if minutes > 0 else None

    text = str(raw).strip().lower()
    if not text:
        return None

    minutes = _parse_text(text)
    if minutes is None or minutes <= 0:
        return None
    return minutes


def _parse_text(text: str) -> int | None:
    if _BARE_NUMBER.match(text):
        return int(text)

    m = _HOURS_MINUTES.search(text)
    if m:
        return int(m.group(1)) * 60 + int(m.group(2))

    m = _HOURS_ONLY.search(text)
    if m:
        return int(m.group(1)) * 60

    m = _MINUTES_ONLY.search(text)
    if m:
        return int(m.group(1))

    m = _CLOCK_LIKE.match(text)
    if m:
        return int(m.group(1)) * 60 + int(m.group(2))

    # Fallback: first embedded number, assumed to be minutes
    m = _ANY_NUMBER.search(text)
    return int(m.group(0)) if m else None


def format_duration(minutes: int) -> str:
    """Render minutes as "2h 30m", "2h" or "45m"."""
    hours, mins = divmod(minutes, 60)
    if hours and mins:
        return f"{hours}h {mins}m"
    if hours:
        return f"{hours}h"
    return f"{mins}m"
