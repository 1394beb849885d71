"""Time-of-day parsing and normalisation for showtime tokens."""

import re

from showplanner.errors import ShowtimeFormatError

MINUTES_PER_DAY = 24 * 60

# "10:00 AM", "9:05pm" (hour 1-12)
TIME_12H = re.compile(r"^(0?[1-9]|1[0-2]):([0-5]\d)\s*(AM|PM)$", re.IGNORECASE)
# "13:45", "7:05", "00:30" (hour 0-23)
TIME_24H = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)$")


def _clean(token: str) -> str:
    return re.sub(r"\s+", " ", str(token).strip()).upper()


def parse_time_to_minutes(token: str) -> int | None:
    """
    Convert a showtime token to minutes since midnight.

    Args:
        token: "H:MM AM|PM" (hour 1-12) or "H:MM"/"HH:MM" (hour 0-23)

    Returns:
        Minutes in 0..1439, or None if the token matches neither format
    """
    text = _clean(token)

    m = TIME_12H.match(text)
    if m:
        hour = int(m.group(1)) % 12
        if m.group(3).upper() == "PM":
            hour += 12
        return hour * 60 + int(m.group(2))

    m = TIME_24H.match(text)
    if m:
        return int(m.group(1)) * 60 + int(m.group(2))

    return None


def minutes_to_label(minutes: int) -> str:
    """Render minutes since midnight as a canonical 12-hour label ("1:05 PM")."""
    hour, minute = divmod(minutes % MINUTES_PER_DAY, 60)
    meridiem = "PM" if hour >= 12 else "AM"
    hour = hour % 12 or 12
    return f"{hour}:{minute:02d} {meridiem}"


def normalize_time_label(token: str) -> str:
    """
    Normalise a showtime token for equality comparison.

    "13:00", "1:00 PM" and "01:00pm" all become "1:00 PM". Tokens in neither
    format are returned upper-cased with whitespace collapsed, so they only
    ever equal themselves.
    """
    minutes = parse_time_to_minutes(token)
    if minutes is None:
        return _clean(token)
    return minutes_to_label(minutes)


def is_valid_showtime(token: str) -> bool:
    """Check a token against the 12-hour and 24-hour patterns."""
    text = _clean(token)
    return bool(TIME_12H.match(text) or TIME_24H.match(text))


def parse_and_validate_showtimes(raw: str) -> list[str]:
    """
    Split a comma-separated showtime list and validate every token.

    Args:
        raw: e.g. "10:00 AM, 1:30 PM, 19:00"

    Returns:
        Trimmed tokens in input order (empty list for blank input)

    Raises:
        ShowtimeFormatError: on the first token that is not a valid time;
            no tokens are returned in that case
    """
    parts = [part.strip() for part in (raw or "").split(",")]
    tokens = [part for part in parts if part]

    for token in tokens:
        if not is_valid_showtime(token):
            raise ShowtimeFormatError(
                f'Invalid time: "{token}". Use formats like 10:00 AM or 13:45.',
                token=token,
            )

    return tokens
