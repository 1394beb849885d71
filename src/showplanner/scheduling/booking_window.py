"""Advance-booking window policy."""

from datetime import date, timedelta

from showplanner.config import settings
from showplanner.errors import BookingWindowError
from showplanner.schemas.movie import Movie


def clamp_max_advance_days(value: int | str | None) -> int:
    """
    Bound an owner-supplied advance window to [0, max_advance_days_limit].

    Missing or non-numeric values fall back to the configured default.
    """
    try:
        days = int(value)
    except (TypeError, ValueError):
        days = settings.default_max_advance_days
    return min(settings.max_advance_days_limit, max(0, days))


def booking_window(max_advance_days: int, today: date | None = None) -> tuple[date, date]:
    """Inclusive (first, last) dates of the ordinary booking window."""
    today = today or date.today()
    return today, today + timedelta(days=clamp_max_advance_days(max_advance_days))


def is_advance_booking_date(booking_date: date, movie: Movie | None) -> bool:
    """True when the date is a pre-release sale the movie allows."""
    if movie is None or not movie.advance_booking_enabled or movie.release_date is None:
        return False
    return booking_date < movie.release_date


def validate_booking_date(
    booking_date: date,
    max_advance_days: int,
    movie: Movie | None = None,
    today: date | None = None,
) -> None:
    """
    Check a booking date against the advance window.

    Dates outside [today, today + max_advance_days] are still accepted for a
    movie with advance booking enabled when the date precedes its release.

    Raises:
        BookingWindowError: if the date is outside the window and not an
            advance sale
    """
    first, last = booking_window(max_advance_days, today)
    if first <= booking_date <= last:
        return
    if is_advance_booking_date(booking_date, movie):
        return

    raise BookingWindowError(
        f"Booking date {booking_date.isoformat()} is outside the booking window "
        f"({first.isoformat()} to {last.isoformat()})"
    )
