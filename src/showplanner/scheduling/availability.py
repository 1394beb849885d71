"""Customer-facing availability of individual showtimes."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime, timedelta

from showplanner.config import settings
from showplanner.scheduling.booking_window import booking_window
from showplanner.utils.clock import parse_time_to_minutes

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShowtimeAvailability:
    """Whether a showtime can still be booked."""

    is_valid: bool
    is_past: bool
    minutes_until_show: int = 0
    reason: str | None = None


@dataclass(frozen=True)
class ShowGroup:
    """Showtimes of one movie on one date, as listed to customers."""

    booking_date: date
    showtimes: tuple[str, ...]
    theatre: str | None = None
    theatre_id: str | None = None
    available_seats: int | None = None
    running_dates: tuple[date, ...] = ()


def validate_showtime(
    booking_date: date,
    showtime: str,
    buffer_minutes: int | None = None,
    now: datetime | None = None,
) -> ShowtimeAvailability:
    """
    Check whether a showtime is still open for booking.

    Bookings close `buffer_minutes` before the show starts (30 by default).
    Shows on future dates are always open.

    Args:
        booking_date: Date of the show
        showtime: Time token ("2:30 PM" or "14:30")
        buffer_minutes: Minutes before start when booking closes
        now: Current local time (defaults to datetime.now())
    """
    if buffer_minutes is None:
        buffer_minutes = settings.showtime_buffer_minutes
    now = now or datetime.now()
    today = now.date()

    if booking_date < today:
        return ShowtimeAvailability(is_valid=False, is_past=True, reason="Show date has passed")

    if booking_date > today:
        return ShowtimeAvailability(is_valid=True, is_past=False)

    start = parse_time_to_minutes(showtime)
    if start is None:
        return ShowtimeAvailability(is_valid=False, is_past=True, reason="Invalid showtime format")

    show_time = datetime.combine(booking_date, datetime.min.time()) + timedelta(minutes=start)
    minutes_until = int((show_time - now).total_seconds() // 60)

    if minutes_until <= 0:
        return ShowtimeAvailability(
            is_valid=False, is_past=True, reason="Showtime has already started"
        )
    if minutes_until <= buffer_minutes:
        return ShowtimeAvailability(
            is_valid=False,
            is_past=False,
            minutes_until_show=minutes_until,
            reason=f"Booking closes {buffer_minutes} minutes before showtime",
        )
    return ShowtimeAvailability(is_valid=True, is_past=False, minutes_until_show=minutes_until)


def filter_valid_show_groups(
    groups: Iterable[ShowGroup],
    buffer_minutes: int | None = None,
    now: datetime | None = None,
) -> list[ShowGroup]:
    """Drop past dates and closed showtimes; drop groups left with no showtimes."""
    now = now or datetime.now()
    result = []
    for group in groups:
        if group.booking_date < now.date():
            continue
        open_times = tuple(
            t
            for t in group.showtimes
            if validate_showtime(group.booking_date, t, buffer_minutes, now).is_valid
        )
        if open_times:
            result.append(replace(group, showtimes=open_times))
    return result


def has_valid_running_dates(running_dates: Iterable[date], today: date | None = None) -> bool:
    """True if any running date is today or later."""
    today = today or date.today()
    return any(d >= today for d in running_dates)


def format_time_until_show(minutes_until_show: int) -> str:
    if minutes_until_show <= 0:
        return "Show started"
    hours, minutes = divmod(minutes_until_show, 60)
    if hours > 0:
        return f"{hours}h {minutes}m until show"
    return f"{minutes}m until show"


def is_within_booking_window(
    booking_date: date,
    showtime: str,
    max_advance_days: int | None = None,
    buffer_minutes: int | None = None,
    now: datetime | None = None,
) -> bool:
    """Open for booking and no later than the last day of the advance window."""
    now = now or datetime.now()
    if not validate_showtime(booking_date, showtime, buffer_minutes, now).is_valid:
        return False

    if max_advance_days is None:
        max_advance_days = settings.default_max_advance_days
    _, last = booking_window(max_advance_days, now.date())
    if booking_date > last:
        logger.debug(f"Showtime {showtime} on {booking_date} is beyond the booking window")
        return False
    return True
