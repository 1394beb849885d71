"""Building minute intervals from showtime tokens."""

import logging
from collections.abc import Iterable, Sequence

from showplanner.scheduling.models import Interval
from showplanner.schemas.show import ShowAssignment
from showplanner.utils.clock import parse_time_to_minutes
from showplanner.utils.duration import parse_duration

logger = logging.getLogger(__name__)


def _sort_key(interval: Interval) -> tuple[int, int]:
    # Unparseable tokens sort first so they are reported before anything else
    if interval.start_minute is None:
        return (0, 0)
    return (1, interval.start_minute)


def build_intervals(
    tokens: Sequence[str],
    duration_minutes: int,
    source_show_id: str | None = None,
) -> list[Interval]:
    """
    Build intervals for a list of showtime tokens.

    Args:
        tokens: Showtime tokens ("10:00 AM", "13:45", ...)
        duration_minutes: Runtime applied to every token
        source_show_id: Show the tokens belong to (None while planning)

    Returns:
        Intervals sorted ascending by start minute. Never raises; malformed
        tokens come back with start_minute=None.
    """
    intervals = []
    for token in tokens:
        start = parse_time_to_minutes(token)
        end = start + duration_minutes if start is not None else None
        intervals.append(Interval(start, end, str(token), source_show_id))
    return sorted(intervals, key=_sort_key)


def existing_show_intervals(
    shows: Iterable[ShowAssignment],
    exclude_show_id: str | None = None,
) -> list[Interval]:
    """
    Collect intervals for every show already scheduled on a screen.

    Shows without showtimes or without a resolvable runtime are skipped, as
    are stored tokens that no longer parse; they are left out of the overlap
    check rather than failing it.

    Args:
        shows: Shows currently on the screen
        exclude_show_id: Show being edited, left out entirely
    """
    result: list[Interval] = []
    for show in shows:
        if exclude_show_id and show.id and show.id == str(exclude_show_id):
            continue
        if not show.showtimes:
            continue

        duration = parse_duration(show.raw_duration)
        if duration is None:
            logger.debug(f"Skipping show {show.id} ({show.title}): runtime not available")
            continue

        for interval in build_intervals(show.showtimes, duration, source_show_id=show.id):
            if not interval.is_valid:
                logger.debug(f"Skipping unparseable stored showtime {interval.label!r} on show {show.id}")
                continue
            result.append(interval)
    return result
