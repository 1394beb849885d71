"""Conflict detection for showtimes planned on a screen."""

import logging
from collections.abc import Sequence

from showplanner.errors import (
    CrossShowOverlapError,
    DayOverflowError,
    ExactDuplicateError,
    InternalOverlapError,
    ShowtimeFormatError,
)
from showplanner.scheduling.intervals import build_intervals, existing_show_intervals
from showplanner.scheduling.models import Interval
from showplanner.schemas.show import ShowAssignment
from showplanner.utils.clock import MINUTES_PER_DAY, normalize_time_label

logger = logging.getLogger(__name__)


def _check_bounds(intervals: Sequence[Interval], duration_minutes: int) -> None:
    for interval in intervals:
        if not interval.is_valid:
            raise ShowtimeFormatError(
                f"Invalid time detected: {interval.label}", token=interval.label
            )
        if interval.end_minute > MINUTES_PER_DAY:
            raise DayOverflowError(
                f"Showtime {interval.label} exceeds the day given duration ({duration_minutes}m)",
                token=interval.label,
                duration_minutes=duration_minutes,
            )


def detect_internal_overlaps(tokens: Sequence[str], duration_minutes: int) -> None:
    """
    Check a plan against itself.

    Raises, in this order:
        ShowtimeFormatError: a token does not parse
        DayOverflowError: a show would end after midnight
        InternalOverlapError: two adjacent showtimes collide
    """
    intervals = build_intervals(tokens, duration_minutes)
    _check_bounds(intervals, duration_minutes)

    for current, following in zip(intervals, intervals[1:]):
        if following.start_minute < current.end_minute:
            raise InternalOverlapError(
                f"Overlapping times within plan: {current.label} and {following.label}",
                first=current.label,
                second=following.label,
            )


def detect_overlap_against_existing(
    tokens: Sequence[str],
    duration_minutes: int,
    existing: Sequence[Interval],
    exclude_show_id: str | None = None,
) -> None:
    """
    Check planned showtimes against the intervals of other shows on the screen.

    Args:
        tokens: Planned showtime tokens
        duration_minutes: Runtime of the planned movie
        existing: Intervals from existing_show_intervals()
        exclude_show_id: Show being edited; its own intervals never conflict

    Raises:
        CrossShowOverlapError: naming the existing show's showtime
    """
    planned = build_intervals(tokens, duration_minutes)
    _check_bounds(planned, duration_minutes)

    for interval in planned:
        for other in existing:
            if exclude_show_id and other.source_show_id == str(exclude_show_id):
                continue
            if interval.overlaps(other):
                raise CrossShowOverlapError(
                    f"Overlaps with existing show at {other.label}",
                    token=interval.label,
                    existing_label=other.label,
                    existing_show_id=other.source_show_id,
                )


def detect_exact_duplicates(
    tokens: Sequence[str],
    existing_shows: Sequence[ShowAssignment],
    exclude_show_id: str | None = None,
) -> None:
    """
    Check for planned showtimes at the identical clock time as another show.

    Comparison uses canonical labels, so "19:00" clashes with "7:00 PM"
    whatever the runtimes involved.

    Raises:
        ExactDuplicateError: naming the existing showtime as stored
    """
    planned = {normalize_time_label(token) for token in tokens}

    for show in existing_shows:
        if exclude_show_id and show.id == str(exclude_show_id):
            continue
        for stored in show.showtimes:
            if normalize_time_label(stored) in planned:
                raise ExactDuplicateError(
                    f"Exact duplicate with existing showtime: {stored}",
                    existing_label=stored,
                )


class ConflictDetector:
    """
    Runs every conflict check for one screen.

    Checks run in a fixed order and stop at the first violation:
    1. Internal overlap (format, day overflow, overlap within the plan)
    2. Overlap with other shows on the screen
    3. Exact duplicate clock time with other shows on the screen
    """

    def __init__(
        self,
        existing_shows: Sequence[ShowAssignment],
        exclude_show_id: str | None = None,
    ) -> None:
        """
        Initialize detector.

        Args:
            existing_shows: Freshly fetched shows on the target screen
            exclude_show_id: Show being edited (None when creating)
        """
        self.existing_shows = list(existing_shows)
        self.exclude_show_id = str(exclude_show_id) if exclude_show_id else None

    def check(self, tokens: Sequence[str], duration_minutes: int) -> None:
        """Raise the first conflict found; return None when the plan is clean."""
        detect_internal_overlaps(tokens, duration_minutes)

        existing = existing_show_intervals(self.existing_shows, self.exclude_show_id)
        logger.debug(
            f"Checking {len(tokens)} showtimes against {len(existing)} existing intervals"
        )
        detect_overlap_against_existing(tokens, duration_minutes, existing, self.exclude_show_id)

        detect_exact_duplicates(tokens, self.existing_shows, self.exclude_show_id)
