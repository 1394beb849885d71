"""Value types passed through the scheduling checks."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Interval:
    """
    Half-open [start, end) span in minutes since midnight.

    Built from one showtime token and a runtime. A token that could not be
    parsed keeps start_minute/end_minute as None so the conflict checks can
    report it by label instead of silently dropping it.
    """

    start_minute: int | None  # None for an unparseable token
    end_minute: int | None
    label: str  # Token as entered/stored, e.g. "10:00 AM"
    source_show_id: str | None = None  # None while the show is still being planned

    @property
    def is_valid(self) -> bool:
        return self.start_minute is not None and self.end_minute is not None

    def overlaps(self, other: "Interval") -> bool:
        """Half-open overlap test; touching intervals do not overlap."""
        if not (self.is_valid and other.is_valid):
            return False
        return self.start_minute < other.end_minute and other.start_minute < self.end_minute


@dataclass(frozen=True)
class ShowPlan:
    """
    Immutable plan under construction.

    Produced once from a scheduling request and handed through
    parse -> build -> detect without being mutated.
    """

    movie_id: str
    screen_id: str
    tokens: tuple[str, ...]
    booking_date: date
    max_advance_days: int
    duration_minutes: int
