"""Exceptions raised by the scheduling engine and coordinator."""


class SchedulingError(Exception):
    """
    Base class for every scheduling failure.

    Each error carries a human-readable message naming the offending
    token(s), suitable for showing to a theatre owner as-is.
    """

    kind = "scheduling_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class MissingSelectionError(SchedulingError):
    """Movie or screen was not selected."""

    kind = "missing_selection"


class ShowtimeFormatError(SchedulingError):
    """A showtime token is not a valid 12-hour or 24-hour time."""

    kind = "format_error"

    def __init__(self, message: str, token: str) -> None:
        super().__init__(message)
        self.token = token


class DurationUnavailableError(SchedulingError):
    """The movie has no resolvable runtime."""

    kind = "duration_unavailable"


class DayOverflowError(SchedulingError):
    """A show would run past midnight."""

    kind = "day_overflow"

    def __init__(self, message: str, token: str, duration_minutes: int) -> None:
        super().__init__(message)
        self.token = token
        self.duration_minutes = duration_minutes


class InternalOverlapError(SchedulingError):
    """Two showtimes within the same plan collide."""

    kind = "internal_overlap"

    def __init__(self, message: str, first: str, second: str) -> None:
        super().__init__(message)
        self.first = first
        self.second = second


class CrossShowOverlapError(SchedulingError):
    """A planned showtime collides with a different show on the screen."""

    kind = "cross_show_overlap"

    def __init__(self, message: str, token: str, existing_label: str, existing_show_id: str | None) -> None:
        super().__init__(message)
        self.token = token
        self.existing_label = existing_label
        self.existing_show_id = existing_show_id


class ExactDuplicateError(SchedulingError):
    """The identical clock time is already scheduled on the screen."""

    kind = "exact_duplicate"

    def __init__(self, message: str, existing_label: str) -> None:
        super().__init__(message)
        self.existing_label = existing_label


class BookingWindowError(SchedulingError):
    """Booking date is outside the advance window and not an advance sale."""

    kind = "window_error"


class PersistenceError(SchedulingError):
    """The remote booking API rejected or failed a save/delete."""

    kind = "persistence_error"


class PartialMoveError(PersistenceError):
    """
    The old record of a moved show was deleted but the new one was not saved.

    The show is no longer persisted anywhere; the caller has to re-save it.
    """

    kind = "partial_move"

    def __init__(self, message: str, deleted_show_id: str) -> None:
        super().__init__(message)
        self.deleted_show_id = deleted_show_id


class OwnerResolutionError(SchedulingError):
    """No theatre owner id could be resolved."""

    kind = "owner_unresolved"
