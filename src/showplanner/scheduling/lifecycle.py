"""Movie lifecycle classification ("Now Showing" / "Coming Soon")."""

from collections.abc import Iterable
from datetime import date
from typing import Literal

from showplanner.schemas.movie import Movie, MovieStatus

StatusFilter = Literal["all", "now_showing", "coming_soon"]


def classify_movie(movie: Movie, today: date | None = None) -> MovieStatus:
    """
    Derive a movie's display status.

    Rules:
    - Released on or before today: now showing, running for at least one
      day counted from the first show date (or the release date)
    - Unreleased with advance booking enabled: coming soon, advance booking
    - No release date: coming soon

    Args:
        movie: Movie record
        today: Reference date (defaults to the local date)
    """
    today = today or date.today()
    release = movie.release_date

    if release is not None and release <= today:
        anchor = movie.first_show_date or release
        return MovieStatus(status="now_showing", runtime_days=max(1, (today - anchor).days))

    is_advance = release is not None and movie.advance_booking_enabled
    return MovieStatus(status="coming_soon", runtime_days=0, is_advance_booking=is_advance)


def filter_movies(
    movies: Iterable[Movie],
    status_filter: StatusFilter = "all",
    today: date | None = None,
) -> list[Movie]:
    """Keep movies whose lifecycle status matches the filter."""
    if status_filter == "all":
        return list(movies)
    return [m for m in movies if classify_movie(m, today).status == status_filter]


def badge_for_show(movie: Movie, booking_date: date | None, today: date | None = None) -> str | None:
    """
    Badge shown next to an existing show in the owner's listing.

    Returns "Now Showing", "Advance Booking", "Coming Soon" or None.
    """
    status = classify_movie(movie, today)
    if status.status == "now_showing":
        return "Now Showing"

    pre_release = (
        booking_date is not None
        and movie.release_date is not None
        and booking_date < movie.release_date
    )
    if not pre_release:
        return "Coming Soon"
    if status.is_advance_booking:
        return "Advance Booking"
    return None
