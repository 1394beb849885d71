"""Shared test fixtures."""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from fastapi import FastAPI

from showplanner.api.routes import health, movies, schedules
from showplanner.schemas import ApiResponse, Movie, Screen, ShowAssignment
from showplanner.services.booking_api import BookingApiClient
from showplanner.services.owner_context import OwnerContext
from showplanner.services.schedule_coordinator import ScheduleCoordinator

TODAY = date(2026, 3, 10)


def make_movie(
    id: str = "movie-1",
    title: str = "Dune: Part Two",
    duration: str | int | None = "2h 30m",
    release_date: date | None = date(2026, 3, 1),
    first_show_date: date | None = None,
    advance_booking_enabled: bool = False,
) -> Movie:
    return Movie(
        id=id,
        title=title,
        duration=duration,
        release_date=release_date,
        first_show_date=first_show_date,
        advance_booking_enabled=advance_booking_enabled,
    )


def make_show(
    id: str = "show-1",
    screen_id: str = "1",
    movie: Movie | None = None,
    showtimes: list[str] | None = None,
    booking_date: date | None = TODAY,
) -> ShowAssignment:
    movie = movie or make_movie(id="movie-existing", title="Existing", duration=120)
    return ShowAssignment(
        id=id,
        screen_id=screen_id,
        movie_id=movie.id,
        movie=movie,
        showtimes=showtimes if showtimes is not None else ["10:30 AM"],
        booking_date=booking_date,
    )


def make_client(
    movies: list[Movie] | None = None,
    screens: list[Screen] | None = None,
    shows: list[ShowAssignment] | None = None,
) -> AsyncMock:
    """Booking API client mock where every call succeeds."""
    client = AsyncMock(spec=BookingApiClient)
    client.get_theatre_owner_movies = AsyncMock(
        return_value=ApiResponse(success=True, data=movies if movies is not None else [make_movie()])
    )
    client.get_owner_screens = AsyncMock(
        return_value=ApiResponse(
            success=True, data=screens if screens is not None else [Screen(screen_number=1)]
        )
    )
    client.get_screen_shows = AsyncMock(
        return_value=ApiResponse(success=True, data=shows if shows is not None else [])
    )
    client.save_screen_shows = AsyncMock(return_value=ApiResponse(success=True, data={}))
    client.delete_screen_show = AsyncMock(return_value=ApiResponse(success=True))
    client.update_movie_advance_booking = AsyncMock(return_value=ApiResponse(success=True))
    client.cleanup_past_screen_shows = AsyncMock(
        return_value=ApiResponse(success=True, data={"deletedCount": 0})
    )
    return client


def make_coordinator(client: AsyncMock) -> ScheduleCoordinator:
    return ScheduleCoordinator(
        client,
        OwnerContext(owner_id="owner-1", source="profile"),
        today=lambda: TODAY,
    )


@pytest.fixture
def test_app() -> FastAPI:
    """Minimal FastAPI app without the APScheduler lifespan, for API tests."""
    app = FastAPI()
    app.include_router(health.router)
    app.include_router(movies.router, prefix="/api")
    app.include_router(schedules.router, prefix="/api")
    return app
