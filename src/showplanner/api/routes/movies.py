"""Movie catalogue endpoints for theatre owners."""

from fastapi import APIRouter, Depends, Query

from showplanner.api.deps import get_coordinator, http_error
from showplanner.errors import SchedulingError
from showplanner.scheduling.lifecycle import StatusFilter, classify_movie, filter_movies
from showplanner.schemas import AdvanceBookingUpdate, MovieWithStatus
from showplanner.services.schedule_coordinator import ScheduleCoordinator

router = APIRouter()


@router.get("/movies", response_model=list[MovieWithStatus])
async def get_movies(
    status: StatusFilter = Query("all", description="Filter: all, now_showing, coming_soon"),
    coordinator: ScheduleCoordinator = Depends(get_coordinator),
) -> list[MovieWithStatus]:
    """
    List the owner's movies with their lifecycle status.

    Args:
        status: Lifecycle filter
        coordinator: Scheduling coordinator for the current owner
    """
    catalog = await coordinator.load_catalog()
    today = coordinator.today()

    results = []
    for movie in filter_movies(catalog.movies, status, today):
        movie_status = classify_movie(movie, today)
        results.append(MovieWithStatus(movie=movie, status=movie_status, label=movie_status.label))
    return results


@router.patch("/movies/{movie_id}/advance-booking")
async def update_advance_booking(
    movie_id: str,
    body: AdvanceBookingUpdate,
    coordinator: ScheduleCoordinator = Depends(get_coordinator),
) -> dict[str, str | bool]:
    """Enable or disable pre-release ticket sales for a movie."""
    try:
        await coordinator.set_advance_booking(movie_id, body.enabled)
    except SchedulingError as e:
        raise http_error(e)
    return {"movie_id": movie_id, "advance_booking_enabled": body.enabled}
