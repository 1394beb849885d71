"""Screen show scheduling endpoints.

Thin adapter over ScheduleCoordinator: request bodies become ScheduleRequest
values, scheduling errors become HTTP errors carrying the message to show
to the theatre owner.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException

from showplanner.api.deps import get_coordinator, http_error
from showplanner.errors import SchedulingError
from showplanner.scheduling.models import ShowPlan
from showplanner.schemas import ScheduleRequest, ScheduleResponse, ShowAssignment, ValidationResponse
from showplanner.services.schedule_coordinator import ScheduleCoordinator, ScheduleResult

logger = logging.getLogger(__name__)
router = APIRouter()


def _response(status: str, result: ScheduleResult) -> ScheduleResponse:
    plan = result.plan
    return ScheduleResponse(
        status=status,
        screen_id=plan.screen_id,
        movie_id=plan.movie_id,
        showtimes=list(plan.tokens),
        booking_date=plan.booking_date,
        shows=result.shows,
    )


@router.get("/screens/{screen_id}/shows", response_model=list[ShowAssignment])
async def list_screen_shows(
    screen_id: str,
    coordinator: ScheduleCoordinator = Depends(get_coordinator),
) -> list[ShowAssignment]:
    """List every show currently assigned to a screen."""
    try:
        return await coordinator.list_shows(screen_id)
    except SchedulingError as e:
        raise http_error(e)


@router.post("/screens/{screen_id}/shows/validate", response_model=ValidationResponse)
async def validate_screen_shows(
    screen_id: str,
    request: ScheduleRequest,
    coordinator: ScheduleCoordinator = Depends(get_coordinator),
) -> ValidationResponse:
    """
    Dry-run every scheduling check without saving.

    Always returns 200; `valid` and `error` carry the outcome.
    """
    request = request.model_copy(update={"screen_id": screen_id})
    try:
        plan: ShowPlan = await coordinator.validate(request)
    except SchedulingError as e:
        return ValidationResponse(valid=False, error=e.message, kind=e.kind)

    return ValidationResponse(
        valid=True,
        showtimes=list(plan.tokens),
        duration_minutes=plan.duration_minutes,
    )


@router.post("/screens/{screen_id}/shows", response_model=ScheduleResponse, status_code=201)
async def create_screen_shows(
    screen_id: str,
    request: ScheduleRequest,
    coordinator: ScheduleCoordinator = Depends(get_coordinator),
) -> ScheduleResponse:
    """Assign a movie's showtimes to a screen after validating them."""
    request = request.model_copy(update={"screen_id": screen_id})
    try:
        result = await coordinator.create(request)
    except SchedulingError as e:
        logger.info(f"Rejected showtimes for screen {screen_id}: {e.message}")
        raise http_error(e)
    return _response("created", result)


@router.put("/screens/{screen_id}/shows/{show_id}", response_model=ScheduleResponse)
async def update_screen_show(
    screen_id: str,
    show_id: str,
    request: ScheduleRequest,
    coordinator: ScheduleCoordinator = Depends(get_coordinator),
) -> ScheduleResponse:
    """
    Edit an existing show.

    `screen_id` in the body moves the show to another screen; `movie_id`
    swaps the movie. Omitted fields keep the show's current values.
    """
    try:
        shows = await coordinator.list_shows(screen_id)
    except SchedulingError as e:
        raise http_error(e)

    show = next((s for s in shows if s.id == show_id), None)
    if show is None:
        raise HTTPException(status_code=404, detail=f"Show {show_id} not found on screen {screen_id}")
    if show.screen_id is None:
        show = show.model_copy(update={"screen_id": screen_id})

    try:
        result = await coordinator.edit(show, request)
    except SchedulingError as e:
        logger.info(f"Rejected edit of show {show_id}: {e.message}")
        raise http_error(e)
    return _response("updated", result)


@router.delete("/screens/{screen_id}/shows/{show_id}", response_model=list[ShowAssignment])
async def delete_screen_show(
    screen_id: str,
    show_id: str,
    coordinator: ScheduleCoordinator = Depends(get_coordinator),
) -> list[ShowAssignment]:
    """Delete a show; returns the screen's remaining shows."""
    try:
        return await coordinator.delete(screen_id, show_id)
    except SchedulingError as e:
        raise http_error(e)
