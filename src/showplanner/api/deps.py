"""FastAPI dependencies shared by the routers."""

from fastapi import HTTPException

from showplanner.errors import (
    OwnerResolutionError,
    PartialMoveError,
    PersistenceError,
    SchedulingError,
)
from showplanner.services.booking_api import BookingApiClient
from showplanner.services.owner_context import resolve_owner_context_from_settings
from showplanner.services.schedule_coordinator import ScheduleCoordinator


async def get_coordinator() -> ScheduleCoordinator:
    """
    Dependency providing a coordinator for the configured theatre owner.

    Usage:
        @router.get("/endpoint")
        async def endpoint(coordinator: ScheduleCoordinator = Depends(get_coordinator)):
            ...
    """
    client = BookingApiClient()
    try:
        owner = await resolve_owner_context_from_settings(client)
    except OwnerResolutionError as e:
        raise HTTPException(status_code=401, detail={"message": e.message, "kind": e.kind})
    return ScheduleCoordinator(client, owner)


def http_error(error: SchedulingError) -> HTTPException:
    """Map a scheduling error to the HTTP status the UI expects."""
    if isinstance(error, PartialMoveError):
        status_code = 409
    elif isinstance(error, PersistenceError):
        status_code = 502
    elif isinstance(error, OwnerResolutionError):
        status_code = 401
    else:
        status_code = 422
    return HTTPException(status_code=status_code, detail={"message": error.message, "kind": error.kind})
