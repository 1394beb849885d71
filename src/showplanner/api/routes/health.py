"""Health check endpoint."""

from fastapi import APIRouter

from showplanner.config import settings

router = APIRouter()


@router.get("/health", tags=["health"])
async def health_check() -> dict[str, str | bool]:
    """
    Report that the scheduling API is up.

    Does not call the booking API; `booking_api_configured` only says
    whether a token is set.
    """
    return {"status": "ok", "booking_api_configured": bool(settings.booking_api_token)}
