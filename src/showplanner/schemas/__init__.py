"""Pydantic schemas for booking API data and HTTP requests and responses."""

from showplanner.schemas.movie import AdvanceBookingUpdate, Movie, MovieStatus, MovieWithStatus
from showplanner.schemas.owner import ApiResponse, OwnerCatalog
from showplanner.schemas.screen import Screen
from showplanner.schemas.show import (
    ScheduleRequest,
    ScheduleResponse,
    ShowAssignment,
    ValidationResponse,
)

__all__ = [
    "AdvanceBookingUpdate",
    "ApiResponse",
    "Movie",
    "MovieStatus",
    "MovieWithStatus",
    "OwnerCatalog",
    "Screen",
    "ScheduleRequest",
    "ScheduleResponse",
    "ShowAssignment",
    "ValidationResponse",
]
