"""Pydantic schemas for movie data."""

from datetime import date
from typing import Literal

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def coerce_date(value: object) -> object:
    """Accept full ISO timestamps ("2025-01-15T00:00:00.000Z") where a date is expected."""
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        return value[:10]
    return value


class Movie(BaseModel):
    """
    Movie as returned by the booking API.

    Read-only to the scheduling engine; only runtime, release dates and the
    advance-booking flag drive any decision.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(validation_alias=AliasChoices("_id", "id"))
    title: str = ""
    duration: str | int | float | None = None
    runtime: str | int | float | None = None
    release_date: date | None = Field(
        default=None, validation_alias=AliasChoices("releaseDate", "release_date")
    )
    first_show_date: date | None = Field(
        default=None, validation_alias=AliasChoices("firstShowDate", "first_show_date")
    )
    advance_booking_enabled: bool = Field(
        default=False,
        validation_alias=AliasChoices("advanceBookingEnabled", "advance_booking_enabled"),
    )

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: object) -> object:
        return str(value) if value is not None else value

    @field_validator("release_date", "first_show_date", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> object:
        return coerce_date(value)

    @property
    def raw_duration(self) -> str | int | float | None:
        """Runtime as stored, preferring `duration` over `runtime`."""
        if self.duration not in (None, ""):
            return self.duration
        return self.runtime


class MovieStatus(BaseModel):
    """Lifecycle status of a movie on a given day."""

    status: Literal["now_showing", "coming_soon"]
    runtime_days: int = 0
    is_advance_booking: bool = False

    @property
    def label(self) -> str:
        if self.status == "now_showing":
            return "Now Showing"
        if self.is_advance_booking:
            return "Coming Soon + Advance Booking"
        return "Coming Soon"


class MovieWithStatus(BaseModel):
    """Movie response with its lifecycle status for catalogue listings."""

    movie: Movie
    status: MovieStatus
    label: str


class AdvanceBookingUpdate(BaseModel):
    """Request body for toggling advance booking on a movie."""

    enabled: bool
