"""Pydantic schemas for show assignments and scheduling requests."""

import logging
from datetime import date
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from showplanner.schemas.movie import Movie, coerce_date

logger = logging.getLogger(__name__)


class ShowAssignment(BaseModel):
    """
    One movie's showtimes on one screen for one booking date.

    The booking API returns `movieId` either as a plain id or as an embedded
    movie document; both are accepted and the embedded movie, when present,
    supplies the runtime used for conflict checks.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str | None = Field(default=None, validation_alias=AliasChoices("_id", "id"))
    screen_id: str | None = Field(
        default=None, validation_alias=AliasChoices("screenId", "screen_id")
    )
    movie_id: str | None = Field(
        default=None, validation_alias=AliasChoices("movieId", "movie_id")
    )
    movie: Movie | None = None
    showtimes: list[str] = Field(default_factory=list)
    booking_date: date | None = Field(
        default=None, validation_alias=AliasChoices("bookingDate", "booking_date")
    )
    max_advance_days: int | None = Field(
        default=None, validation_alias=AliasChoices("maxDays", "maxAdvanceDays", "max_advance_days")
    )

    # Some records carry the runtime on the show itself
    duration: str | int | float | None = None
    runtime: str | int | float | None = None

    @model_validator(mode="before")
    @classmethod
    def _split_embedded_movie(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        movie_ref = data.get("movieId", data.get("movie_id"))
        if isinstance(movie_ref, dict):
            data = dict(data)
            data.pop("movie_id", None)
            data["movieId"] = movie_ref.get("_id") or movie_ref.get("id")
            try:
                data["movie"] = Movie.model_validate(movie_ref)
            except ValidationError as e:
                # Keep the show and its showtimes; only the movie document is unusable
                logger.warning(f"Ignoring malformed embedded movie on show {data.get('_id', data.get('id'))}: {e}")
                data["movie"] = None
                for key in ("duration", "runtime"):
                    if data.get(key) in (None, ""):
                        data[key] = movie_ref.get(key)
        return data

    @field_validator("id", "screen_id", "movie_id", mode="before")
    @classmethod
    def _coerce_ids(cls, value: object) -> object:
        return str(value) if value is not None else value

    @field_validator("showtimes", mode="before")
    @classmethod
    def _coerce_showtimes(cls, value: object) -> object:
        if value is None:
            return []
        if isinstance(value, list):
            return [str(t) for t in value]
        return value

    @field_validator("booking_date", mode="before")
    @classmethod
    def _coerce_date(cls, value: object) -> object:
        return coerce_date(value)

    @property
    def raw_duration(self) -> str | int | float | None:
        """Runtime from the embedded movie, falling back to the show record."""
        if self.movie is not None and self.movie.raw_duration not in (None, ""):
            return self.movie.raw_duration
        if self.duration not in (None, ""):
            return self.duration
        return self.runtime

    @property
    def title(self) -> str:
        return self.movie.title if self.movie and self.movie.title else "Movie"


class ScheduleRequest(BaseModel):
    """
    Request to create or edit a show assignment.

    `showtimes` is the raw comma-separated text entered by the owner.
    """

    movie_id: str | None = None
    screen_id: str | None = None
    showtimes: str = ""
    booking_date: date | None = None
    max_advance_days: int | None = None


class ValidationResponse(BaseModel):
    """Outcome of a dry-run validation."""

    valid: bool
    showtimes: list[str] = Field(default_factory=list)
    duration_minutes: int | None = None
    error: str | None = None
    kind: str | None = None


class ScheduleResponse(BaseModel):
    """Response after a successful create/edit."""

    status: str
    screen_id: str
    movie_id: str
    showtimes: list[str]
    booking_date: date
    shows: list[ShowAssignment]
