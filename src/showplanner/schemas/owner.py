"""Pydantic schemas for theatre owner data and booking API envelopes."""

from typing import Any

from pydantic import BaseModel, Field

from showplanner.schemas.movie import Movie
from showplanner.schemas.screen import Screen


class ApiResponse(BaseModel):
    """Envelope returned by every booking API call."""

    success: bool
    data: Any = None
    error: str | None = None


class OwnerCatalog(BaseModel):
    """Movies and screens available to a theatre owner."""

    owner_id: str
    movies: list[Movie] = Field(default_factory=list)
    screens: list[Screen] = Field(default_factory=list)

    def find_movie(self, movie_id: str | None) -> Movie | None:
        if not movie_id:
            return None
        for movie in self.movies:
            if movie.id == str(movie_id):
                return movie
        return None
