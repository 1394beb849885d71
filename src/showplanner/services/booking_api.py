"""Client for the remote booking API that persists screens, movies and shows."""

import logging
from datetime import date
from typing import Any
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from showplanner.config import settings
from showplanner.schemas.movie import Movie
from showplanner.schemas.owner import ApiResponse
from showplanner.schemas.screen import Screen
from showplanner.schemas.show import ShowAssignment

logger = logging.getLogger(__name__)


def _segment(value: str) -> str:
    return quote(str(value), safe="")


class BookingApiClient:
    """
    Client for the booking platform's theatre-owner API.

    Every call returns an ApiResponse. Transport and HTTP failures are logged
    and reported as success=False; nothing is raised to the caller.
    """

    def __init__(
        self,
        base_url: str | None = None,
        token: str | None = None,
        timeout: int | None = None,
    ) -> None:
        """
        Initialize booking API client.

        Args:
            base_url: API root (uses settings if not provided)
            token: Theatre owner bearer token (uses settings if not provided)
            timeout: Request timeout in seconds (uses settings if not provided)
        """
        self.base_url = (base_url or settings.booking_api_url).rstrip("/")
        self.token = token if token is not None else settings.booking_api_token
        self.timeout = timeout or settings.request_timeout
        if not self.token:
            logger.warning("Booking API token not configured")

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> ApiResponse:
        url = f"{self.base_url}{path}"
        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.request(
                    method, url, json=json, params=params, headers=self._headers()
                )
        except Exception as e:
            logger.error(f"Booking API {method} {path} failed: {e}")
            return ApiResponse(success=False, error=str(e))

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.status_code >= 400:
            error = None
            if isinstance(body, dict):
                error = body.get("error") or body.get("message")
            error = error or f"HTTP {response.status_code}"
            logger.warning(f"Booking API {method} {path} returned {response.status_code}: {error}")
            return ApiResponse(success=False, error=error)

        if isinstance(body, dict) and "success" in body:
            return ApiResponse(
                success=bool(body["success"]),
                data=body.get("data"),
                error=body.get("error") or body.get("message"),
            )
        return ApiResponse(success=True, data=body)

    def _parse_list(self, response: ApiResponse, model: type, what: str) -> ApiResponse:
        """Replace raw list data with parsed models, skipping malformed items."""
        if not response.success:
            return response
        if not isinstance(response.data, list):
            logger.warning(f"Expected a list of {what}s, got {type(response.data).__name__}")
            return ApiResponse(success=True, data=[])
        items = []
        for raw in response.data:
            try:
                items.append(model.model_validate(raw))
            except ValidationError as e:
                logger.warning(f"Skipping malformed {what}: {e}")
        return ApiResponse(success=True, data=items)

    async def get_screen_shows(self, screen_id: str, booking_date: date | None = None) -> ApiResponse:
        """
        Fetch every show on a screen.

        Args:
            screen_id: Screen identifier
            booking_date: Restrict to one date (all dates if not provided)

        Returns:
            ApiResponse whose data is a list of ShowAssignment
        """
        params = {"date": booking_date.isoformat()} if booking_date else None
        response = await self._request("GET", f"/screens/{_segment(screen_id)}/shows", params=params)
        return self._parse_list(response, ShowAssignment, "show")

    async def save_screen_shows(
        self,
        screen_id: str,
        movie_id: str,
        showtimes: list[str],
        booking_date: date,
        max_advance_days: int,
    ) -> ApiResponse:
        """Create or update the show for (screen, movie)."""
        payload = {
            "movieId": movie_id,
            "showtimes": list(showtimes),
            "bookingDate": booking_date.isoformat(),
            "maxDays": max_advance_days,
        }
        return await self._request("POST", f"/screens/{_segment(screen_id)}/shows", json=payload)

    async def delete_screen_show(self, screen_id: str, show_id: str) -> ApiResponse:
        return await self._request(
            "DELETE", f"/screens/{_segment(screen_id)}/shows/{_segment(show_id)}"
        )

    async def cleanup_past_screen_shows(self, screen_id: str) -> ApiResponse:
        """Ask the store to delete shows whose booking date has passed."""
        return await self._request("POST", f"/screens/{_segment(screen_id)}/shows/cleanup")

    async def get_theatre_owner_movies(self, owner_id: str) -> ApiResponse:
        """Returns ApiResponse whose data is a list of Movie."""
        response = await self._request("GET", f"/movies/theatre-owner/{_segment(owner_id)}")
        return self._parse_list(response, Movie, "movie")

    async def get_owner_screens(self, owner_id: str) -> ApiResponse:
        """Returns ApiResponse whose data is a list of Screen."""
        response = await self._request("GET", f"/theatres/owner/{_segment(owner_id)}/screens")
        if response.success and isinstance(response.data, dict):
            response = ApiResponse(success=True, data=response.data.get("screens") or [])
        return self._parse_list(response, Screen, "screen")

    async def update_movie_advance_booking(self, movie_id: str, enabled: bool) -> ApiResponse:
        return await self._request(
            "PATCH", f"/movies/{_segment(movie_id)}/advance-booking", json={"enabled": enabled}
        )

    async def get_theatre_owner_profile(self) -> ApiResponse:
        return await self._request("GET", "/theatre-owner/profile")
