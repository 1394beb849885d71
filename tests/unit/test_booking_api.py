"""Tests for the booking API client."""

from datetime import date
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from showplanner.errors import CrossShowOverlapError, ExactDuplicateError
from showplanner.scheduling.conflicts import ConflictDetector
from showplanner.schemas import Movie, Screen, ShowAssignment
from showplanner.services.booking_api import BookingApiClient

# ---------------------------------------------------------------------------
# Sample fixture data
# ---------------------------------------------------------------------------

SAMPLE_SHOWS_RESPONSE = {
    "success": True,
    "data": [
        {
            "_id": "664f1c",
            "screenId": "2",
            "movieId": {"_id": "m-1", "title": "Dune: Part Two", "duration": "2h 46m"},
            "showtimes": ["10:00 AM", "19:00"],
            "bookingDate": "2026-03-10T00:00:00.000Z",
            "maxDays": 3,
        },
        {"_id": "664f1d", "screenId": "2", "movieId": "m-2", "showtimes": ["4:00 PM"]},
    ],
}

SAMPLE_MOVIES_RESPONSE = {
    "success": True,
    "data": [
        {
            "_id": "m-1",
            "title": "Dune: Part Two",
            "duration": "2h 46m",
            "releaseDate": "2026-03-01",
            "advanceBookingEnabled": False,
        },
        {"title": "Missing id"},
    ],
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def make_http_response(json_data: object, status_code: int = 200) -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = json_data
    return response


def make_async_client_ctx(response: MagicMock) -> AsyncMock:
    """Return an async context manager whose .request() always returns *response*."""
    inner = AsyncMock()
    inner.request = AsyncMock(return_value=response)
    ctx = AsyncMock()
    ctx.__aenter__ = AsyncMock(return_value=inner)
    ctx.__aexit__ = AsyncMock(return_value=False)
    return ctx


def request_call(ctx: AsyncMock):
    return ctx.__aenter__.return_value.request.call_args


def make_client() -> BookingApiClient:
    return BookingApiClient(base_url="http://booking.test/api/", token="tok", timeout=5)


# ---------------------------------------------------------------------------
# Envelope handling
# ---------------------------------------------------------------------------


class TestRequest:
    async def test_sends_bearer_token(self) -> None:
        ctx = make_async_client_ctx(make_http_response({"success": True, "data": {}}))
        with patch("httpx.AsyncClient", return_value=ctx):
            await make_client().get_theatre_owner_profile()
        call = request_call(ctx)
        assert call.args == ("GET", "http://booking.test/api/theatre-owner/profile")
        assert call.kwargs["headers"]["Authorization"] == "Bearer tok"

    async def test_http_error_becomes_failed_response(self) -> None:
        ctx = make_async_client_ctx(make_http_response({"message": "Unauthorized"}, status_code=401))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await make_client().get_theatre_owner_profile()
        assert result.success is False
        assert result.error == "Unauthorized"

    async def test_http_error_without_body(self) -> None:
        response = make_http_response(None, status_code=503)
        response.json.side_effect = ValueError("no json")
        ctx = make_async_client_ctx(response)
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await make_client().get_theatre_owner_profile()
        assert result.success is False
        assert result.error == "HTTP 503"

    async def test_network_error_becomes_failed_response(self) -> None:
        inner = AsyncMock()
        inner.request = AsyncMock(side_effect=Exception("Connection refused"))
        ctx = AsyncMock()
        ctx.__aenter__ = AsyncMock(return_value=inner)
        ctx.__aexit__ = AsyncMock(return_value=False)
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await make_client().get_theatre_owner_profile()
        assert result.success is False
        assert "Connection refused" in result.error

    async def test_success_false_envelope_is_passed_through(self) -> None:
        ctx = make_async_client_ctx(
            make_http_response({"success": False, "error": "Duplicate show"})
        )
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await make_client().delete_screen_show("1", "s-1")
        assert result.success is False
        assert result.error == "Duplicate show"

    async def test_bare_json_is_wrapped(self) -> None:
        ctx = make_async_client_ctx(make_http_response([]))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await make_client().get_screen_shows("1")
        assert result.success is True
        assert result.data == []


# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


class TestGetScreenShows:
    async def test_parses_shows_with_embedded_movie(self) -> None:
        ctx = make_async_client_ctx(make_http_response(SAMPLE_SHOWS_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await make_client().get_screen_shows("2")

        assert result.success
        first, second = result.data
        assert isinstance(first, ShowAssignment)
        assert first.id == "664f1c"
        assert first.movie_id == "m-1"
        assert first.movie.title == "Dune: Part Two"
        assert first.raw_duration == "2h 46m"
        assert first.showtimes == ["10:00 AM", "19:00"]
        assert first.booking_date == date(2026, 3, 10)
        assert first.max_advance_days == 3
        assert second.movie is None
        assert second.movie_id == "m-2"

    async def test_passes_date_filter(self) -> None:
        ctx = make_async_client_ctx(make_http_response({"success": True, "data": []}))
        with patch("httpx.AsyncClient", return_value=ctx):
            await make_client().get_screen_shows("2", booking_date=date(2026, 3, 11))
        assert request_call(ctx).kwargs["params"] == {"date": "2026-03-11"}

    async def test_escapes_screen_id(self) -> None:
        ctx = make_async_client_ctx(make_http_response({"success": True, "data": []}))
        with patch("httpx.AsyncClient", return_value=ctx):
            await make_client().get_screen_shows("IMAX 1")
        assert request_call(ctx).args[1] == "http://booking.test/api/screens/IMAX%201/shows"

    async def test_keeps_show_with_embedded_movie_missing_id(self) -> None:
        body = {
            "success": True,
            "data": [{"_id": "s1", "movieId": {"title": "Old"}, "showtimes": ["7:00 PM"]}],
        }
        ctx = make_async_client_ctx(make_http_response(body))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await make_client().get_screen_shows("1")

        [show] = result.data
        assert show.id == "s1"
        assert show.movie is None
        assert show.movie_id is None
        assert show.showtimes == ["7:00 PM"]
        with pytest.raises(ExactDuplicateError):
            ConflictDetector(result.data).check(["19:00"], 90)

    async def test_embedded_movie_missing_id_keeps_its_runtime(self) -> None:
        body = {
            "success": True,
            "data": [
                {"_id": "s1", "movieId": {"title": "Old", "duration": 120}, "showtimes": ["7:00 PM"]}
            ],
        }
        ctx = make_async_client_ctx(make_http_response(body))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await make_client().get_screen_shows("1")

        assert result.data[0].raw_duration == 120
        with pytest.raises(CrossShowOverlapError):
            ConflictDetector(result.data).check(["8:00 PM"], 90)


class TestSaveScreenShows:
    async def test_posts_plan_payload(self) -> None:
        ctx = make_async_client_ctx(make_http_response({"success": True, "data": {"_id": "new"}}))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await make_client().save_screen_shows(
                "2", "m-1", ["10:00 AM", "1:00 PM"], date(2026, 3, 10), 3
            )
        assert result.success
        call = request_call(ctx)
        assert call.args == ("POST", "http://booking.test/api/screens/2/shows")
        assert call.kwargs["json"] == {
            "movieId": "m-1",
            "showtimes": ["10:00 AM", "1:00 PM"],
            "bookingDate": "2026-03-10",
            "maxDays": 3,
        }


class TestCatalog:
    async def test_movies_skip_malformed_records(self) -> None:
        ctx = make_async_client_ctx(make_http_response(SAMPLE_MOVIES_RESPONSE))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await make_client().get_theatre_owner_movies("owner-1")
        assert [type(m) for m in result.data] == [Movie]
        assert result.data[0].release_date == date(2026, 3, 1)

    async def test_screens_unwrapped_from_envelope(self) -> None:
        body = {
            "success": True,
            "data": {"screenCount": 2, "screens": [{"screenNumber": 1}, {"screenNumber": 2, "type": "IMAX"}]},
        }
        ctx = make_async_client_ctx(make_http_response(body))
        with patch("httpx.AsyncClient", return_value=ctx):
            result = await make_client().get_owner_screens("owner-1")
        assert all(isinstance(s, Screen) for s in result.data)
        assert [s.screen_id for s in result.data] == ["1", "2"]
        assert result.data[1].screen_type == "IMAX"

    async def test_advance_booking_patch(self) -> None:
        ctx = make_async_client_ctx(make_http_response({"success": True}))
        with patch("httpx.AsyncClient", return_value=ctx):
            await make_client().update_movie_advance_booking("m-1", True)
        call = request_call(ctx)
        assert call.args == ("PATCH", "http://booking.test/api/movies/m-1/advance-booking")
        assert call.kwargs["json"] == {"enabled": True}
