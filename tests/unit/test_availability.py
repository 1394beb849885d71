"""Unit tests for customer-facing showtime availability."""

from datetime import date, datetime

from showplanner.scheduling.availability import (
    ShowGroup,
    filter_valid_show_groups,
    format_time_until_show,
    has_valid_running_dates,
    is_within_booking_window,
    validate_showtime,
)

NOW = datetime(2024, 1, 15, 10, 0)
TODAY = NOW.date()
TOMORROW = date(2024, 1, 16)
YESTERDAY = date(2024, 1, 14)


class TestValidateShowtime:
    def test_future_date_is_valid(self) -> None:
        result = validate_showtime(TOMORROW, "2:30 PM", now=NOW)
        assert result.is_valid
        assert not result.is_past

    def test_past_date_is_invalid(self) -> None:
        result = validate_showtime(YESTERDAY, "2:30 PM", now=NOW)
        assert not result.is_valid
        assert result.is_past
        assert result.reason == "Show date has passed"

    def test_inside_buffer_is_closed(self) -> None:
        result = validate_showtime(TODAY, "10:25 AM", buffer_minutes=30, now=NOW)
        assert not result.is_valid
        assert not result.is_past
        assert result.minutes_until_show == 25
        assert result.reason == "Booking closes 30 minutes before showtime"

    def test_far_enough_ahead_is_valid(self) -> None:
        result = validate_showtime(TODAY, "12:00 PM", buffer_minutes=30, now=NOW)
        assert result.is_valid
        assert result.minutes_until_show == 120

    def test_started_show_is_past(self) -> None:
        result = validate_showtime(TODAY, "9:30 AM", now=NOW)
        assert result.is_past
        assert result.reason == "Showtime has already started"

    def test_accepts_24h_tokens(self) -> None:
        assert validate_showtime(TODAY, "14:00", buffer_minutes=30, now=NOW).is_valid

    def test_invalid_token_today(self) -> None:
        result = validate_showtime(TODAY, "noon", now=NOW)
        assert not result.is_valid
        assert result.reason == "Invalid showtime format"


class TestFilterValidShowGroups:
    def test_drops_past_dates(self) -> None:
        groups = [
            ShowGroup(booking_date=YESTERDAY, showtimes=("2:30 PM", "6:00 PM")),
            ShowGroup(booking_date=TOMORROW, showtimes=("2:30 PM", "6:00 PM")),
        ]
        filtered = filter_valid_show_groups(groups, buffer_minutes=30, now=NOW)
        assert [g.booking_date for g in filtered] == [TOMORROW]

    def test_drops_closed_showtimes(self) -> None:
        groups = [ShowGroup(booking_date=TODAY, showtimes=("9:30 AM", "12:00 PM", "6:00 PM"))]
        [group] = filter_valid_show_groups(groups, buffer_minutes=30, now=NOW)
        assert group.showtimes == ("12:00 PM", "6:00 PM")

    def test_drops_groups_left_empty(self) -> None:
        groups = [ShowGroup(booking_date=TODAY, showtimes=("9:30 AM",))]
        assert filter_valid_show_groups(groups, buffer_minutes=30, now=NOW) == []


class TestRunningDates:
    def test_any_future_date(self) -> None:
        assert has_valid_running_dates([YESTERDAY, TOMORROW], today=TODAY)

    def test_all_past(self) -> None:
        assert not has_valid_running_dates([YESTERDAY], today=TODAY)

    def test_empty(self) -> None:
        assert not has_valid_running_dates([], today=TODAY)


class TestFormatTimeUntilShow:
    def test_started(self) -> None:
        assert format_time_until_show(0) == "Show started"

    def test_hours_and_minutes(self) -> None:
        assert format_time_until_show(135) == "2h 15m until show"

    def test_minutes(self) -> None:
        assert format_time_until_show(45) == "45m until show"


class TestIsWithinBookingWindow:
    def test_inside(self) -> None:
        assert is_within_booking_window(TOMORROW, "2:30 PM", max_advance_days=7, now=NOW)

    def test_beyond_window(self) -> None:
        assert not is_within_booking_window(date(2024, 1, 25), "2:30 PM", max_advance_days=7, now=NOW)

    def test_closed_showtime(self) -> None:
        assert not is_within_booking_window(TODAY, "10:10 AM", max_advance_days=7, buffer_minutes=30, now=NOW)
