from datetime import date

import pytest

from fantasy_points_tracker.dates import (
    availability_message,
    can_navigate_to_date,
    format_long_date,
    infer_season,
    is_today,
    is_valid_date,
    league_today,
    league_yesterday,
    next_valid_date,
    parse_date,
    previous_valid_date,
)
from fantasy_points_tracker.exceptions import InvalidInputError
from tests.helpers import fixed_clock

_TODAY = date(2024, 6, 15)


class TestValidation:
    @pytest.mark.parametrize("value", ["2024-06-14", "2024-02-29"])
    def test_valid(self, value: str) -> None:
        assert is_valid_date(value)

    @pytest.mark.parametrize("value", ["2024-6-14", "06/14/2024", "2023-02-29", "2024-13-01", "", "2024-06-14T00:00"])
    def test_invalid(self, value: str) -> None:
        assert not is_valid_date(value)

    def test_parse_date_raises(self) -> None:
        with pytest.raises(InvalidInputError) as exc_info:
            parse_date("yesterday")
        assert exc_info.value.user_message == "Invalid date format. Please use YYYY-MM-DD."


class TestLeagueClock:
    def test_today_in_new_york(self) -> None:
        assert league_today(clock=fixed_clock("2024-06-15", hour_utc=3)) == date(2024, 6, 14)

    def test_yesterday(self) -> None:
        assert league_yesterday(clock=fixed_clock("2024-06-15")) == date(2024, 6, 14)

    def test_other_timezone(self) -> None:
        assert league_today("UTC", fixed_clock("2024-06-15", hour_utc=3)) == date(2024, 6, 15)


@pytest.mark.parametrize(
    ("today", "season"),
    [(date(2024, 6, 1), 2024), (date(2024, 3, 1), 2024), (date(2024, 11, 1), 2023), (date(2025, 2, 28), 2024)],
)
def test_infer_season(today: date, season: int) -> None:
    assert infer_season(today) == season


class TestAvailabilityMessage:
    def test_future_season(self) -> None:
        assert availability_message(date(2025, 4, 1), _TODAY) == (
            "Schedule for the 2025 MLB season is not yet available. Please check back later."
        )

    def test_past_season(self) -> None:
        assert availability_message(date(2023, 7, 4), _TODAY) == "No games were played on July 4, 2023 (past season)."

    def test_future_date(self) -> None:
        assert availability_message(date(2024, 6, 20), _TODAY) == "No games are scheduled for June 20, 2024 yet."

    def test_before_season_start(self) -> None:
        assert availability_message(date(2024, 2, 10), _TODAY) == (
            "The 2024 MLB season has not started yet. No games were played on February 10, 2024."
        )

    def test_off_season(self) -> None:
        today = date(2024, 12, 5)
        assert availability_message(date(2024, 11, 20), today) == "No games were played on November 20, 2024 (off-season)."

    def test_plain_day_off(self) -> None:
        assert availability_message(date(2024, 6, 10), _TODAY) == "No games were played on June 10, 2024."

    def test_games_without_qualifying_lines(self) -> None:
        assert availability_message(date(2024, 6, 10), _TODAY, has_games=True) == (
            "No qualifying player performances were recorded for June 10, 2024."
        )


class TestNavigation:
    def test_format_long_date(self) -> None:
        assert format_long_date(date(2024, 7, 4)) == "July 4, 2024"

    def test_never_past_yesterday(self) -> None:
        assert can_navigate_to_date(date(2024, 6, 14), _TODAY)
        assert not can_navigate_to_date(_TODAY, _TODAY)

    def test_past_and_future_seasons(self) -> None:
        assert can_navigate_to_date(date(2023, 12, 31), _TODAY)
        assert not can_navigate_to_date(date(2025, 1, 1), _TODAY)

    def test_next_valid_date(self) -> None:
        assert next_valid_date(date(2024, 6, 13), _TODAY) == date(2024, 6, 14)
        assert next_valid_date(date(2024, 6, 14), _TODAY) is None

    def test_previous_valid_date(self) -> None:
        assert previous_valid_date(date(2024, 3, 1)) == date(2024, 2, 29)


def test_is_today_uses_league_timezone() -> None:
    clock = fixed_clock("2024-06-15", hour_utc=2)
    assert is_today(date(2024, 6, 14), clock=clock)
    assert not is_today(date(2024, 6, 15), clock=clock)
