"""League-timezone date handling.

All "today"/"yesterday" decisions are made in the league's home timezone, not
the host's. Functions that read the current time accept a ``clock`` returning a
timezone-aware ``datetime`` so tests can pin "now".
"""

import re
from collections.abc import Callable
from datetime import UTC, date, datetime, timedelta
from zoneinfo import ZoneInfo

from fantasy_points_tracker.exceptions import InvalidInputError

Clock = Callable[[], datetime]

DEFAULT_TIMEZONE = "America/New_York"

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def utc_now() -> datetime:
    return datetime.now(UTC)


def is_valid_date(value: str) -> bool:
    if not _DATE_RE.match(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def parse_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string, raising InvalidInputError otherwise."""
    if not is_valid_date(value):
        raise InvalidInputError(
            f"Invalid date format: {value!r}. Expected YYYY-MM-DD.",
            user_message="Invalid date format. Please use YYYY-MM-DD.",
        )
    return date.fromisoformat(value)


def league_today(tz: str = DEFAULT_TIMEZONE, clock: Clock = utc_now) -> date:
    return clock().astimezone(ZoneInfo(tz)).date()


def league_yesterday(tz: str = DEFAULT_TIMEZONE, clock: Clock = utc_now) -> date:
    return league_today(tz, clock) - timedelta(days=1)


def is_future_date(day: date, today: date) -> bool:
    return day > today


def is_today(day: date, tz: str = DEFAULT_TIMEZONE, clock: Clock = utc_now) -> bool:
    return day == league_today(tz, clock)


def infer_season(today: date) -> int:
    """November through February belong to the previous season."""
    if today.month >= 11 or today.month <= 2:
        return today.year - 1
    return today.year


def format_long_date(day: date) -> str:
    return f"{day.strftime('%B')} {day.day}, {day.year}"


def availability_message(day: date, today: date, *, has_games: bool = False, season_start: tuple[int, int] = (3, 1)) -> str:
    """Explain why no stats are available for ``day``."""
    formatted = format_long_date(day)
    if has_games:
        return f"No qualifying player performances were recorded for {formatted}."
    if day.year > today.year:
        return f"Schedule for the {day.year} MLB season is not yet available. Please check back later."
    if day.year < today.year:
        return f"No games were played on {formatted} (past season)."
    if is_future_date(day, today):
        return f"No games are scheduled for {formatted} yet."
    if (day.month, day.day) < season_start:
        return f"The {day.year} MLB season has not started yet. No games were played on {formatted}."
    if day.month >= 11:
        return f"No games were played on {formatted} (off-season)."
    return f"No games were played on {formatted}."


def can_navigate_to_date(day: date, today: date) -> bool:
    if day.year > today.year:
        return False
    if day.year < today.year:
        return True
    return day <= today - timedelta(days=1)


def next_valid_date(day: date, today: date) -> date | None:
    candidate = day + timedelta(days=1)
    if not can_navigate_to_date(candidate, today):
        return None
    return candidate


def previous_valid_date(day: date) -> date:
    return day - timedelta(days=1)
