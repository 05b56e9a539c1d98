import logging
from collections.abc import Callable
from typing import Any

import httpx

from fantasy_points_tracker.dates import DEFAULT_TIMEZONE, Clock, is_future_date, league_today, parse_date, utc_now
from fantasy_points_tracker.domain.mlb_api import Boxscore, Game, Split
from fantasy_points_tracker.exceptions import (
    InvalidInputError,
    UpstreamError,
    UpstreamMalformedError,
    UpstreamTransientError,
)
from fantasy_points_tracker.ingest._retry import is_transient, transient_http_retry

logger = logging.getLogger(__name__)

_BASE_URL = "https://statsapi.mlb.com/api/v1"
_DEFAULT_RETRY = transient_http_retry("MLB API request")

SPLIT_GROUPS = ("hitting", "pitching")


class MLBStatsClient:
    """Sole integration point with the MLB Stats API."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        *,
        base_url: str = _BASE_URL,
        timeout: float = 10.0,
        retry: Callable[..., Callable[..., Any]] = _DEFAULT_RETRY,
        timezone: str = DEFAULT_TIMEZONE,
        clock: Clock = utc_now,
    ) -> None:
        self._client = client or httpx.Client(timeout=httpx.Timeout(timeout, connect=5.0))
        self._base_url = base_url.rstrip("/")
        self._get_with_retry = retry(self._do_get)
        self._timezone = timezone
        self._clock = clock

    def get_games_by_date(self, day: str) -> list[Game]:
        requested = parse_date(day)
        if is_future_date(requested, league_today(self._timezone, self._clock)):
            logger.debug("Skipping schedule lookup for future date %s", day)
            return []
        data = self._get("schedule", {"sportId": 1, "date": day})
        dates = data.get("dates") or []
        if not dates:
            return []
        return [Game.from_api(g) for g in dates[0].get("games") or []]

    def get_game_boxscore(self, game_id: int) -> Boxscore:
        data = self._get(f"game/{game_id}/boxscore", {})
        return Boxscore.from_api(game_id, data)

    def get_season_splits(
        self,
        group: str,
        season: int,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> list[Split]:
        if group not in SPLIT_GROUPS:
            raise InvalidInputError(f"Unknown stats group {group!r}; expected one of {SPLIT_GROUPS}")
        if not 1000 <= season <= 9999:
            raise InvalidInputError(f"Invalid season: {season}")
        params: dict[str, Any] = {"group": group, "season": season, "limit": 5000}
        by_range = start_date is not None or end_date is not None
        if by_range:
            if start_date is None or end_date is None:
                raise InvalidInputError("Both start_date and end_date are required for a date range")
            if parse_date(start_date) > parse_date(end_date):
                raise InvalidInputError(f"start_date ({start_date}) is after end_date ({end_date})")
            params.update({"stats": "byDateRange", "startDate": start_date, "endDate": end_date})
        else:
            params["stats"] = "season"

        data = self._get("stats", params)
        stats = data.get("stats") or []
        if not stats or not isinstance(stats[0].get("splits"), list):
            if by_range:
                return []
            raise UpstreamMalformedError(f"Invalid {group} stats data structure for season {season}")

        splits: list[Split] = []
        for row in stats[0]["splits"]:
            split = Split.from_api(row)
            if split is not None:
                splits.append(split)
        logger.info("Fetched %d %s splits for %s", len(splits), group, _describe_range(season, start_date, end_date))
        return splits

    def close(self) -> None:
        self._client.close()

    def _get(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        url = f"{self._base_url}/{path}"
        try:
            return self._get_with_retry(url, params)
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if is_transient(e):
                raise UpstreamTransientError(f"GET {url} failed with status {status}", status_code=status) from e
            raise UpstreamError(f"GET {url} failed with status {status}", status_code=status) from e
        except httpx.TransportError as e:
            raise UpstreamTransientError(f"GET {url} failed: {e!r}") from e
        except ValueError as e:
            raise UpstreamMalformedError(f"GET {url} returned a non-JSON body") from e

    def _do_get(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        logger.debug("GET %s %s", url, params)
        response = self._client.get(url, params=params)
        logger.debug("MLB API responded %d", response.status_code)
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            raise ValueError("expected a JSON object")
        return data


def _describe_range(season: int, start_date: str | None, end_date: str | None) -> str:
    if start_date is None:
        return f"season {season}"
    return f"{start_date}..{end_date}"
