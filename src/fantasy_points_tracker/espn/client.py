import logging
import re
from typing import Any
from urllib.parse import unquote

import httpx

from fantasy_points_tracker.exceptions import EnrichmentError

logger = logging.getLogger(__name__)

_API_HOST = "https://lm-api-reads.fantasy.espn.com"
_FALLBACK_HOST = "https://fantasy.espn.com"
_LEAGUE_PATH = "/apis/v3/games/flb/seasons/{season}/segments/{segment}/leagues/{league_id}"
_PRIMARY_VIEWS = ("mRoster", "mTeam", "mSettings", "modular", "mNav")
_FALLBACK_VIEWS = ("mRoster",)
_PERCENT_ESCAPE = re.compile(r"%[0-9A-Fa-f]{2}")

_HEADERS = {
    "Accept": "application/json, text/plain, */*",
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/125.0.0.0 Safari/537.36",
    "X-Fantasy-Source": "kona",
}


def build_cookie(swid: str, espn_s2: str) -> str:
    """``espn_s2`` is often copied from a browser in percent-encoded form."""
    if _PERCENT_ESCAPE.search(espn_s2):
        espn_s2 = unquote(espn_s2)
    return f"SWID={swid}; espn_s2={espn_s2}"


def extract_roster_names(data: dict[str, Any]) -> set[str]:
    names: set[str] = set()
    teams = data.get("teams")
    if not isinstance(teams, list):
        return names
    for team in teams:
        entries = ((team or {}).get("roster") or {}).get("entries") or []
        for entry in entries:
            player = ((entry or {}).get("playerPoolEntry") or {}).get("player") or {}
            full_name = player.get("fullName")
            if full_name:
                names.add(full_name)
    return names


def _is_json(response: httpx.Response) -> bool:
    return response.is_success and "application/json" in response.headers.get("content-type", "")


class ESPNFantasyClient:
    """Reads league rosters from the ESPN fantasy league API."""

    def __init__(self, swid: str, espn_s2: str, client: httpx.Client | None = None) -> None:
        self._cookie = build_cookie(swid, espn_s2)
        self._client = client or httpx.Client(timeout=httpx.Timeout(30.0, connect=10.0))

    def fetch_rostered_player_names(self, league_id: str, season: int, segment: int = 0) -> set[str]:
        path = _LEAGUE_PATH.format(season=season, segment=segment, league_id=league_id)
        primary = self._get(f"{_API_HOST}{path}", _PRIMARY_VIEWS)
        if _is_json(primary):
            return extract_roster_names(primary.json())

        logger.debug("ESPN primary endpoint returned %d; trying fallback host", primary.status_code)
        fallback = self._get(f"{_FALLBACK_HOST}{path}", _FALLBACK_VIEWS)
        if not _is_json(fallback):
            raise EnrichmentError(
                f"ESPN returned non-JSON response (status {primary.status_code} then {fallback.status_code}): "
                f"{fallback.text[:200]!r}",
                user_message="Fantasy roster data is unavailable.",
            )
        return extract_roster_names(fallback.json())

    def close(self) -> None:
        self._client.close()

    def _get(self, url: str, views: tuple[str, ...]) -> httpx.Response:
        logger.debug("GET %s views=%s", url, ",".join(views))
        try:
            return self._client.get(
                url,
                params=[("view", v) for v in views],
                headers={**_HEADERS, "Cookie": self._cookie},
            )
        except httpx.HTTPError as e:
            raise EnrichmentError(f"GET {url} failed: {e!r}", user_message="Fantasy roster data is unavailable.") from e
