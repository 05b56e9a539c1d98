import threading
from typing import Any

from fantasy_points_tracker.domain.mlb_api import Boxscore, Game, Split


class FakeStatsClient:
    """In-memory stand-in for the MLB stats client.

    ``splits`` is keyed by ``(group, start_date)``; season queries use a
    ``None`` start date.
    """

    def __init__(
        self,
        games: dict[str, list[Game]] | None = None,
        boxscores: dict[int, Boxscore | Exception] | None = None,
        splits: dict[tuple[str, str | None], list[Split]] | None = None,
    ) -> None:
        self._games = games or {}
        self._boxscores = boxscores or {}
        self._splits = splits or {}
        self._lock = threading.Lock()
        self.calls: list[tuple[str, Any]] = []

    def _record(self, name: str, args: Any) -> None:
        with self._lock:
            self.calls.append((name, args))

    def get_games_by_date(self, day: str) -> list[Game]:
        self._record("games", day)
        return list(self._games.get(day, []))

    def get_game_boxscore(self, game_id: int) -> Boxscore:
        self._record("boxscore", game_id)
        result = self._boxscores[game_id]
        if isinstance(result, Exception):
            raise result
        return result

    def get_season_splits(
        self,
        group: str,
        season: int,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> list[Split]:
        self._record("splits", (group, season, start_date, end_date))
        return list(self._splits.get((group, start_date), []))


class FakeRosterSource:
    def __init__(self, names: set[str] | None = None, error: Exception | None = None) -> None:
        self._names = names or set()
        self._error = error
        self.calls: list[tuple[str, int, int]] = []

    def fetch_rostered_player_names(self, league_id: str, season: int, segment: int = 0) -> set[str]:
        self.calls.append((league_id, season, segment))
        if self._error is not None:
            raise self._error
        return set(self._names)
