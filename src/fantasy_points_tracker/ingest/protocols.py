from typing import Protocol

from fantasy_points_tracker.domain.mlb_api import Boxscore, Game, Split


class StatsClient(Protocol):
    def get_games_by_date(self, day: str) -> list[Game]: ...

    def get_game_boxscore(self, game_id: int) -> Boxscore: ...

    def get_season_splits(
        self,
        group: str,
        season: int,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> list[Split]: ...
