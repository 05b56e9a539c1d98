from datetime import date
from typing import Protocol

from fantasy_points_tracker.domain.player_stats import PlayerStats


class PlayerStatsRepo(Protocol):
    def ensure_schema(self) -> None: ...

    def find_by_date(self, game_date: date) -> list[PlayerStats]: ...

    def save(self, stats: PlayerStats) -> None: ...

    def save_batch(self, stats: list[PlayerStats]) -> None: ...
