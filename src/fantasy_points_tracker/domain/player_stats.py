from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from fantasy_points_tracker.domain.batting_stats import BattingStats
from fantasy_points_tracker.domain.pitching_stats import PitchingStats
from fantasy_points_tracker.exceptions import StatsValidationError


@dataclass(frozen=True)
class PlayerStats:
    """One player's fantasy line for one game.

    Both stat substructures are always present; the side a player did not
    contribute to is zero-filled.
    """

    id: int
    name: str
    team: str
    opponent_team: str
    position: str
    points: float
    game_date: date
    batting_stats: BattingStats = field(default_factory=BattingStats.zero)
    pitching_stats: PitchingStats = field(default_factory=PitchingStats.zero)
    is_position_player_pitching: bool = False
    is_home_team: bool | None = None
    game_id: int = 0

    def __post_init__(self) -> None:
        missing = [name for name in ("name", "team", "position") if not getattr(self, name)]
        if missing:
            raise StatsValidationError(f"Required fields cannot be empty: {', '.join(missing)}")

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "team": self.team,
            "opponentTeam": self.opponent_team,
            "position": self.position,
            "points": self.points,
            "battingStats": self.batting_stats.to_dict(),
            "pitchingStats": self.pitching_stats.to_dict(),
            "gameDate": self.game_date.isoformat(),
            "isPositionPlayerPitching": self.is_position_player_pitching,
        }
        if self.is_home_team is not None:
            data["isHomeTeam"] = self.is_home_team
        return data
