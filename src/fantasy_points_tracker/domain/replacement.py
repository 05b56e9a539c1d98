from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class SeasonPlayer:
    id: int
    full_name: str
    team_name: str
    position: str
    points: float
    games_played: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "fullName": self.full_name,
            "teamName": self.team_name,
            "position": self.position,
            "points": self.points,
            "gamesPlayed": self.games_played,
        }


@dataclass(frozen=True)
class RankedPlayer:
    player: SeasonPlayer
    rank: int
    points_above_replacement: float
    is_startable: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            **self.player.to_dict(),
            "rank": self.rank,
            "pointsAboveReplacement": self.points_above_replacement,
            "isStartable": self.is_startable,
        }


@dataclass(frozen=True)
class PositionReplacement:
    position: str
    position_name: str
    replacement_rank: int
    replacement_points: float
    players: tuple[RankedPlayer, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position,
            "positionName": self.position_name,
            "replacementRank": self.replacement_rank,
            "replacementPoints": self.replacement_points,
            "players": [p.to_dict() for p in self.players],
        }


@dataclass(frozen=True)
class ReplacementReport:
    season: int
    team_count: int
    positions: tuple[PositionReplacement, ...] = field(default_factory=tuple)

    def to_dict(self) -> dict[str, Any]:
        return {
            "season": self.season,
            "teamCount": self.team_count,
            "positions": [p.to_dict() for p in self.positions],
        }
