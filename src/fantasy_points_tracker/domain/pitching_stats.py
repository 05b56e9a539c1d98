from __future__ import annotations

from dataclasses import dataclass

from fantasy_points_tracker.exceptions import StatsValidationError

_NON_NEGATIVE = (
    "innings_pitched",
    "earned_runs",
    "pitching_strikeouts",
    "hits_allowed",
    "walks_issued",
    "wins",
    "losses",
    "saves",
    "games_started",
)


@dataclass(frozen=True)
class PitchingStats:
    """Pitching line for one player-game.

    ``innings_pitched`` keeps baseball notation (6.2 is six innings and two
    outs). ``holds`` is None when the upstream record did not report it,
    which is not the same as zero holds.
    """

    innings_pitched: float = 0.0
    earned_runs: int = 0
    pitching_strikeouts: int = 0
    hits_allowed: int = 0
    walks_issued: int = 0
    wins: int = 0
    losses: int = 0
    saves: int = 0
    holds: int | None = None
    games_started: int = 0

    def __post_init__(self) -> None:
        for name in _NON_NEGATIVE:
            if getattr(self, name) < 0:
                raise StatsValidationError(f"Pitching stat {name} cannot be negative")
        if self.holds is not None and self.holds < 0:
            raise StatsValidationError("Holds cannot be negative")

    @classmethod
    def zero(cls) -> PitchingStats:
        return cls()

    def to_dict(self) -> dict[str, float | int | None]:
        return {
            "inningsPitched": self.innings_pitched,
            "earnedRuns": self.earned_runs,
            "pitchingStrikeouts": self.pitching_strikeouts,
            "hitsAllowed": self.hits_allowed,
            "walksIssued": self.walks_issued,
            "wins": self.wins,
            "losses": self.losses,
            "saves": self.saves,
            "holds": self.holds,
            "gamesStarted": self.games_started,
        }
