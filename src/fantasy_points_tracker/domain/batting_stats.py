from __future__ import annotations

from dataclasses import dataclass, fields

from fantasy_points_tracker.exceptions import StatsValidationError


@dataclass(frozen=True)
class BattingStats:
    at_bats: int = 0
    hits: int = 0
    home_runs: int = 0
    rbi: int = 0
    runs: int = 0
    stolen_bases: int = 0
    strikeouts: int = 0
    walks: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise StatsValidationError(f"Batting stat {f.name} cannot be negative")
        if self.hits > self.at_bats:
            raise StatsValidationError(f"Hits ({self.hits}) cannot exceed at bats ({self.at_bats})")

    @classmethod
    def zero(cls) -> BattingStats:
        return cls()

    def to_dict(self) -> dict[str, int]:
        return {
            "atBats": self.at_bats,
            "hits": self.hits,
            "homeRuns": self.home_runs,
            "rbi": self.rbi,
            "runs": self.runs,
            "stolenBases": self.stolen_bases,
            "strikeouts": self.strikeouts,
            "walks": self.walks,
        }
