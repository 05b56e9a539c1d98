from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class PlayerWeekly:
    id: int
    full_name: str
    team_name: str
    position_abbr: str
    weekly_points: tuple[float, ...]
    total_points: float
    is_rostered: bool = False

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "fullName": self.full_name,
            "teamName": self.team_name,
            "positionAbbr": self.position_abbr,
            "weeklyPoints": list(self.weekly_points),
            "totalPoints": self.total_points,
            "isRostered": self.is_rostered,
        }


def latest_nonzero_points(weekly_points: tuple[float, ...], last_complete_week: int) -> float:
    """Points from the most recent non-zero week at or before ``last_complete_week``."""
    for idx in range(min(last_complete_week, len(weekly_points) - 1), -1, -1):
        if weekly_points[idx] != 0:
            return weekly_points[idx]
    return 0.0
