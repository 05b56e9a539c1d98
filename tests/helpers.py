from datetime import UTC, date, datetime
from typing import Any

from fantasy_points_tracker.dates import Clock
from fantasy_points_tracker.domain.batting_stats import BattingStats
from fantasy_points_tracker.domain.pitching_stats import PitchingStats
from fantasy_points_tracker.domain.player_stats import PlayerStats


def fixed_clock(day: str, hour_utc: int = 16) -> Clock:
    """A clock pinned to ``day`` at ``hour_utc``; 16:00 UTC is midday in New York."""
    moment = datetime.fromisoformat(day).replace(hour=hour_utc, tzinfo=UTC)
    return lambda: moment


def player_block(
    person_id: int,
    full_name: str,
    position: str = "1B",
    *,
    batting: dict[str, Any] | None = None,
    pitching: dict[str, Any] | None = None,
) -> dict[str, Any]:
    stats: dict[str, Any] = {}
    if batting is not None:
        stats["batting"] = {"gamesPlayed": 1, **batting}
    if pitching is not None:
        stats["pitching"] = {"gamesPlayed": 1, **pitching}
    return {
        "person": {"id": person_id, "fullName": full_name},
        "position": {"abbreviation": position},
        "stats": stats,
    }


def boxscore_data(
    away_players: list[dict[str, Any]] | None = None,
    home_players: list[dict[str, Any]] | None = None,
    *,
    away_abbr: str = "NYY",
    home_abbr: str = "BOS",
) -> dict[str, Any]:
    def side(team_id: int, name: str, abbr: str, players: list[dict[str, Any]] | None) -> dict[str, Any]:
        return {
            "team": {"id": team_id, "name": name, "abbreviation": abbr},
            "players": {f"ID{p['person']['id']}": p for p in players or []},
        }

    return {
        "teams": {
            "away": side(147, "New York Yankees", away_abbr, away_players),
            "home": side(111, "Boston Red Sox", home_abbr, home_players),
        }
    }


def split_row(
    player_id: int,
    full_name: str,
    *,
    team: str = "New York Yankees",
    position: str = "1B",
    **stat: Any,
) -> dict[str, Any]:
    return {
        "player": {"id": player_id, "fullName": full_name},
        "team": {"id": 147, "name": team},
        "position": {"abbreviation": position},
        "stat": {"gamesPlayed": 1, **stat},
    }


def make_player_stats(
    player_id: int = 1,
    *,
    name: str = "Test Player",
    points: float = 5.0,
    game_date: date = date(2024, 6, 14),
    game_id: int = 745000,
    position: str = "1B",
    holds: int | None = None,
) -> PlayerStats:
    return PlayerStats(
        id=player_id,
        name=name,
        team="NYY",
        opponent_team="BOS",
        position=position,
        points=points,
        game_date=game_date,
        batting_stats=BattingStats(at_bats=4, hits=2, rbi=1),
        pitching_stats=PitchingStats(holds=holds),
        is_home_team=False,
        game_id=game_id,
    )
