"""Typed views of the MLB Stats API payloads.

The upstream JSON is optional-field heavy. Everything the pipeline relies on
is read here once, with missing counting stats defaulting to zero; the only
hard requirements are the structural blocks without which a payload is
meaningless (a boxscore's two team sides).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from fantasy_points_tracker.exceptions import UpstreamMalformedError


def _int(block: dict[str, Any], key: str) -> int:
    value = block.get(key)
    if value is None or value == "":
        return 0
    try:
        return int(value)
    except (TypeError, ValueError):
        return 0


def _optional_int(block: dict[str, Any], key: str) -> int | None:
    """Like _int, but an absent or unparseable value stays None."""
    value = block.get(key)
    if value is None or value == "":
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


@dataclass(frozen=True)
class RawBatting:
    games_played: int = 0
    at_bats: int = 0
    hits: int = 0
    doubles: int = 0
    triples: int = 0
    home_runs: int = 0
    rbi: int = 0
    runs: int = 0
    stolen_bases: int = 0
    strikeouts: int = 0
    walks: int = 0

    @classmethod
    def from_api(cls, block: dict[str, Any]) -> RawBatting:
        return cls(
            games_played=_int(block, "gamesPlayed"),
            at_bats=_int(block, "atBats"),
            hits=_int(block, "hits"),
            doubles=_int(block, "doubles"),
            triples=_int(block, "triples"),
            home_runs=_int(block, "homeRuns"),
            rbi=_int(block, "rbi"),
            runs=_int(block, "runs"),
            stolen_bases=_int(block, "stolenBases"),
            strikeouts=_int(block, "strikeOuts"),
            walks=_int(block, "baseOnBalls"),
        )


@dataclass(frozen=True)
class RawPitching:
    games_played: int = 0
    games_started: int = 0
    innings_pitched: str = "0.0"
    earned_runs: int = 0
    strikeouts: int = 0
    hits_allowed: int = 0
    walks_issued: int = 0
    wins: int = 0
    losses: int = 0
    saves: int = 0
    holds: int | None = None

    @classmethod
    def from_api(cls, block: dict[str, Any]) -> RawPitching:
        innings = block.get("inningsPitched")
        return cls(
            games_played=_int(block, "gamesPlayed"),
            games_started=_int(block, "gamesStarted"),
            innings_pitched=str(innings) if innings is not None else "0.0",
            earned_runs=_int(block, "earnedRuns"),
            strikeouts=_int(block, "strikeOuts"),
            hits_allowed=_int(block, "hits"),
            walks_issued=_int(block, "baseOnBalls"),
            wins=_int(block, "wins"),
            losses=_int(block, "losses"),
            saves=_int(block, "saves"),
            holds=_optional_int(block, "holds"),
        )


@dataclass(frozen=True)
class BoxscorePlayer:
    person_id: int
    full_name: str
    position_abbreviation: str
    batting: RawBatting | None = None
    pitching: RawPitching | None = None

    @classmethod
    def from_api(cls, block: dict[str, Any]) -> BoxscorePlayer:
        person = block.get("person") or {}
        position = block.get("position") or {}
        stats = block.get("stats") or {}
        batting = stats.get("batting")
        pitching = stats.get("pitching")
        return cls(
            person_id=_int(person, "id"),
            full_name=person.get("fullName", ""),
            position_abbreviation=position.get("abbreviation") or "Unknown",
            batting=RawBatting.from_api(batting) if batting else None,
            pitching=RawPitching.from_api(pitching) if pitching else None,
        )


@dataclass(frozen=True)
class TeamBoxscore:
    team_id: int
    name: str
    abbreviation: str
    players: tuple[BoxscorePlayer, ...] = ()

    @property
    def label(self) -> str:
        return self.abbreviation or self.name

    @classmethod
    def from_api(cls, side: str, block: dict[str, Any] | None) -> TeamBoxscore:
        if not block or not block.get("team"):
            raise UpstreamMalformedError(f"Boxscore is missing the {side} team")
        team = block["team"]
        players = block.get("players") or {}
        return cls(
            team_id=_int(team, "id"),
            name=team.get("name", ""),
            abbreviation=team.get("abbreviation", ""),
            players=tuple(BoxscorePlayer.from_api(p) for p in players.values()),
        )


@dataclass(frozen=True)
class Boxscore:
    game_id: int
    away: TeamBoxscore
    home: TeamBoxscore

    @classmethod
    def from_api(cls, game_id: int, data: dict[str, Any]) -> Boxscore:
        teams = data.get("teams")
        if not isinstance(teams, dict):
            raise UpstreamMalformedError(f"Boxscore for game {game_id} has no teams block")
        return cls(
            game_id=game_id,
            away=TeamBoxscore.from_api("away", teams.get("away")),
            home=TeamBoxscore.from_api("home", teams.get("home")),
        )


@dataclass(frozen=True)
class Game:
    game_id: int
    game_type: str = ""
    season: str = ""
    game_date: str = ""
    status: str = ""
    away_team: str = ""
    home_team: str = ""
    venue: str = ""

    @classmethod
    def from_api(cls, block: dict[str, Any]) -> Game:
        teams = block.get("teams") or {}
        away = (teams.get("away") or {}).get("team") or {}
        home = (teams.get("home") or {}).get("team") or {}
        return cls(
            game_id=_int(block, "gamePk"),
            game_type=block.get("gameType", ""),
            season=str(block.get("season", "")),
            game_date=block.get("gameDate", ""),
            status=(block.get("status") or {}).get("detailedState", ""),
            away_team=away.get("name", ""),
            home_team=home.get("name", ""),
            venue=(block.get("venue") or {}).get("name", ""),
        )


@dataclass(frozen=True)
class Split:
    """One row of a season or date-range aggregate."""

    player_id: int
    full_name: str
    team_name: str
    position_abbreviation: str
    stat: dict[str, Any] = field(default_factory=dict)

    @property
    def games_played(self) -> int:
        return _int(self.stat, "gamesPlayed")

    @classmethod
    def from_api(cls, block: dict[str, Any]) -> Split | None:
        """Returns None for rows without a player or stat block."""
        player = block.get("player")
        stat = block.get("stat")
        if not player or not stat:
            return None
        return cls(
            player_id=_int(player, "id"),
            full_name=player.get("fullName", ""),
            team_name=(block.get("team") or {}).get("name", ""),
            position_abbreviation=(block.get("position") or {}).get("abbreviation", ""),
            stat=dict(stat),
        )
