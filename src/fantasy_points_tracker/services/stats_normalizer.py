import logging
from dataclasses import dataclass
from datetime import date

from fantasy_points_tracker.domain.batting_stats import BattingStats
from fantasy_points_tracker.domain.mlb_api import Boxscore, BoxscorePlayer, RawBatting, RawPitching, TeamBoxscore
from fantasy_points_tracker.domain.pitching_stats import PitchingStats
from fantasy_points_tracker.domain.player_stats import PlayerStats
from fantasy_points_tracker.exceptions import StatsValidationError
from fantasy_points_tracker.scoring.points import DEFAULT_RULES, ScoringRules, innings_as_decimal, score_batting, score_pitching
from fantasy_points_tracker.scoring.positions import classify, is_position_player_pitching

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerGameLine:
    points: float
    batting_stats: BattingStats
    pitching_stats: PitchingStats


def to_batting_stats(raw: RawBatting) -> BattingStats:
    return BattingStats(
        at_bats=raw.at_bats,
        hits=raw.hits,
        home_runs=raw.home_runs,
        rbi=raw.rbi,
        runs=raw.runs,
        stolen_bases=raw.stolen_bases,
        strikeouts=raw.strikeouts,
        walks=raw.walks,
    )


def to_pitching_stats(raw: RawPitching) -> PitchingStats:
    return PitchingStats(
        innings_pitched=innings_as_decimal(raw.innings_pitched),
        earned_runs=raw.earned_runs,
        pitching_strikeouts=raw.strikeouts,
        hits_allowed=raw.hits_allowed,
        walks_issued=raw.walks_issued,
        wins=raw.wins,
        losses=raw.losses,
        saves=raw.saves,
        holds=raw.holds,
        games_started=raw.games_started,
    )


def has_relevant_stats(batting: BattingStats, pitching: PitchingStats) -> bool:
    return (
        batting.at_bats > 0
        or batting.walks > 0
        or batting.strikeouts > 0
        or pitching.innings_pitched > 0
        or pitching.pitching_strikeouts > 0
    )


class StatsNormalizer:
    """Turns a boxscore into per-player fantasy lines.

    A two-way player's points are the sum of both sides. Players with no
    relevant activity are dropped, and a player whose stats fail validation is
    logged and skipped without affecting the rest of the boxscore.
    """

    def __init__(self, rules: ScoringRules = DEFAULT_RULES) -> None:
        self._rules = rules

    def score_player(self, player: BoxscorePlayer) -> PlayerGameLine:
        points = 0.0
        batting = BattingStats.zero()
        pitching = PitchingStats.zero()

        if player.batting is not None and player.batting.games_played:
            points += score_batting(player.batting, self._rules)
            batting = to_batting_stats(player.batting)

        if player.pitching is not None and player.pitching.games_played:
            points += score_pitching(player.pitching, self._rules)
            pitching = to_pitching_stats(player.pitching)

        return PlayerGameLine(points=points, batting_stats=batting, pitching_stats=pitching)

    def normalize(self, boxscore: Boxscore, game_date: date) -> list[PlayerStats]:
        results: list[PlayerStats] = []
        sides: tuple[tuple[TeamBoxscore, TeamBoxscore, bool], ...] = (
            (boxscore.away, boxscore.home, False),
            (boxscore.home, boxscore.away, True),
        )
        for team, opponent, is_home in sides:
            for player in team.players:
                try:
                    stats = self._build(player, team, opponent, is_home, game_date, boxscore.game_id)
                except StatsValidationError as e:
                    logger.warning(
                        "Skipping player %s (%s) in game %d: %s",
                        player.person_id,
                        player.full_name or "unknown",
                        boxscore.game_id,
                        e,
                    )
                    continue
                if stats is not None:
                    results.append(stats)
        return results

    def _build(
        self,
        player: BoxscorePlayer,
        team: TeamBoxscore,
        opponent: TeamBoxscore,
        is_home: bool,
        game_date: date,
        game_id: int,
    ) -> PlayerStats | None:
        line = self.score_player(player)
        if not has_relevant_stats(line.batting_stats, line.pitching_stats):
            return None
        role = classify(player)
        return PlayerStats(
            id=player.person_id,
            name=player.full_name,
            team=team.label,
            opponent_team=opponent.label,
            position=role,
            points=line.points,
            game_date=game_date,
            batting_stats=line.batting_stats,
            pitching_stats=line.pitching_stats,
            is_position_player_pitching=is_position_player_pitching(role, line.pitching_stats.innings_pitched),
            is_home_team=is_home,
            game_id=game_id,
        )
