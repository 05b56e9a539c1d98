"""Season-long fantasy totals grouped by position with a replacement line.

The replacement rank for a position is the number of starters the league rosters
there (teams x slots); the player at that rank sets the replacement points.
This report is informational and does not feed the scoring pipeline.
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field

from fantasy_points_tracker.dates import DEFAULT_TIMEZONE, Clock, infer_season, league_today, utc_now
from fantasy_points_tracker.domain.mlb_api import RawBatting, RawPitching, Split
from fantasy_points_tracker.domain.replacement import PositionReplacement, RankedPlayer, ReplacementReport, SeasonPlayer
from fantasy_points_tracker.ingest.protocols import StatsClient
from fantasy_points_tracker.scoring.points import DEFAULT_RULES, ScoringRules, score_batting, score_pitching
from fantasy_points_tracker.scoring.positions import full_position_name, position_group

logger = logging.getLogger(__name__)

DEFAULT_ROSTER_SLOTS: dict[str, int] = {
    "C": 1,
    "1B": 1,
    "2B": 1,
    "3B": 1,
    "SS": 1,
    "OF": 3,
    "DH": 1,
    "SP": 5,
    "RP": 3,
}

_POSITION_ORDER = ("C", "1B", "2B", "3B", "SS", "OF", "DH", "SP", "RP")


@dataclass(frozen=True)
class ReplacementConfig:
    team_count: int = 10
    roster_slots: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_ROSTER_SLOTS))


def parse_roster_slots(raw: str) -> dict[str, int]:
    """Parse ``"C:1,OF:3"`` into ``{"C": 1, "OF": 3}``."""
    slots: dict[str, int] = {}
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        position, _, count = chunk.partition(":")
        slots[position.strip()] = int(count)
    return slots


def hitter_from_split(split: Split, rules: ScoringRules = DEFAULT_RULES) -> SeasonPlayer | None:
    if split.games_played <= 0 or not split.team_name:
        return None
    return SeasonPlayer(
        id=split.player_id,
        full_name=split.full_name,
        team_name=split.team_name,
        position=position_group(split.position_abbreviation),
        points=score_batting(RawBatting.from_api(split.stat), rules),
        games_played=split.games_played,
    )


def pitcher_from_split(split: Split, rules: ScoringRules = DEFAULT_RULES) -> SeasonPlayer | None:
    """Only pitchers with a start, save or hold qualify; starters are "SP"."""
    raw = RawPitching.from_api(split.stat)
    if split.games_played <= 0 or not split.team_name:
        return None
    if not (raw.saves > 0 or (raw.holds or 0) > 0 or raw.games_started > 0):
        return None
    return SeasonPlayer(
        id=split.player_id,
        full_name=split.full_name,
        team_name=split.team_name,
        position="SP" if raw.games_started > 0 else "RP",
        points=score_pitching(raw, rules),
        games_played=split.games_played,
    )


def rank_position(position: str, players: list[SeasonPlayer], config: ReplacementConfig) -> PositionReplacement:
    ordered = sorted(players, key=lambda p: (-p.points, p.id))
    replacement_rank = config.team_count * config.roster_slots.get(position, 0)
    if replacement_rank > 0 and ordered:
        replacement_points = ordered[min(replacement_rank, len(ordered)) - 1].points
    else:
        replacement_points = 0.0
    ranked = tuple(
        RankedPlayer(
            player=p,
            rank=idx,
            points_above_replacement=p.points - replacement_points,
            is_startable=idx <= replacement_rank,
        )
        for idx, p in enumerate(ordered, start=1)
    )
    return PositionReplacement(
        position=position,
        position_name=full_position_name(position),
        replacement_rank=replacement_rank,
        replacement_points=replacement_points,
        players=ranked,
    )


class ReplacementLevelService:
    def __init__(
        self,
        client: StatsClient,
        config: ReplacementConfig | None = None,
        *,
        rules: ScoringRules = DEFAULT_RULES,
        timezone: str = DEFAULT_TIMEZONE,
        clock: Clock = utc_now,
    ) -> None:
        self._client = client
        self._config = config or ReplacementConfig()
        self._rules = rules
        self._timezone = timezone
        self._clock = clock

    def build(self, season: int | None = None) -> ReplacementReport:
        if season is None:
            season = infer_season(league_today(self._timezone, self._clock))

        with ThreadPoolExecutor(max_workers=2) as pool:
            hitting = pool.submit(self._client.get_season_splits, "hitting", season)
            pitching = pool.submit(self._client.get_season_splits, "pitching", season)
            hitting_splits = hitting.result()
            pitching_splits = pitching.result()

        by_position: dict[str, list[SeasonPlayer]] = defaultdict(list)
        for split in hitting_splits:
            player = hitter_from_split(split, self._rules)
            if player is not None:
                by_position[player.position].append(player)
        for split in pitching_splits:
            player = pitcher_from_split(split, self._rules)
            if player is not None:
                by_position[player.position].append(player)

        ordered_positions = [p for p in _POSITION_ORDER if p in by_position]
        ordered_positions += sorted(p for p in by_position if p not in _POSITION_ORDER)
        positions = tuple(rank_position(p, by_position[p], self._config) for p in ordered_positions)
        logger.info(
            "Built replacement levels for %d positions (%d players) in season %d",
            len(positions),
            sum(len(p.players) for p in positions),
            season,
        )
        return ReplacementReport(season=season, team_count=self._config.team_count, positions=positions)
