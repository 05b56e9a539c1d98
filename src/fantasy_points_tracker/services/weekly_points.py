import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import date, timedelta

from fantasy_points_tracker.dates import DEFAULT_TIMEZONE, Clock, infer_season, league_today, parse_date, utc_now
from fantasy_points_tracker.domain.mlb_api import RawBatting, RawPitching, Split
from fantasy_points_tracker.domain.player_weekly import PlayerWeekly
from fantasy_points_tracker.espn.roster_annotator import RosterAnnotator
from fantasy_points_tracker.ingest.date_utils import season_start_date, week_windows
from fantasy_points_tracker.ingest.protocols import StatsClient
from fantasy_points_tracker.scoring.points import DEFAULT_RULES, ScoringRules, score_batting, score_pitching

logger = logging.getLogger(__name__)


@dataclass
class _PlayerAccumulator:
    id: int
    full_name: str
    team_name: str
    position_abbr: str
    weekly_points: list[float]
    total_points: float = 0.0

    def add(self, week: int, points: float) -> None:
        self.weekly_points[week] += points
        self.total_points += points

    def freeze(self) -> PlayerWeekly:
        return PlayerWeekly(
            id=self.id,
            full_name=self.full_name,
            team_name=self.team_name,
            position_abbr=self.position_abbr,
            weekly_points=tuple(self.weekly_points),
            total_points=self.total_points,
        )


@dataclass(frozen=True)
class WeeklyPointsReport:
    season: int
    weeks: list[tuple[date, date]]
    players: list[PlayerWeekly] = field(default_factory=list)

    @property
    def last_complete_week(self) -> int:
        """Index of the last full 7-day window, or -1 if none is complete."""
        for idx in range(len(self.weeks) - 1, -1, -1):
            start, end = self.weeks[idx]
            if end - start == timedelta(days=6):
                return idx
        return -1


def resolve_season_window(
    today: date,
    season: int | None = None,
    end_date: str | None = None,
) -> tuple[int, date]:
    """Pick the season and the last date to include.

    An explicit ``end_date`` wins. Without one, asking for a season later than
    today's year moves "today" into that year (Feb 29 becomes Feb 28).
    """
    current = parse_date(end_date) if end_date else today
    if end_date is None and season is not None and season > current.year:
        try:
            current = current.replace(year=season)
        except ValueError:
            current = current.replace(year=season, day=28)
    resolved = season if season is not None else infer_season(current)
    return resolved, current


class WeeklyPointsAggregator:
    """Per-player fantasy points for each ISO week of a season.

    Weeks are fetched one after another; within a week the hitting and
    pitching splits are fetched concurrently and joined before moving on.
    """

    def __init__(
        self,
        client: StatsClient,
        *,
        rules: ScoringRules = DEFAULT_RULES,
        roster_annotator: RosterAnnotator | None = None,
        timezone: str = DEFAULT_TIMEZONE,
        clock: Clock = utc_now,
        season_start: tuple[int, int] = (3, 1),
    ) -> None:
        self._client = client
        self._rules = rules
        self._roster_annotator = roster_annotator
        self._timezone = timezone
        self._clock = clock
        self._season_start = season_start

    def aggregate(self, season: int | None = None, end_date: str | None = None) -> WeeklyPointsReport:
        today = league_today(self._timezone, self._clock)
        season, current = resolve_season_window(today, season, end_date)
        end = min(current, date(season, 12, 31))
        weeks = week_windows(season_start_date(season, self._season_start), end)
        logger.info("Aggregating %d weeks for season %d through %s", len(weeks), season, end)

        players: dict[int, _PlayerAccumulator] = {}
        with ThreadPoolExecutor(max_workers=2) as pool:
            for week, (start, stop) in enumerate(weeks):
                hitting = pool.submit(self._client.get_season_splits, "hitting", season, start.isoformat(), stop.isoformat())
                pitching = pool.submit(self._client.get_season_splits, "pitching", season, start.isoformat(), stop.isoformat())
                hitting_splits = hitting.result()
                pitching_splits = pitching.result()

                for split in hitting_splits:
                    self._accumulate(players, split, week, len(weeks), score_batting(RawBatting.from_api(split.stat), self._rules))
                for split in pitching_splits:
                    self._accumulate(players, split, week, len(weeks), score_pitching(RawPitching.from_api(split.stat), self._rules))

        result = [acc.freeze() for acc in players.values()]
        if self._roster_annotator is not None:
            result = self._roster_annotator.annotate(result, season)
        result.sort(key=lambda p: (-p.total_points, p.id))
        return WeeklyPointsReport(season=season, weeks=weeks, players=result)

    @staticmethod
    def _accumulate(
        players: dict[int, _PlayerAccumulator],
        split: Split,
        week: int,
        week_count: int,
        points: float,
    ) -> None:
        if split.games_played == 0:
            return
        acc = players.get(split.player_id)
        if acc is None:
            acc = _PlayerAccumulator(
                id=split.player_id,
                full_name=split.full_name,
                team_name=split.team_name,
                position_abbr=split.position_abbreviation,
                weekly_points=[0.0] * week_count,
            )
            players[split.player_id] = acc
        acc.add(week, points)
