import logging
from dataclasses import dataclass
from datetime import date
from typing import Any

from fantasy_points_tracker.dates import (
    DEFAULT_TIMEZONE,
    Clock,
    availability_message,
    league_today,
    league_yesterday,
    parse_date,
    utc_now,
)
from fantasy_points_tracker.domain.player_stats import PlayerStats
from fantasy_points_tracker.exceptions import FptException, PersistenceError
from fantasy_points_tracker.ingest.protocols import StatsClient
from fantasy_points_tracker.repos.protocols import PlayerStatsRepo
from fantasy_points_tracker.services.stats_normalizer import StatsNormalizer

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DailyStats:
    date: date
    stats: list[PlayerStats]
    message: str | None = None
    from_cache: bool = False

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "stats": [s.to_dict() for s in self.stats],
            "date": self.date.isoformat(),
        }
        if self.message is not None:
            data["message"] = self.message
        return data


class StatsPipeline:
    """Read-through cache over the upstream boxscores for one date.

    Flow: resolve the date, consult the repository unless bypassed, fetch and
    normalize on a miss, then write back unless the date is today in the
    league's timezone. Today's games may still be in progress, so they are
    always served live and never persisted.
    """

    def __init__(
        self,
        client: StatsClient,
        normalizer: StatsNormalizer,
        repo: PlayerStatsRepo | None = None,
        *,
        timezone: str = DEFAULT_TIMEZONE,
        clock: Clock = utc_now,
        season_start: tuple[int, int] = (3, 1),
    ) -> None:
        self._client = client
        self._normalizer = normalizer
        self._repo = repo
        self._timezone = timezone
        self._clock = clock
        self._season_start = season_start

    def resolve_date(self, requested: str | None) -> date:
        if requested:
            return parse_date(requested)
        return league_yesterday(self._timezone, self._clock)

    def get_stats(self, requested_date: str | None = None, *, no_cache: bool = False) -> DailyStats:
        day = self.resolve_date(requested_date)
        today = league_today(self._timezone, self._clock)

        if not no_cache:
            cached = self._read_cache(day)
            if cached:
                logger.info("Cache hit for %s (%d players)", day, len(cached))
                return DailyStats(date=day, stats=cached, from_cache=True)
            logger.info("Cache miss for %s", day)

        games = self._client.get_games_by_date(day.isoformat())
        if not games:
            return DailyStats(
                date=day,
                stats=[],
                message=availability_message(day, today, season_start=self._season_start),
            )

        stats = self._fetch_games(day, [g.game_id for g in games])
        if not stats:
            return DailyStats(
                date=day,
                stats=[],
                message=availability_message(day, today, has_games=True, season_start=self._season_start),
            )

        if day != today:
            self._write_cache(day, stats)
        else:
            logger.info("Not caching %s: games may still be in progress", day)
        return DailyStats(date=day, stats=stats)

    def _fetch_games(self, day: date, game_ids: list[int]) -> list[PlayerStats]:
        stats: list[PlayerStats] = []
        for game_id in game_ids:
            try:
                boxscore = self._client.get_game_boxscore(game_id)
                stats.extend(self._normalizer.normalize(boxscore, day))
            except FptException as e:
                logger.error("Error processing game %d on %s: %s", game_id, day, e.message)
            except Exception:
                logger.exception("Unexpected error processing game %d on %s", game_id, day)
        return stats

    def _read_cache(self, day: date) -> list[PlayerStats]:
        if self._repo is None:
            return []
        try:
            return self._repo.find_by_date(day)
        except PersistenceError as e:
            logger.error("Cache read failed for %s, falling back to upstream: %s", day, e.message)
            return []

    def _write_cache(self, day: date, stats: list[PlayerStats]) -> None:
        if self._repo is None:
            return
        try:
            self._repo.save_batch(stats)
        except PersistenceError as e:
            logger.warning("Cache write failed for %s: %s", day, e.message)
            return
        logger.info("Cached %d player stats for %s", len(stats), day)
