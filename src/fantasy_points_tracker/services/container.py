"""Service container shared by the CLI and the web app."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from functools import cached_property
from typing import TYPE_CHECKING

from fantasy_points_tracker.dates import utc_now

if TYPE_CHECKING:
    from fantasy_points_tracker.config import Settings
    from fantasy_points_tracker.dates import Clock
    from fantasy_points_tracker.espn.roster_annotator import RosterAnnotator, RosterSource
    from fantasy_points_tracker.ingest.protocols import StatsClient
    from fantasy_points_tracker.repos.protocols import PlayerStatsRepo
    from fantasy_points_tracker.services.replacement_level import ReplacementLevelService
    from fantasy_points_tracker.services.stats_normalizer import StatsNormalizer
    from fantasy_points_tracker.services.stats_pipeline import StatsPipeline
    from fantasy_points_tracker.services.weekly_points import WeeklyPointsAggregator

logger = logging.getLogger(__name__)


class ServiceContainer:
    """Lazily-initialized container for service dependencies.

    Supports explicit injection for testing via constructor parameters.
    When dependencies are not provided, they are created on first access
    from ``settings``.
    """

    def __init__(
        self,
        settings: Settings,
        *,
        mlb_client: StatsClient | None = None,
        repo: PlayerStatsRepo | None = None,
        roster_source: RosterSource | None = None,
        clock: Clock | None = None,
    ) -> None:
        self._settings = settings
        self._mlb_client = mlb_client
        self._repo = repo
        self._roster_source = roster_source
        self._clock = clock or utc_now
        self._owned: list[object] = []

    @property
    def settings(self) -> Settings:
        return self._settings

    def now(self) -> datetime:
        return self._clock()

    @cached_property
    def mlb_client(self) -> StatsClient:
        if self._mlb_client is not None:
            return self._mlb_client
        from fantasy_points_tracker.ingest._retry import transient_http_retry
        from fantasy_points_tracker.ingest.mlb_stats_client import MLBStatsClient

        client = MLBStatsClient(
            base_url=self._settings.mlb_base_url,
            timeout=self._settings.mlb_timeout,
            retry=transient_http_retry(
                "MLB API request",
                attempts=self._settings.retry_attempts,
                delay=self._settings.retry_delay,
            ),
            timezone=self._settings.timezone,
            clock=self._clock,
        )
        self._owned.append(client)
        return client

    @cached_property
    def connection(self) -> sqlite3.Connection:
        from fantasy_points_tracker.db.connection import create_connection

        conn = create_connection(self._settings.db_path, check_same_thread=False)
        self._owned.append(conn)
        return conn

    @cached_property
    def repo(self) -> PlayerStatsRepo:
        if self._repo is not None:
            return self._repo
        from fantasy_points_tracker.repos.player_stats_repo import SqlitePlayerStatsRepo

        repo = SqlitePlayerStatsRepo(self.connection)
        repo.ensure_schema()
        return repo

    @cached_property
    def normalizer(self) -> StatsNormalizer:
        from fantasy_points_tracker.services.stats_normalizer import StatsNormalizer

        return StatsNormalizer()

    @cached_property
    def pipeline(self) -> StatsPipeline:
        from fantasy_points_tracker.services.stats_pipeline import StatsPipeline

        return StatsPipeline(
            self.mlb_client,
            self.normalizer,
            self.repo,
            timezone=self._settings.timezone,
            clock=self._clock,
            season_start=self._settings.season_start,
        )

    @cached_property
    def roster_annotator(self) -> RosterAnnotator | None:
        from fantasy_points_tracker.espn.roster_annotator import RosterAnnotator

        if not self._settings.espn_league_id:
            return None
        source = self._roster_source
        if source is None:
            if not self._settings.has_espn_credentials:
                logger.debug("ESPN credentials not configured; roster annotation disabled")
                return None
            from fantasy_points_tracker.espn.client import ESPNFantasyClient

            client = ESPNFantasyClient(self._settings.espn_swid, self._settings.espn_s2)
            self._owned.append(client)
            source = client
        return RosterAnnotator(
            source,
            self._settings.espn_league_id,
            season_override=self._settings.espn_season,
            segment=self._settings.espn_segment,
        )

    @cached_property
    def weekly_aggregator(self) -> WeeklyPointsAggregator:
        from fantasy_points_tracker.services.weekly_points import WeeklyPointsAggregator

        return WeeklyPointsAggregator(
            self.mlb_client,
            roster_annotator=self.roster_annotator,
            timezone=self._settings.timezone,
            clock=self._clock,
            season_start=self._settings.season_start,
        )

    @cached_property
    def replacement_service(self) -> ReplacementLevelService:
        from fantasy_points_tracker.services.replacement_level import ReplacementConfig, ReplacementLevelService

        return ReplacementLevelService(
            self.mlb_client,
            ReplacementConfig(team_count=self._settings.team_count, roster_slots=dict(self._settings.roster_slots)),
            timezone=self._settings.timezone,
            clock=self._clock,
        )

    def close(self) -> None:
        """Close the clients and connection this container created."""
        for resource in reversed(self._owned):
            resource.close()  # type: ignore[attr-defined]
        self._owned.clear()
