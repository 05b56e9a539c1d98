import logging
import sqlite3
import threading
from datetime import date
from typing import Any

from fantasy_points_tracker.db.connection import run_migrations
from fantasy_points_tracker.domain.batting_stats import BattingStats
from fantasy_points_tracker.domain.pitching_stats import PitchingStats
from fantasy_points_tracker.domain.player_stats import PlayerStats
from fantasy_points_tracker.exceptions import PersistenceError

logger = logging.getLogger(__name__)

_UPSERT_SQL = """INSERT INTO player_stats
       (player_id, game_date, game_id, name, team, opponent_team, position,
        is_home_team, is_position_player_pitching,
        at_bats, hits, home_runs, rbi, runs, stolen_bases, strikeouts, walks,
        innings_pitched, earned_runs, pitching_strikeouts, hits_allowed, walks_issued,
        wins, losses, saves, holds, games_started, points)
   VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
   ON CONFLICT(player_id, game_date, game_id) DO UPDATE SET
       name=excluded.name, team=excluded.team, opponent_team=excluded.opponent_team,
       position=excluded.position, is_home_team=excluded.is_home_team,
       is_position_player_pitching=excluded.is_position_player_pitching,
       at_bats=excluded.at_bats, hits=excluded.hits, home_runs=excluded.home_runs,
       rbi=excluded.rbi, runs=excluded.runs, stolen_bases=excluded.stolen_bases,
       strikeouts=excluded.strikeouts, walks=excluded.walks,
       innings_pitched=excluded.innings_pitched, earned_runs=excluded.earned_runs,
       pitching_strikeouts=excluded.pitching_strikeouts, hits_allowed=excluded.hits_allowed,
       walks_issued=excluded.walks_issued, wins=excluded.wins, losses=excluded.losses,
       saves=excluded.saves, holds=excluded.holds, games_started=excluded.games_started,
       points=excluded.points, loaded_at=datetime('now')"""


class SqlitePlayerStatsRepo:
    """Date-keyed store of player-game fantasy lines.

    Knows nothing about freshness: it stores what it is given and returns what
    matches the date.
    """

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn
        self._lock = threading.Lock()

    def ensure_schema(self) -> None:
        with self._lock:
            try:
                run_migrations(self._conn)
            except sqlite3.Error as e:
                raise PersistenceError(f"Failed to create tables: {e}") from e

    def find_by_date(self, game_date: date) -> list[PlayerStats]:
        with self._lock:
            try:
                rows = self._conn.execute(
                    "SELECT * FROM player_stats WHERE game_date = ? ORDER BY points DESC, id ASC",
                    (game_date.isoformat(),),
                ).fetchall()
            except sqlite3.Error as e:
                raise PersistenceError(f"Failed to find player stats by date: {e}") from e
        return [self._row_to_stats(row) for row in rows]

    def save(self, stats: PlayerStats) -> None:
        self.save_batch([stats])

    def save_batch(self, stats: list[PlayerStats]) -> None:
        if not stats:
            return
        with self._lock:
            try:
                with self._conn:
                    self._conn.executemany(_UPSERT_SQL, [self._to_params(s) for s in stats])
            except sqlite3.Error as e:
                raise PersistenceError(f"Failed to save player stats batch: {e}") from e
        logger.debug("Saved %d player stats rows", len(stats))

    @staticmethod
    def _to_params(stats: PlayerStats) -> tuple[Any, ...]:
        batting = stats.batting_stats
        pitching = stats.pitching_stats
        return (
            stats.id,
            stats.game_date.isoformat(),
            stats.game_id,
            stats.name,
            stats.team,
            stats.opponent_team,
            stats.position,
            None if stats.is_home_team is None else int(stats.is_home_team),
            int(stats.is_position_player_pitching),
            batting.at_bats,
            batting.hits,
            batting.home_runs,
            batting.rbi,
            batting.runs,
            batting.stolen_bases,
            batting.strikeouts,
            batting.walks,
            pitching.innings_pitched,
            pitching.earned_runs,
            pitching.pitching_strikeouts,
            pitching.hits_allowed,
            pitching.walks_issued,
            pitching.wins,
            pitching.losses,
            pitching.saves,
            pitching.holds,
            pitching.games_started,
            stats.points,
        )

    @staticmethod
    def _row_to_stats(row: sqlite3.Row) -> PlayerStats:
        return PlayerStats(
            id=row["player_id"],
            name=row["name"],
            team=row["team"],
            opponent_team=row["opponent_team"],
            position=row["position"],
            points=row["points"],
            game_date=date.fromisoformat(row["game_date"]),
            batting_stats=BattingStats(
                at_bats=row["at_bats"],
                hits=row["hits"],
                home_runs=row["home_runs"],
                rbi=row["rbi"],
                runs=row["runs"],
                stolen_bases=row["stolen_bases"],
                strikeouts=row["strikeouts"],
                walks=row["walks"],
            ),
            pitching_stats=PitchingStats(
                innings_pitched=row["innings_pitched"],
                earned_runs=row["earned_runs"],
                pitching_strikeouts=row["pitching_strikeouts"],
                hits_allowed=row["hits_allowed"],
                walks_issued=row["walks_issued"],
                wins=row["wins"],
                losses=row["losses"],
                saves=row["saves"],
                holds=row["holds"],
                games_started=row["games_started"],
            ),
            is_position_player_pitching=bool(row["is_position_player_pitching"]),
            is_home_team=None if row["is_home_team"] is None else bool(row["is_home_team"]),
            game_id=row["game_id"],
        )
