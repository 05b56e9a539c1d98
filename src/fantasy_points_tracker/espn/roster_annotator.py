import dataclasses
import logging
import unicodedata
from typing import Protocol

from fantasy_points_tracker.domain.player_weekly import PlayerWeekly
from fantasy_points_tracker.exceptions import FptException

logger = logging.getLogger(__name__)


class RosterSource(Protocol):
    def fetch_rostered_player_names(self, league_id: str, season: int, segment: int = 0) -> set[str]: ...


def normalize_name(name: str) -> str:
    """Lowercase and strip accents so "José Ramírez" matches "jose ramirez"."""
    normalized = unicodedata.normalize("NFD", name)
    normalized = "".join(c for c in normalized if unicodedata.category(c) != "Mn")
    return normalized.lower().strip()


class RosterAnnotator:
    """Flags players who are on a roster in the configured fantasy league.

    Enrichment is best effort: when the league cannot be read the players are
    returned unchanged.
    """

    def __init__(
        self,
        source: RosterSource,
        league_id: str,
        *,
        season_override: int | None = None,
        segment: int = 0,
    ) -> None:
        self._source = source
        self._league_id = league_id
        self._season_override = season_override
        self._segment = segment

    def annotate(self, players: list[PlayerWeekly], season: int) -> list[PlayerWeekly]:
        roster_season = self._season_override or season
        try:
            names = self._source.fetch_rostered_player_names(self._league_id, roster_season, self._segment)
        except (FptException, ValueError) as e:
            logger.warning("Roster enrichment failed for league %s season %d: %s", self._league_id, roster_season, e)
            return players

        rostered = {normalize_name(n) for n in names}
        logger.info("Loaded %d rostered players for league %s", len(rostered), self._league_id)
        return [dataclasses.replace(p, is_rostered=normalize_name(p.full_name) in rostered) for p in players]
