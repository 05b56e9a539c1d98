from __future__ import annotations

from dataclasses import dataclass, field

from config import ConfigurationSet, config_from_dict, config_from_env, config_from_yaml

from fantasy_points_tracker.exceptions import InvalidInputError
from fantasy_points_tracker.services.replacement_level import DEFAULT_ROSTER_SLOTS, parse_roster_slots

_DEFAULTS: dict[str, object] = {
    "database": {
        "path": "~/.config/fpt/stats.db",
    },
    "league": {
        "timezone": "America/New_York",
        "season_start": "03-01",
    },
    "mlb": {
        "base_url": "https://statsapi.mlb.com/api/v1",
        "timeout": 10.0,
        "retry_attempts": 3,
        "retry_delay": 1.0,
    },
    "espn": {
        "swid": "",
        "espn_s2": "",
        "league_id": "",
        "season": 0,
        "segment": 0,
    },
    "replacement": {
        "team_count": 10,
        "roster_slots": "C:1,1B:1,2B:1,3B:1,SS:1,OF:3,DH:1,SP:5,RP:3",
    },
}


@dataclass(frozen=True)
class Settings:
    db_path: str = "~/.config/fpt/stats.db"
    timezone: str = "America/New_York"
    season_start: tuple[int, int] = (3, 1)
    mlb_base_url: str = "https://statsapi.mlb.com/api/v1"
    mlb_timeout: float = 10.0
    retry_attempts: int = 3
    retry_delay: float = 1.0
    espn_swid: str = ""
    espn_s2: str = ""
    espn_league_id: str = ""
    espn_season: int | None = None
    espn_segment: int = 0
    team_count: int = 10
    roster_slots: dict[str, int] = field(default_factory=lambda: dict(DEFAULT_ROSTER_SLOTS))

    @property
    def has_espn_credentials(self) -> bool:
        return bool(self.espn_swid and self.espn_s2 and self.espn_league_id)


def create_config(
    yaml_path: str = "fpt.yaml",
    env_prefix: str = "FPT",
    defaults: dict[str, object] | None = None,
    *,
    overrides: dict[str, object] | None = None,
) -> ConfigurationSet:
    """Create a layered configuration.

    Priority (highest to lowest): explicit overrides > env vars > YAML file > defaults dict.
    """
    if defaults is None:
        defaults = _DEFAULTS

    layers = [
        config_from_env(env_prefix, separator="__", lowercase_keys=True),
        config_from_yaml(yaml_path, read_from_file=True, ignore_missing_paths=True),
        config_from_dict(defaults),
    ]
    if overrides:
        layers.insert(0, config_from_dict(overrides))
    return ConfigurationSet(*layers)


def parse_season_start(raw: str) -> tuple[int, int]:
    """``"03-01"`` -> ``(3, 1)``."""
    month, sep, day = str(raw).partition("-")
    try:
        parsed = (int(month), int(day))
    except ValueError:
        parsed = (0, 0)
    if not sep or not 1 <= parsed[0] <= 12 or not 1 <= parsed[1] <= 31:
        raise InvalidInputError(f"Invalid league.season_start {raw!r}; expected MM-DD")
    return parsed


def load_settings(cfg: ConfigurationSet | None = None) -> Settings:
    if cfg is None:
        cfg = create_config()
    espn_season = int(str(cfg["espn.season"]))
    try:
        roster_slots = parse_roster_slots(str(cfg["replacement.roster_slots"]))
    except ValueError as e:
        raise InvalidInputError(f"Invalid replacement.roster_slots: {e}") from e
    return Settings(
        db_path=str(cfg["database.path"]),
        timezone=str(cfg["league.timezone"]),
        season_start=parse_season_start(str(cfg["league.season_start"])),
        mlb_base_url=str(cfg["mlb.base_url"]),
        mlb_timeout=float(str(cfg["mlb.timeout"])),
        retry_attempts=int(str(cfg["mlb.retry_attempts"])),
        retry_delay=float(str(cfg["mlb.retry_delay"])),
        espn_swid=str(cfg["espn.swid"]),
        espn_s2=str(cfg["espn.espn_s2"]),
        espn_league_id=str(cfg["espn.league_id"]),
        espn_season=espn_season or None,
        espn_segment=int(str(cfg["espn.segment"])),
        team_count=int(str(cfg["replacement.team_count"])),
        roster_slots=roster_slots,
    )
