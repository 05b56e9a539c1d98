"""Fantasy point scoring for batting and pitching lines.

Pitching innings are scored per recorded out by default. The older flat
"points per decimal inning" table is kept as ``LEGACY_RULES`` and has to be
chosen explicitly.
"""

import re
from dataclasses import dataclass
from enum import Enum

from fantasy_points_tracker.domain.mlb_api import RawBatting, RawPitching

_INNINGS_RE = re.compile(r"^\s*(\d+)(?:\.(\d+))?\s*$")


class InningsConvention(Enum):
    PER_OUT = "per_out"
    PER_INNING = "per_inning"


@dataclass(frozen=True)
class ScoringRules:
    # Batting
    total_bases: float = 1
    walks: float = 1
    runs: float = 1
    rbi: float = 1
    stolen_bases: float = 1
    strikeouts: float = -1

    # Pitching
    innings_convention: InningsConvention = InningsConvention.PER_OUT
    per_out: float = 1
    per_inning: float = 3
    earned_runs: float = -2
    wins: float = 2
    losses: float = -2
    saves: float = 5
    pitching_strikeouts: float = 1
    hits_allowed: float = -1
    walks_issued: float = -1
    holds: float = 2


DEFAULT_RULES = ScoringRules()
LEGACY_RULES = ScoringRules(innings_convention=InningsConvention.PER_INNING)


def innings_to_outs(innings: str | float | None) -> int:
    """Convert baseball innings notation ("6.2") to recorded outs (20).

    Missing or malformed values count as zero outs.
    """
    if innings is None:
        return 0
    match = _INNINGS_RE.match(str(innings))
    if match is None:
        return 0
    whole, partial = match.groups()
    return int(whole) * 3 + (int(partial) if partial else 0)


def innings_as_decimal(innings: str | float | None) -> float:
    if innings is None:
        return 0.0
    try:
        return float(innings)
    except (TypeError, ValueError):
        return 0.0


def total_bases(stats: RawBatting) -> int:
    singles = max(0, stats.hits - stats.doubles - stats.triples - stats.home_runs)
    return singles + stats.doubles * 2 + stats.triples * 3 + stats.home_runs * 4


def score_batting(stats: RawBatting, rules: ScoringRules = DEFAULT_RULES) -> float:
    return (
        total_bases(stats) * rules.total_bases
        + stats.walks * rules.walks
        + stats.runs * rules.runs
        + stats.rbi * rules.rbi
        + stats.stolen_bases * rules.stolen_bases
        + stats.strikeouts * rules.strikeouts
    )


def score_innings(innings: str | float | None, rules: ScoringRules = DEFAULT_RULES) -> float:
    if rules.innings_convention is InningsConvention.PER_INNING:
        return innings_as_decimal(innings) * rules.per_inning
    return innings_to_outs(innings) * rules.per_out


def score_pitching(stats: RawPitching, rules: ScoringRules = DEFAULT_RULES) -> float:
    return (
        score_innings(stats.innings_pitched, rules)
        + stats.earned_runs * rules.earned_runs
        + stats.wins * rules.wins
        + stats.losses * rules.losses
        + stats.saves * rules.saves
        + stats.strikeouts * rules.pitching_strikeouts
        + stats.hits_allowed * rules.hits_allowed
        + stats.walks_issued * rules.walks_issued
        + (stats.holds or 0) * rules.holds
    )
