from fantasy_points_tracker.scoring.points import (
    DEFAULT_RULES,
    LEGACY_RULES,
    InningsConvention,
    ScoringRules,
    innings_to_outs,
    score_batting,
    score_pitching,
)
from fantasy_points_tracker.scoring.positions import classify, is_position_player_pitching

__all__ = [
    "DEFAULT_RULES",
    "LEGACY_RULES",
    "InningsConvention",
    "ScoringRules",
    "classify",
    "innings_to_outs",
    "is_position_player_pitching",
    "score_batting",
    "score_pitching",
]
