from fantasy_points_tracker.domain.mlb_api import BoxscorePlayer
from fantasy_points_tracker.scoring.points import innings_as_decimal

STARTER_INNINGS_THRESHOLD = 4.0

PITCHER_ROLES = frozenset({"SP", "RP", "P"})

OUTFIELD_CODES = frozenset({"7", "8", "9", "LF", "CF", "RF", "OF"})

POSITION_NAMES: dict[str, str] = {
    "1": "Pitcher",
    "2": "Catcher",
    "3": "First Base",
    "4": "Second Base",
    "5": "Third Base",
    "6": "Shortstop",
    "7": "Outfield",
    "8": "Outfield",
    "9": "Outfield",
    "10": "Designated Hitter",
    "P": "Pitcher",
    "C": "Catcher",
    "1B": "First Base",
    "2B": "Second Base",
    "3B": "Third Base",
    "SS": "Shortstop",
    "LF": "Outfield",
    "CF": "Outfield",
    "RF": "Outfield",
    "OF": "Outfield",
    "DH": "Designated Hitter",
    "SP": "Starting Pitcher",
    "RP": "Relief Pitcher",
    "UTIL": "Utility",
    "Unknown": "Unknown",
}


def classify(player: BoxscorePlayer) -> str:
    """Resolve a player's role for one game.

    First match wins: no pitching appearance keeps the nominal position; a
    start is "SP"; a save or any reported hold (zero included) is "RP";
    otherwise four or more innings is "SP" and anything less is "RP".
    """
    pitching = player.pitching
    if pitching is None or not pitching.games_played:
        return player.position_abbreviation
    if pitching.games_started > 0:
        return "SP"
    if pitching.saves > 0 or pitching.holds is not None:
        return "RP"
    if innings_as_decimal(pitching.innings_pitched) >= STARTER_INNINGS_THRESHOLD:
        return "SP"
    return "RP"


def is_position_player_pitching(role: str, innings_pitched: float) -> bool:
    return role not in PITCHER_ROLES and innings_pitched > 0


def is_pitcher_position(code: str) -> bool:
    return code in {"1", "P", "SP", "RP"}


def is_outfield_position(code: str) -> bool:
    return code in OUTFIELD_CODES


def full_position_name(code: str) -> str:
    return POSITION_NAMES.get(code, code)


def position_group(code: str) -> str:
    """Collapse outfield codes to "OF" for grouping."""
    if is_outfield_position(code):
        return "OF"
    return code
