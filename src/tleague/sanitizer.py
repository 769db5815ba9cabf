"""State sanitizer: the admission gate for external league data.

Turns any decoded JSON value (bundled seed, uploaded backup, garbage) into a
well-formed AppState. Every field is defaulted independently when absent or
of the wrong type; nothing here raises.
"""

import logging
from typing import Any, Optional

from tleague.models import (
    UNKNOWN_PLAYER_NAME,
    AppState,
    BracketMatch,
    Group,
    Match,
    MonthlyData,
    Player,
    RoundType,
)

logger = logging.getLogger(__name__)

_PLAYER_COUNTERS = {
    "total_points": "totalPoints",
    "wins": "wins",
    "losses": "losses",
    "games_played": "gamesPlayed",
    "sets_won": "setsWon",
    "points_from_games": "pointsFromGames",
    "total_wo_wins": "totalWoWins",
    "total_wo_losses": "totalWoLosses",
    "monthly_points": "monthlyPoints",
    "monthly_wins": "monthlyWins",
    "monthly_losses": "monthlyLosses",
    "monthly_games_played": "monthlyGamesPlayed",
    "monthly_sets_won": "monthlySetsWon",
    "monthly_points_from_games": "monthlyPointsFromGames",
    "monthly_wo_wins": "monthlyWoWins",
    "monthly_wo_losses": "monthlyWoLosses",
}


# ============================================================================
# Field coercion
# ============================================================================


def _as_int(value: Any) -> Optional[int]:
    """Integer value of a JSON number, None for anything else (bools included)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def _int_field(raw: dict, key: str, default: int = 0) -> int:
    value = _as_int(raw.get(key))
    return default if value is None else value


def _optional_int_field(raw: dict, key: str) -> Optional[int]:
    return _as_int(raw.get(key))


def _str_field(raw: dict, key: str, default: str = "") -> str:
    value = raw.get(key)
    if isinstance(value, str):
        return value
    return default


def _id_field(raw: dict, key: str) -> str:
    """String id; numeric ids from hand-edited files are converted."""
    value = raw.get(key)
    if isinstance(value, str):
        return value
    if _as_int(value) is not None:
        return str(_as_int(value))
    return ""


def _optional_str_field(raw: dict, key: str) -> Optional[str]:
    value = raw.get(key)
    return value if isinstance(value, str) else None


def _bool_field(raw: dict, key: str) -> bool:
    value = raw.get(key)
    return value if isinstance(value, bool) else False


def _dict_items(value: Any, what: str) -> list[dict]:
    """Entries of a JSON list that are objects; anything else is dropped."""
    if not isinstance(value, list):
        return []
    items = [item for item in value if isinstance(item, dict)]
    if len(items) != len(value):
        logger.warning("Dropped %d malformed %s entries", len(value) - len(items), what)
    return items


# ============================================================================
# Entity sanitizers
# ============================================================================


def sanitize_player(raw: dict) -> Player:
    counters = {attr: _int_field(raw, key) for attr, key in _PLAYER_COUNTERS.items()}
    return Player(
        id=_int_field(raw, "id"),
        name=_str_field(raw, "name", UNKNOWN_PLAYER_NAME),
        **counters,
    )


def sanitize_match(raw: dict) -> Match:
    return Match(
        id=_id_field(raw, "id"),
        player1_id=_int_field(raw, "player1Id"),
        player2_id=_int_field(raw, "player2Id"),
        winner_id=_optional_int_field(raw, "winnerId"),
        score=_str_field(raw, "score"),
        is_wo=_bool_field(raw, "isWO"),
        is_not_played=_bool_field(raw, "isNotPlayed"),
    )


def sanitize_group(raw: dict) -> Group:
    player_ids = raw.get("playerIds")
    if isinstance(player_ids, list):
        player_ids = [_as_int(pid) for pid in player_ids]
        player_ids = [pid for pid in player_ids if pid is not None]
    else:
        player_ids = []
    return Group(
        id=_int_field(raw, "id"),
        name=_str_field(raw, "name"),
        player_ids=player_ids,
    )


def sanitize_monthly_data(raw: dict) -> MonthlyData:
    return MonthlyData(
        id=_int_field(raw, "id"),
        name=_str_field(raw, "name"),
        groups=[sanitize_group(g) for g in _dict_items(raw.get("groups"), "group")],
        matches=[sanitize_match(m) for m in _dict_items(raw.get("matches"), "match")],
    )


def sanitize_bracket_match(raw: dict) -> BracketMatch:
    try:
        round_type = RoundType(raw.get("round"))
    except ValueError:
        round_type = RoundType.ROUND_OF_16
    return BracketMatch(
        id=_id_field(raw, "id"),
        round=round_type,
        match_index=_int_field(raw, "matchIndex"),
        player1_id=_optional_int_field(raw, "player1Id"),
        player2_id=_optional_int_field(raw, "player2Id"),
        winner_id=_optional_int_field(raw, "winnerId"),
        score=_str_field(raw, "score"),
        source_match1_id=_optional_str_field(raw, "sourceMatch1Id"),
        source_match2_id=_optional_str_field(raw, "sourceMatch2Id"),
    )


def sanitize_state(raw: Any) -> AppState:
    """Normalize arbitrary decoded JSON into a valid AppState.

    Args:
        raw: Anything (dict from json.load, None, a list, ...)

    Returns:
        AppState with every field defaulted, duplicate player ids dropped and
        current_month_index clamped into the monthly_data range (0 when empty)

    Examples:
        >>> sanitize_state({})
        AppState(players=[], monthly_data=[], current_month_index=0, master_bracket=[])
    """
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("State is a %s, not an object; starting empty", type(raw).__name__)
        raw = {}

    players = []
    seen_ids = set()
    for item in _dict_items(raw.get("players"), "player"):
        player = sanitize_player(item)
        if player.id in seen_ids:
            logger.warning("Duplicate player id %d (%s) dropped", player.id, player.name)
            continue
        seen_ids.add(player.id)
        players.append(player)

    monthly_data = [sanitize_monthly_data(m) for m in _dict_items(raw.get("monthlyData"), "month")]
    master_bracket = [
        sanitize_bracket_match(b) for b in _dict_items(raw.get("masterBracket"), "bracket match")
    ]

    current_month_index = _int_field(raw, "currentMonthIndex")
    clamped = min(max(current_month_index, 0), max(len(monthly_data) - 1, 0))
    if clamped != current_month_index:
        logger.warning("currentMonthIndex %d out of range, using %d", current_month_index, clamped)

    return AppState(
        players=players,
        monthly_data=monthly_data,
        current_month_index=clamped,
        master_bracket=master_bracket,
    )
