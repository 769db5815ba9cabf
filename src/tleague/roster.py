"""Roster management: rename, add, and bootstrap a league."""

import logging
from dataclasses import replace
from datetime import date
from typing import Iterable, Optional

from tleague.models import AppState, Player
from tleague.season import GROUP_SIZE, MONTH_NAMES, build_month

logger = logging.getLogger(__name__)


def rename_player(state: AppState, player_id: int, new_name: str) -> AppState:
    """Change a player's display name.

    The name is trimmed; a blank name or an unknown id leaves the state as is.
    """
    name = (new_name or "").strip()
    if not name:
        return state
    if state.get_player(player_id) is None:
        logger.debug("Player %s not found", player_id)
        return state

    players = [replace(p, name=name) if p.id == player_id else p for p in state.players]
    return replace(state, players=players)


def next_player_id(state: AppState) -> int:
    return max((p.id for p in state.players), default=0) + 1


def add_player(state: AppState, name: str) -> AppState:
    """Add a player with zeroed statistics.

    The new player is grouped at the next season advance. Blank names are
    ignored.
    """
    name = (name or "").strip()
    if not name:
        return state

    player = Player(id=next_player_id(state), name=name)
    logger.info("Added player %d: %s", player.id, player.name)
    return replace(state, players=list(state.players) + [player])


def new_league(
    names: Iterable[str],
    today: Optional[date] = None,
    group_size: int = GROUP_SIZE,
) -> AppState:
    """Start a league from a roster list.

    Players get ids 1..N in roster order and month 1 is grouped in that
    order (the roster is the initial seeding). The Master bracket stays a
    placeholder until the first result.
    """
    if today is None:
        today = date.today()

    players = []
    for name in names:
        name = name.strip()
        if name:
            players.append(Player(id=len(players) + 1, name=name))

    month = build_month(1, MONTH_NAMES[today.month - 1], players, group_size)
    return AppState(players=players, monthly_data=[month], current_month_index=0)
