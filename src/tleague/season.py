"""Season advance: close the month, regroup by standings, reseed the Master."""

import logging
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from tleague.bracket import generate_master_bracket
from tleague.models import AppState, Group, Match, MonthlyData, Player
from tleague.standings import master_contenders, rank_players
from tleague.stats import reset_monthly

logger = logging.getLogger(__name__)

GROUP_SIZE = 4

MONTH_NAMES = [
    "Janeiro",
    "Fevereiro",
    "Março",
    "Abril",
    "Maio",
    "Junho",
    "Julho",
    "Agosto",
    "Setembro",
    "Outubro",
    "Novembro",
    "Dezembro",
]


def partition_into_groups(players: Sequence[Player], group_size: int = GROUP_SIZE) -> list[list[Player]]:
    """Cut a ranked list into consecutive groups.

    Group 1 gets the top group_size players, group 2 the next ones, and so on.
    The last group is short when the roster is not a multiple of group_size.

    Examples:
        14 players, size 4 -> sizes [4, 4, 4, 2]
    """
    if group_size < 1:
        raise ValueError(f"Group size must be at least 1, got {group_size}")
    return [list(players[i : i + group_size]) for i in range(0, len(players), group_size)]


def generate_round_robin_pairs(player_ids: Sequence[int]) -> list[tuple[int, int]]:
    """Every pairing within a group, in roster order.

    For 4 players: (1,2), (1,3), (1,4), (2,3), (2,4), (3,4)
    """
    pairs = []
    for i in range(len(player_ids)):
        for j in range(i + 1, len(player_ids)):
            pairs.append((player_ids[i], player_ids[j]))
    return pairs


def group_match_id(month_id: int, group_id: int, player1_id: int, player2_id: int) -> str:
    return f"m{month_id}-g{group_id}-p{player1_id}-vs-p{player2_id}"


def build_month(
    month_id: int,
    name: str,
    ranked_players: Sequence[Player],
    group_size: int = GROUP_SIZE,
) -> MonthlyData:
    """Create a month's groups and all of their undecided matches.

    Args:
        month_id: Sequential id of the new month
        name: Display name ("Março")
        ranked_players: Players in group order (best first)
        group_size: Players per group

    Returns:
        MonthlyData with groups "Grupo 1", "Grupo 2", ... and their fixtures
    """
    groups = []
    matches = []

    for group_idx, members in enumerate(partition_into_groups(ranked_players, group_size), start=1):
        group = Group(id=group_idx, name=f"Grupo {group_idx}", player_ids=[p.id for p in members])
        groups.append(group)

        for p1_id, p2_id in generate_round_robin_pairs(group.player_ids):
            matches.append(
                Match(
                    id=group_match_id(month_id, group.id, p1_id, p2_id),
                    player1_id=p1_id,
                    player2_id=p2_id,
                )
            )

    return MonthlyData(id=month_id, name=name, groups=groups, matches=matches)


def next_month_name(current_month_index: int, today: Optional[date] = None) -> str:
    """Calendar name for the month after current_month_index.

    Offsets the wall-clock month by the number of seasons already played.
    """
    if today is None:
        today = date.today()
    return MONTH_NAMES[(today.month - 1 + current_month_index + 1) % 12]


def advance_season(
    state: AppState,
    today: Optional[date] = None,
    group_size: int = GROUP_SIZE,
) -> AppState:
    """Close the current month and open the next one.

    - Monthly counters of every player go back to zero (lifetime kept)
    - New groups are cut from the overall ranking, with round-robin fixtures
    - The new month is appended and becomes current
    - The Master bracket is regenerated from the top 16, discarding any
      bracket in progress

    Confirmation is the caller's concern.

    Args:
        state: League snapshot
        today: Date used to name the new month (default: today)
        group_size: Players per group

    Returns:
        New state
    """
    ranked = rank_players(state.players)
    current = state.current_month

    if current is None:
        new_month_id = max((m.id for m in state.monthly_data), default=0) + 1
        new_index = len(state.monthly_data)
    else:
        new_month_id = current.id + 1
        new_index = state.current_month_index + 1

    month = build_month(
        new_month_id,
        next_month_name(state.current_month_index, today),
        ranked,
        group_size,
    )
    logger.info(
        "Season advanced to %s (%d groups, %d matches)",
        month.name,
        len(month.groups),
        len(month.matches),
    )

    return replace(
        state,
        players=[reset_monthly(p) for p in state.players],
        monthly_data=list(state.monthly_data) + [month],
        current_month_index=new_index,
        master_bracket=generate_master_bracket(master_contenders(state.players)),
    )
