"""Standings: overall ranking, group tables and month replays."""

from typing import Iterable, Optional

from tleague.models import AppState, Group, Player
from tleague.stats import apply_result, reset_monthly

MASTER_SIZE = 16


def ranking_key(player: Player):
    """Sort key: total points DESC, then name ASC."""
    return (-player.total_points, player.name.casefold(), player.name)


def monthly_ranking_key(player: Player):
    """Sort key: monthly points DESC, then name ASC."""
    return (-player.monthly_points, player.name.casefold(), player.name)


def rank_players(players: Iterable[Player]) -> list[Player]:
    """Rank players by lifetime points, ties broken by name.

    Examples:
        >>> [p.name for p in rank_players([Player(1, "B", total_points=5),
        ...                                Player(2, "A", total_points=5)])]
        ['A', 'B']
    """
    return sorted(players, key=ranking_key)


def master_contenders(players: Iterable[Player]) -> list[Player]:
    """Top 16 of the ranking (fewer if the roster is smaller)."""
    return rank_players(players)[:MASTER_SIZE]


def group_table(state: AppState, group: Group) -> list[Player]:
    """Players of a current-month group, ranked by monthly points."""
    member_ids = set(group.player_ids)
    members = [p for p in state.players if p.id in member_ids]
    return sorted(members, key=monthly_ranking_key)


def month_standings(state: AppState, month_index: Optional[int] = None) -> list[Player]:
    """Recompute a month's table from its match history.

    Monthly counters are zeroed at every season advance, so a past month's
    table is rebuilt by replaying its decided matches on zeroed copies of the
    players. Only the monthly_* fields of the returned players are meaningful.

    Args:
        state: League snapshot
        month_index: Index into state.monthly_data (default: current month)

    Returns:
        Players that appear in that month's groups, ranked by monthly points
        (empty list for an unknown month)
    """
    if month_index is None:
        month_index = state.current_month_index
    if not 0 <= month_index < len(state.monthly_data):
        return []

    month = state.monthly_data[month_index]
    players_by_id = state.players_by_id()

    table = {}
    for group in month.groups:
        for player_id in group.player_ids:
            player = players_by_id.get(player_id)
            if player is not None:
                table[player_id] = reset_monthly(player)

    for match in month.matches:
        if match.winner_id is None:
            continue
        winner = table.get(match.winner_id)
        loser = table.get(match.loser_id)
        if winner is None or loser is None:
            continue
        table[winner.id], table[loser.id] = apply_result(winner, loser, match)

    return sorted(table.values(), key=monthly_ranking_key)


def wo_table(players: Iterable[Player]) -> list[Player]:
    """Players with any walkover on record, most WO losses first."""
    with_wo = [p for p in players if p.total_wo_wins or p.total_wo_losses]
    return sorted(
        with_wo,
        key=lambda p: (-p.total_wo_losses, -p.total_wo_wins, p.name.casefold(), p.name),
    )


def win_rate(player: Player, monthly: bool = False) -> float:
    """Share of games won (0.0 when no games were played)."""
    if monthly:
        played, won = player.monthly_games_played, player.monthly_wins
    else:
        played, won = player.games_played, player.wins
    if played == 0:
        return 0.0
    return won / played
