"""Match lifecycle: recording and resetting group and Master results.

Group match states:

    Undecided --record--> Decided --reset--> Undecided
        |                    |
        +---mark_not_played--+--> NotPlayed --reset--> Undecided

Every transition that leaves Decided reverts the match's statistics first,
so player counters always equal the sum of the currently recorded results.

All functions take a snapshot and return a new one; unknown ids are no-ops.
"""

import logging
from dataclasses import replace
from typing import Optional

from tleague.bracket import (
    bracket_started,
    find_bracket_match,
    find_dependent_match,
    generate_master_bracket,
)
from tleague.models import NOT_PLAYED_SCORE, AppState, BracketMatch, Match, Player
from tleague.standings import master_contenders
from tleague.stats import apply_result, revert_result

logger = logging.getLogger(__name__)


class BracketLockedError(Exception):
    """Raised when a bracket change would invalidate a decided later match."""

    def __init__(self, match_id: str, dependent_id: str):
        self.match_id = match_id
        self.dependent_id = dependent_id
        super().__init__(
            f"Cannot change {match_id}: the next match {dependent_id} already has a result"
        )


# ============================================================================
# Helpers
# ============================================================================


def _find_current_match(state: AppState, match_id: str) -> Optional[Match]:
    month = state.current_month
    if month is None:
        return None
    return month.find_match(match_id)


def _replace_players(players: list[Player], updated: dict[int, Player]) -> list[Player]:
    """New player list with only the changed entries swapped in."""
    return [updated.get(p.id, p) for p in players]


def _revert_recorded(players_by_id: dict[int, Player], match: Match) -> dict[int, Player]:
    """Revert a decided match on the given players; returns the changed entries."""
    winner = players_by_id[match.winner_id]
    loser = players_by_id[match.loser_id]
    winner, loser = revert_result(winner, loser, match)
    return {winner.id: winner, loser.id: loser}


def _commit_group_match(state: AppState, new_match: Match, updated: dict[int, Player]) -> AppState:
    """Swap one match of the current month and the changed players into a new state."""
    month = state.current_month
    matches = [new_match if m.id == new_match.id else m for m in month.matches]
    monthly_data = list(state.monthly_data)
    monthly_data[state.current_month_index] = replace(month, matches=matches)
    return replace(
        state,
        players=_replace_players(state.players, updated),
        monthly_data=monthly_data,
    )


def _players_known(state: AppState, *player_ids: int) -> bool:
    known = {p.id for p in state.players}
    return all(pid in known for pid in player_ids)


def _has_revertible_result(state: AppState, match: Match) -> bool:
    """A recorded winner that the statistics can be taken back from."""
    return (
        match.is_decided
        and match.involves(match.winner_id)
        and _players_known(state, match.player1_id, match.player2_id)
    )


def _clear_group_match(state: AppState, match_id: str, **cleared) -> AppState:
    """Revert a match's statistics if decided, then overwrite its result fields."""
    match = _find_current_match(state, match_id)
    if match is None:
        logger.debug("Match %s not found in current month", match_id)
        return state

    updated = {}
    if _has_revertible_result(state, match):
        updated = _revert_recorded(state.players_by_id(), match)

    return _commit_group_match(state, replace(match, winner_id=None, **cleared), updated)


# ============================================================================
# Group matches
# ============================================================================


def record_group_match(
    state: AppState,
    match_id: str,
    winner_id: int,
    score: str,
    is_wo: bool = False,
) -> AppState:
    """Record (or re-record) the result of a current-month group match.

    A previously recorded result is reverted before the new one is applied,
    so re-scoring a match never double counts.

    Args:
        state: League snapshot
        match_id: Id of a match in the current month
        winner_id: player1_id or player2_id of that match
        score: Free-text set score ("6-3 6-4")
        is_wo: Walkover flag

    Returns:
        New state; the same state if the match, the players or the winner
        cannot be resolved
    """
    match = _find_current_match(state, match_id)
    if match is None:
        logger.debug("Match %s not found in current month", match_id)
        return state
    if not match.involves(winner_id):
        logger.debug("Player %s does not play match %s", winner_id, match_id)
        return state
    if not _players_known(state, match.player1_id, match.player2_id):
        logger.debug("Match %s references unknown players", match_id)
        return state

    players_by_id = state.players_by_id()
    if _has_revertible_result(state, match):
        players_by_id.update(_revert_recorded(players_by_id, match))

    new_match = replace(
        match, winner_id=winner_id, score=score, is_wo=is_wo, is_not_played=False
    )
    winner, loser = apply_result(
        players_by_id[new_match.winner_id], players_by_id[new_match.loser_id], new_match
    )
    return _commit_group_match(state, new_match, {winner.id: winner, loser.id: loser})


def reset_group_match(state: AppState, match_id: str) -> AppState:
    """Clear a group match back to undecided, reverting any recorded result.

    Confirmation is the caller's concern.
    """
    return _clear_group_match(state, match_id, score="", is_wo=False, is_not_played=False)


def mark_not_played(state: AppState, match_id: str) -> AppState:
    """Flag a group match as not played, reverting any recorded result."""
    return _clear_group_match(
        state, match_id, score=NOT_PLAYED_SCORE, is_wo=False, is_not_played=True
    )


# ============================================================================
# Master bracket
# ============================================================================


def effective_bracket(state: AppState) -> list[BracketMatch]:
    """The bracket as it currently stands.

    Until a result is recorded the stored bracket is only a placeholder: the
    draw follows the live top-16 standings. Once started, the stored bracket
    is authoritative.
    """
    if bracket_started(state.master_bracket):
        return list(state.master_bracket)
    return generate_master_bracket(master_contenders(state.players))


def record_bracket_match(
    state: AppState, match_id: str, winner_id: int, score: str
) -> AppState:
    """Record a Master result and move the winner into the next round.

    The first result materializes the bracket from the current standings.

    Args:
        state: League snapshot
        match_id: Bracket match id ("R16-0" ... "F-0")
        winner_id: One of the two players in that match
        score: Free-text set score

    Returns:
        New state; the same state if the match is unknown, still waiting for
        a player, or the winner does not play in it

    Raises:
        BracketLockedError: if the winner changes while the next match
            already has a result
    """
    started = bracket_started(state.master_bracket)
    bracket = effective_bracket(state)

    idx = find_bracket_match(bracket, match_id)
    if idx is None:
        logger.debug("Bracket match %s not found", match_id)
        return state
    target = bracket[idx]
    if not target.is_ready:
        logger.debug("Bracket match %s is waiting for its players", match_id)
        return state
    if winner_id not in (target.player1_id, target.player2_id):
        logger.debug("Player %s does not play bracket match %s", winner_id, match_id)
        return state

    dep_idx = find_dependent_match(bracket, match_id)
    if (
        dep_idx is not None
        and bracket[dep_idx].winner_id is not None
        and target.winner_id != winner_id
    ):
        # Changing the winner would swap a player out of a decided match
        raise BracketLockedError(match_id, bracket[dep_idx].id)

    if not started:
        logger.info("Master bracket materialized from current standings")

    bracket[idx] = replace(target, winner_id=winner_id, score=score)

    if dep_idx is not None:
        dependent = bracket[dep_idx]
        if dependent.source_match1_id == match_id:
            bracket[dep_idx] = replace(dependent, player1_id=winner_id)
        else:
            bracket[dep_idx] = replace(dependent, player2_id=winner_id)

    return replace(state, master_bracket=bracket)


def reset_bracket_match(state: AppState, match_id: str) -> AppState:
    """Clear a Master result and pull its winner back out of the next round.

    Raises:
        BracketLockedError: if the next match already has a result; the
            state is left untouched
    """
    bracket = list(state.master_bracket)

    idx = find_bracket_match(bracket, match_id)
    if idx is None or bracket[idx].winner_id is None:
        logger.debug("Bracket match %s has no result to reset", match_id)
        return state

    dep_idx = find_dependent_match(bracket, match_id)
    if dep_idx is not None:
        dependent = bracket[dep_idx]
        if dependent.winner_id is not None:
            raise BracketLockedError(match_id, dependent.id)
        if dependent.source_match1_id == match_id:
            bracket[dep_idx] = replace(dependent, player1_id=None)
        else:
            bracket[dep_idx] = replace(dependent, player2_id=None)

    bracket[idx] = replace(bracket[idx], winner_id=None, score="")
    return replace(state, master_bracket=bracket)
