"""Statistics engine: player counters for a decided group match.

Scoring per match (both the lifetime and the monthly counters move):
- Both players: +1 game played, +2 points from games (participation)
- Both players: +sets won (parsed from the score)
- Points: 2 participation + sets won + 10 if winner
- Walkover: the loser gets the game and the loss (plus a WO loss) but no
  participation points, sets or points at all; the winner gets a WO win.

apply and revert share a single delta computation, so revert is the exact
inverse of apply for the same recorded match.
"""

from dataclasses import dataclass, replace

from tleague.models import Match, Player
from tleague.scores import parse_score

PARTICIPATION_POINTS = 2
WIN_BONUS = 10


@dataclass(frozen=True)
class StatDelta:
    """Change to one player's counters caused by one match."""

    points: int = 0
    wins: int = 0
    losses: int = 0
    games_played: int = 0
    sets_won: int = 0
    points_from_games: int = 0
    wo_wins: int = 0
    wo_losses: int = 0


def compute_delta(player_id: int, match: Match) -> StatDelta:
    """Compute what a decided match adds to one of its players.

    Args:
        player_id: player1_id or player2_id of the match
        match: Match carrying winner_id, score and is_wo of the outcome

    Returns:
        StatDelta for that player
    """
    is_winner = player_id == match.winner_id
    sets = parse_score(match.score, match.player1_id, match.player2_id)[player_id]

    if is_winner:
        return StatDelta(
            points=PARTICIPATION_POINTS + sets + WIN_BONUS,
            wins=1,
            games_played=1,
            sets_won=sets,
            points_from_games=PARTICIPATION_POINTS,
            wo_wins=1 if match.is_wo else 0,
        )

    if match.is_wo:
        # Walkover loss: counted as played and lost, nothing credited
        return StatDelta(losses=1, games_played=1, wo_losses=1)

    return StatDelta(
        points=PARTICIPATION_POINTS + sets,
        losses=1,
        games_played=1,
        sets_won=sets,
        points_from_games=PARTICIPATION_POINTS,
    )


def apply_delta(player: Player, delta: StatDelta, sign: int = 1) -> Player:
    """Return a copy of player with delta added (sign=1) or removed (sign=-1)."""
    return replace(
        player,
        total_points=player.total_points + sign * delta.points,
        wins=player.wins + sign * delta.wins,
        losses=player.losses + sign * delta.losses,
        games_played=player.games_played + sign * delta.games_played,
        sets_won=player.sets_won + sign * delta.sets_won,
        points_from_games=player.points_from_games + sign * delta.points_from_games,
        total_wo_wins=player.total_wo_wins + sign * delta.wo_wins,
        total_wo_losses=player.total_wo_losses + sign * delta.wo_losses,
        monthly_points=player.monthly_points + sign * delta.points,
        monthly_wins=player.monthly_wins + sign * delta.wins,
        monthly_losses=player.monthly_losses + sign * delta.losses,
        monthly_games_played=player.monthly_games_played + sign * delta.games_played,
        monthly_sets_won=player.monthly_sets_won + sign * delta.sets_won,
        monthly_points_from_games=player.monthly_points_from_games + sign * delta.points_from_games,
        monthly_wo_wins=player.monthly_wo_wins + sign * delta.wo_wins,
        monthly_wo_losses=player.monthly_wo_losses + sign * delta.wo_losses,
    )


def apply_result(winner: Player, loser: Player, match: Match) -> tuple[Player, Player]:
    """Credit a match outcome to its two players.

    Args:
        winner: Player whose id is match.winner_id
        loser: The other player of the match
        match: Match holding the outcome (winner_id, score, is_wo)

    Returns:
        Tuple of (updated winner, updated loser)
    """
    return (
        apply_delta(winner, compute_delta(winner.id, match)),
        apply_delta(loser, compute_delta(loser.id, match)),
    )


def revert_result(winner: Player, loser: Player, match: Match) -> tuple[Player, Player]:
    """Remove a previously applied outcome.

    The match must be the one recorded at apply time (same winner_id, score
    and is_wo); reverting an undecided match is a caller error.
    """
    return (
        apply_delta(winner, compute_delta(winner.id, match), sign=-1),
        apply_delta(loser, compute_delta(loser.id, match), sign=-1),
    )


def reset_monthly(player: Player) -> Player:
    """Zero the monthly counters, keeping the lifetime ones."""
    return replace(
        player,
        monthly_points=0,
        monthly_wins=0,
        monthly_losses=0,
        monthly_games_played=0,
        monthly_sets_won=0,
        monthly_points_from_games=0,
        monthly_wo_wins=0,
        monthly_wo_losses=0,
    )
