"""Validation rules for tennis league results.

These checks are advisory: the core accepts any free-text score. The session
and the CLI use them to refuse impossible winners and to warn about scores
that do not look like tennis.
"""

from tleague.models import Match
from tleague.scores import parse_score, parse_sets


class ValidationError(Exception):
    """Raised when validation fails."""

    pass


def validate_tennis_set(games_a: int, games_b: int) -> tuple[bool, str]:
    """Validate a single tennis set score.

    Rules:
    - A regular set is won 6-0 to 6-4, 7-5 or 7-6 (tie-break)
    - A match tie-break (deciding super tie-break) is won at 10 or more,
      by at least 2 points

    Args:
        games_a: Games (or tie-break points) of player A
        games_b: Games (or tie-break points) of player B

    Returns:
        Tuple of (is_valid, error_message)

    Examples:
        >>> validate_tennis_set(6, 4)
        (True, '')
        >>> validate_tennis_set(7, 6)
        (True, '')
        >>> validate_tennis_set(10, 8)
        (True, '')
        >>> validate_tennis_set(6, 5)
        (False, 'At 6-5 the set is not over (7-5 or 7-6 required)')
    """
    if games_a < 0 or games_b < 0:
        return False, "Scores cannot be negative"

    if games_a == games_b:
        return False, "A set cannot end tied"

    winner = max(games_a, games_b)
    loser = min(games_a, games_b)

    if winner == 6 and loser <= 4:
        return True, ""

    if winner == 6 and loser == 5:
        return False, "At 6-5 the set is not over (7-5 or 7-6 required)"

    if winner == 7 and loser in (5, 6):
        return True, ""

    if winner >= 10 and winner - loser >= 2:
        return True, ""

    if winner >= 10:
        return False, f"A match tie-break needs a 2 point margin (current difference: {winner - loser})"

    return False, f"{winner}-{loser} is not a valid set score"


def validate_score(score: str) -> tuple[bool, str]:
    """Validate every set of a score string.

    Examples:
        >>> validate_score("6-3 4-6 10-7")
        (True, '')
        >>> validate_score("6-3 abc")
        (False, "Set 2: 'abc' is not in games-games form")
    """
    tokens = (score or "").split()
    if not tokens:
        return False, "The score must have at least one set"

    parsed = parse_sets(score)
    if len(parsed) != len(tokens):
        for idx, token in enumerate(tokens, start=1):
            if not parse_sets(token):
                return False, f"Set {idx}: '{token}' is not in games-games form"

    for idx, (games_a, games_b) in enumerate(parsed, start=1):
        is_valid, error_msg = validate_tennis_set(games_a, games_b)
        if not is_valid:
            return False, f"Set {idx}: {error_msg}"

    return True, ""


def validate_winner(player1_id: int, player2_id: int, winner_id: int) -> tuple[bool, str]:
    """Check that the winner is one of the two players."""
    if winner_id not in (player1_id, player2_id):
        return False, "The winner must be one of the two players of the match"
    return True, ""


def validate_result(match: Match, winner_id: int, score: str, is_wo: bool = False) -> tuple[bool, str]:
    """Validate a result before it is recorded.

    A walkover only needs a valid winner. Otherwise the score must be valid
    and give the winner more sets than the opponent.
    """
    is_valid, error_msg = validate_winner(match.player1_id, match.player2_id, winner_id)
    if not is_valid or is_wo:
        return is_valid, error_msg

    is_valid, error_msg = validate_score(score)
    if not is_valid:
        return False, error_msg

    loser_id = match.player2_id if winner_id == match.player1_id else match.player1_id
    sets = parse_score(score, match.player1_id, match.player2_id)
    if sets[winner_id] <= sets[loser_id]:
        return False, (
            f"The score gives the winner {sets[winner_id]} sets "
            f"against {sets[loser_id]} for the opponent"
        )

    return True, ""
