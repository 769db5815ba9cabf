"""Free-text set score parsing."""

import re
from typing import Optional

# Leading integer of a games token; trailing text such as a tie-break
# annotation ("6(4)") is ignored.
_GAMES_RE = re.compile(r"^\s*([+-]?\d+)")


def _parse_games(token: str) -> Optional[int]:
    match = _GAMES_RE.match(token)
    if match is None:
        return None
    return int(match.group(1))


def parse_sets(score: str) -> list[tuple[int, int]]:
    """Split a score string into (games1, games2) tuples.

    Tokens that are not of the form "<games1>-<games2>" are skipped.

    Examples:
        >>> parse_sets("6-3 4-6 7-6(4)")
        [(6, 3), (4, 6), (7, 6)]
        >>> parse_sets("abc 6-2")
        [(6, 2)]
    """
    if not score or not score.strip():
        return []

    sets = []
    for token in score.split():
        parts = token.split("-")
        if len(parts) != 2:
            continue
        games1 = _parse_games(parts[0])
        games2 = _parse_games(parts[1])
        if games1 is None or games2 is None:
            continue
        sets.append((games1, games2))
    return sets


def parse_score(score: str, player1_id: int, player2_id: int) -> dict[int, int]:
    """Count sets won by each player of a score string.

    Never fails: malformed tokens and tied sets count for nobody, and an
    empty score yields zero for both players.

    Args:
        score: Free-text score, sets separated by whitespace ("6-3 4-6 7-5")
        player1_id: Player whose games come first in each token
        player2_id: Player whose games come second in each token

    Returns:
        Mapping {player1_id: sets_won, player2_id: sets_won}

    Examples:
        >>> parse_score("6-3 4-6 7-5", 1, 2)
        {1: 2, 2: 1}
        >>> parse_score("", 1, 2)
        {1: 0, 2: 0}
    """
    p1_sets = 0
    p2_sets = 0
    for games1, games2 in parse_sets(score):
        if games1 > games2:
            p1_sets += 1
        elif games2 > games1:
            p2_sets += 1

    return {player1_id: p1_sets, player2_id: p2_sets}
