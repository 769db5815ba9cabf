"""Master bracket generator.

The Master is a fixed 16-player single-elimination draw:

    R16-0 ─┐
           ├─ QF-0 ─┐
    R16-1 ─┘        ├─ SF-0 ─┐
    R16-2 ─┐        │        │
           ├─ QF-1 ─┘        │
    R16-3 ─┘                 ├─ F-0
       ...          SF-1 ────┘

QF-i is fed by R16-2i (slot 1) and R16-2i+1 (slot 2), and likewise for the
later rounds.
"""

from typing import Optional, Sequence

from tleague.models import BracketMatch, Player, RoundType

BRACKET_SIZE = 16

# Seed positions in draw order: pairs (1 vs 16), (8 vs 9), (5 vs 12), ...
# so the top seeds can only meet in the late rounds.
SEEDING_ORDER = [0, 15, 7, 8, 4, 11, 3, 12, 5, 10, 2, 13, 6, 9, 1, 14]

# Each round after R16 with its number of matches and feeding round
ROUND_PROGRESSION = [
    (RoundType.QUARTERFINAL, 4, RoundType.ROUND_OF_16),
    (RoundType.SEMIFINAL, 2, RoundType.QUARTERFINAL),
    (RoundType.FINAL, 1, RoundType.SEMIFINAL),
]


def bracket_match_id(round_type: RoundType, match_index: int) -> str:
    """Build the id of a bracket match, e.g. ("QF", 1) -> "QF-1"."""
    return f"{round_type.value}-{match_index}"


def generate_master_bracket(contenders: Sequence[Player]) -> list[BracketMatch]:
    """Build the 15-match Master bracket from the ranked top 16.

    Args:
        contenders: Exactly 16 players, best first. Callers filter and sort.

    Returns:
        8 R16 matches with both slots filled, then 4 QF, 2 SF and the final
        with empty slots and source links. Empty list when the contender list
        does not hold exactly 16 players (no partial bracket is ever built).
    """
    if len(contenders) != BRACKET_SIZE:
        return []

    bracket = []

    for i in range(BRACKET_SIZE // 2):
        bracket.append(
            BracketMatch(
                id=bracket_match_id(RoundType.ROUND_OF_16, i),
                round=RoundType.ROUND_OF_16,
                match_index=i,
                player1_id=contenders[SEEDING_ORDER[i * 2]].id,
                player2_id=contenders[SEEDING_ORDER[i * 2 + 1]].id,
            )
        )

    for round_type, num_matches, source_round in ROUND_PROGRESSION:
        for i in range(num_matches):
            bracket.append(
                BracketMatch(
                    id=bracket_match_id(round_type, i),
                    round=round_type,
                    match_index=i,
                    source_match1_id=bracket_match_id(source_round, i * 2),
                    source_match2_id=bracket_match_id(source_round, i * 2 + 1),
                )
            )

    return bracket


def bracket_started(bracket: Sequence[BracketMatch]) -> bool:
    """Check if any result has been recorded in the bracket."""
    return any(m.winner_id is not None for m in bracket)


def find_bracket_match(bracket: Sequence[BracketMatch], match_id: str) -> Optional[int]:
    """Return the position of a match in the bracket list, or None."""
    for idx, match in enumerate(bracket):
        if match.id == match_id:
            return idx
    return None


def find_dependent_match(bracket: Sequence[BracketMatch], match_id: str) -> Optional[int]:
    """Return the position of the match fed by match_id, or None for the final."""
    for idx, match in enumerate(bracket):
        if match.source_match1_id == match_id or match.source_match2_id == match_id:
            return idx
    return None
