"""Data models for tleague.

Domain model hierarchy:
- AppState contains Players, MonthlyData (one per season) and the Master bracket
- MonthlyData contains Groups (round robin) and their Matches
- BracketMatch is one node of the 16-player knockout (R16 -> QF -> SF -> F)

Models are plain dataclasses. Operations never mutate them in place; they build
new instances with dataclasses.replace so every AppState is a stable snapshot.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


NOT_PLAYED_SCORE = "Não Jogado"
UNKNOWN_PLAYER_NAME = "Unknown"


class RoundType(str, Enum):
    """Master bracket round types."""

    ROUND_OF_16 = "R16"
    QUARTERFINAL = "QF"
    SEMIFINAL = "SF"
    FINAL = "F"


# ============================================================================
# Core Domain Models
# ============================================================================


@dataclass
class Player:
    """Player in the league.

    Carries lifetime counters and a monthly mirror of each one. Monthly
    counters are zeroed at every season advance.
    """

    id: int
    name: str = UNKNOWN_PLAYER_NAME
    # Lifetime
    total_points: int = 0
    wins: int = 0
    losses: int = 0
    games_played: int = 0
    sets_won: int = 0
    points_from_games: int = 0
    total_wo_wins: int = 0
    total_wo_losses: int = 0
    # Current month
    monthly_points: int = 0
    monthly_wins: int = 0
    monthly_losses: int = 0
    monthly_games_played: int = 0
    monthly_sets_won: int = 0
    monthly_points_from_games: int = 0
    monthly_wo_wins: int = 0
    monthly_wo_losses: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "totalPoints": self.total_points,
            "wins": self.wins,
            "losses": self.losses,
            "gamesPlayed": self.games_played,
            "setsWon": self.sets_won,
            "pointsFromGames": self.points_from_games,
            "totalWoWins": self.total_wo_wins,
            "totalWoLosses": self.total_wo_losses,
            "monthlyPoints": self.monthly_points,
            "monthlyWins": self.monthly_wins,
            "monthlyLosses": self.monthly_losses,
            "monthlyGamesPlayed": self.monthly_games_played,
            "monthlySetsWon": self.monthly_sets_won,
            "monthlyPointsFromGames": self.monthly_points_from_games,
            "monthlyWoWins": self.monthly_wo_wins,
            "monthlyWoLosses": self.monthly_wo_losses,
        }

    def __str__(self) -> str:
        return f"{self.name} ({self.total_points}pts {self.wins}W-{self.losses}L)"


@dataclass
class Match:
    """A group-stage match.

    winner_id is None while the match is undecided. A not-played match keeps
    winner_id None and carries the NOT_PLAYED_SCORE label as its score.
    """

    id: str
    player1_id: int
    player2_id: int
    winner_id: Optional[int] = None
    score: str = ""  # Free text, e.g. "6-3 4-6 7-5"
    is_wo: bool = False
    is_not_played: bool = False

    @property
    def is_decided(self) -> bool:
        return self.winner_id is not None

    @property
    def loser_id(self) -> Optional[int]:
        """The other player, or None if undecided."""
        if self.winner_id is None:
            return None
        return self.player2_id if self.winner_id == self.player1_id else self.player1_id

    def involves(self, player_id: int) -> bool:
        return player_id in (self.player1_id, self.player2_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "player1Id": self.player1_id,
            "player2Id": self.player2_id,
            "winnerId": self.winner_id,
            "score": self.score,
            "isWO": self.is_wo,
            "isNotPlayed": self.is_not_played,
        }

    def __str__(self) -> str:
        score = self.score or "vs"
        return f"Match {self.id}: P{self.player1_id} {score} P{self.player2_id}"


# ============================================================================
# League Structure Models
# ============================================================================


@dataclass
class Group:
    """A monthly round-robin group (up to 4 players by league convention)."""

    id: int
    name: str
    player_ids: list[int] = field(default_factory=list)

    @property
    def size(self) -> int:
        return len(self.player_ids)

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name, "playerIds": list(self.player_ids)}

    def __str__(self) -> str:
        return f"{self.name} ({self.size} players)"


@dataclass
class MonthlyData:
    """One season: its groups and every group match."""

    id: int
    name: str
    groups: list[Group] = field(default_factory=list)
    matches: list[Match] = field(default_factory=list)

    def find_match(self, match_id: str) -> Optional[Match]:
        for match in self.matches:
            if match.id == match_id:
                return match
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "groups": [g.to_dict() for g in self.groups],
            "matches": [m.to_dict() for m in self.matches],
        }


@dataclass
class BracketMatch:
    """A node of the Master bracket.

    Slots of non-R16 matches are filled only by propagation from the matches
    named in source_match1_id / source_match2_id.
    """

    id: str
    round: RoundType = RoundType.ROUND_OF_16
    match_index: int = 0
    player1_id: Optional[int] = None
    player2_id: Optional[int] = None
    winner_id: Optional[int] = None
    score: str = ""
    source_match1_id: Optional[str] = None
    source_match2_id: Optional[str] = None

    @property
    def is_ready(self) -> bool:
        """Both slots filled, so a result can be entered."""
        return self.player1_id is not None and self.player2_id is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "round": self.round.value,
            "matchIndex": self.match_index,
            "player1Id": self.player1_id,
            "player2Id": self.player2_id,
            "winnerId": self.winner_id,
            "score": self.score,
            "sourceMatch1Id": self.source_match1_id,
            "sourceMatch2Id": self.source_match2_id,
        }

    def __str__(self) -> str:
        p1 = f"P{self.player1_id}" if self.player1_id is not None else "TBD"
        p2 = f"P{self.player2_id}" if self.player2_id is not None else "TBD"
        return f"{self.id}: {p1} vs {p2}"


@dataclass
class AppState:
    """Top-level snapshot of the whole league."""

    players: list[Player] = field(default_factory=list)
    monthly_data: list[MonthlyData] = field(default_factory=list)
    current_month_index: int = 0
    master_bracket: list[BracketMatch] = field(default_factory=list)

    @property
    def current_month(self) -> Optional[MonthlyData]:
        if 0 <= self.current_month_index < len(self.monthly_data):
            return self.monthly_data[self.current_month_index]
        return None

    def players_by_id(self) -> dict[int, Player]:
        return {p.id: p for p in self.players}

    def get_player(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def to_dict(self) -> dict[str, Any]:
        """Persisted layout: players, monthlyData, currentMonthIndex, masterBracket."""
        return {
            "players": [p.to_dict() for p in self.players],
            "monthlyData": [m.to_dict() for m in self.monthly_data],
            "currentMonthIndex": self.current_month_index,
            "masterBracket": [b.to_dict() for b in self.master_bracket],
        }
