"""League session: the current snapshot plus the admin gate.

The core operations are pure functions of (state, inputs). The session is
what a front end talks to: it keeps the latest snapshot, checks the admin
flag before every change and swaps in the new snapshot wholesale.

The login is a cosmetic gate (a shared password from the config), not
security.
"""

import hmac
import logging
from datetime import date
from typing import Optional

from tleague import results, roster, season
from tleague.config_loader import DEFAULT_ADMIN_PASSWORD, DEFAULT_GROUP_SIZE
from tleague.i18n import DEFAULT_LANGUAGE
from tleague.models import AppState, BracketMatch, Player
from tleague.standings import master_contenders, month_standings, rank_players, wo_table
from tleague.storage import state_from_json, state_to_json
from tleague.validation import ValidationError, validate_result

logger = logging.getLogger(__name__)


class PermissionDeniedError(Exception):
    """Raised when a change is attempted without admin rights."""

    pass


class LeagueSession:
    """Holds one league snapshot and applies operations to it."""

    def __init__(
        self,
        state: AppState,
        admin_password: str = DEFAULT_ADMIN_PASSWORD,
        group_size: int = DEFAULT_GROUP_SIZE,
        lang: str = DEFAULT_LANGUAGE,
    ):
        self.state = state
        self.group_size = group_size
        self.lang = lang
        self._admin_password = admin_password
        self.is_admin = False

    @classmethod
    def from_config(cls, state: AppState, config: dict) -> "LeagueSession":
        return cls(
            state,
            admin_password=config["admin_password"],
            group_size=config["group_size"],
            lang=config["lang"],
        )

    # ------------------------------------------------------------------
    # Admin gate
    # ------------------------------------------------------------------

    def login(self, password: str) -> bool:
        """Enable admin mode if the password matches."""
        self.is_admin = hmac.compare_digest(
            (password or "").encode("utf-8"), self._admin_password.encode("utf-8")
        )
        if not self.is_admin:
            logger.info("Admin login refused")
        return self.is_admin

    def logout(self) -> None:
        self.is_admin = False

    def _require_admin(self) -> None:
        if not self.is_admin:
            raise PermissionDeniedError("Only administrators can change the league")

    def _swap(self, new_state: AppState) -> bool:
        """Install a new snapshot; False when the operation was a no-op."""
        changed = new_state is not self.state
        self.state = new_state
        return changed

    # ------------------------------------------------------------------
    # Group matches
    # ------------------------------------------------------------------

    def record_group_match(
        self, match_id: str, winner_id: int, score: str, is_wo: bool = False
    ) -> tuple[bool, list[str]]:
        """Record a group result.

        Returns:
            Tuple of (changed, warnings). changed is False when the match is
            not in the current month; warnings are about the score (the
            result is recorded anyway)

        Raises:
            PermissionDeniedError: If not logged in as admin
            ValidationError: If the winner does not play this match
        """
        self._require_admin()
        warnings = []
        month = self.state.current_month
        match = month.find_match(match_id) if month else None
        if match is not None:
            if winner_id not in (match.player1_id, match.player2_id):
                raise ValidationError(f"Player {winner_id} does not play match {match_id}")
            is_valid, error_msg = validate_result(match, winner_id, score, is_wo)
            if not is_valid:
                warnings.append(error_msg)

        changed = self._swap(results.record_group_match(self.state, match_id, winner_id, score, is_wo))
        return changed, warnings

    def reset_group_match(self, match_id: str) -> bool:
        self._require_admin()
        return self._swap(results.reset_group_match(self.state, match_id))

    def mark_not_played(self, match_id: str) -> bool:
        self._require_admin()
        return self._swap(results.mark_not_played(self.state, match_id))

    # ------------------------------------------------------------------
    # Master bracket
    # ------------------------------------------------------------------

    def record_bracket_match(self, match_id: str, winner_id: int, score: str) -> bool:
        """Record a Master result.

        Returns:
            False if nothing changed (unknown match, empty slot, winner not
            in the match, or fewer than 16 players)

        Raises:
            PermissionDeniedError: If not logged in as admin
            BracketLockedError: If the change would alter a decided match
        """
        self._require_admin()
        return self._swap(results.record_bracket_match(self.state, match_id, winner_id, score))

    def reset_bracket_match(self, match_id: str) -> bool:
        """Clear a Master result.

        Returns:
            False if the match is unknown or has no result

        Raises:
            PermissionDeniedError: If not logged in as admin
            BracketLockedError: If the next match already has a result
        """
        self._require_admin()
        return self._swap(results.reset_bracket_match(self.state, match_id))

    # ------------------------------------------------------------------
    # Season and roster
    # ------------------------------------------------------------------

    def advance_season(self, today: Optional[date] = None) -> None:
        self._require_admin()
        self.state = season.advance_season(self.state, today=today, group_size=self.group_size)

    def rename_player(self, player_id: int, new_name: str) -> None:
        self._require_admin()
        self.state = roster.rename_player(self.state, player_id, new_name)

    def add_player(self, name: str) -> Optional[Player]:
        """Add a player; returns it, or None if the name was blank."""
        self._require_admin()
        before = len(self.state.players)
        self.state = roster.add_player(self.state, name)
        if len(self.state.players) == before:
            return None
        return self.state.players[-1]

    # ------------------------------------------------------------------
    # Import / export
    # ------------------------------------------------------------------

    def export_json(self) -> str:
        return state_to_json(self.state)

    def import_json(self, text: str) -> None:
        """Replace the whole state with an imported backup.

        Raises:
            PermissionDeniedError: If not logged in as admin
            StorageError: If the text is not JSON
        """
        self._require_admin()
        self.state = state_from_json(text)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def ranking(self) -> list[Player]:
        return rank_players(self.state.players)

    def contenders(self) -> list[Player]:
        return master_contenders(self.state.players)

    def bracket(self) -> list[BracketMatch]:
        return results.effective_bracket(self.state)

    def previous_month_ranking(self) -> list[Player]:
        """Replayed table of the month before the current one."""
        return month_standings(self.state, self.state.current_month_index - 1)

    def wo_stats(self) -> list[Player]:
        return wo_table(self.state.players)
