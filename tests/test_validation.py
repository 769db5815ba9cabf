"""Tests for tennis score validation rules."""

from tleague.models import Match
from tleague.validation import (
    validate_result,
    validate_score,
    validate_tennis_set,
    validate_winner,
)


class TestValidateTennisSet:
    """Test cases for validate_tennis_set function."""

    def test_valid_regular_sets(self):
        """Test sets won at 6 with a 2 game lead."""
        assert validate_tennis_set(6, 0) == (True, "")
        assert validate_tennis_set(6, 4) == (True, "")
        assert validate_tennis_set(3, 6) == (True, "")

    def test_valid_extended_sets(self):
        """Test 7-5 and tie-break sets."""
        assert validate_tennis_set(7, 5) == (True, "")
        assert validate_tennis_set(7, 6) == (True, "")
        assert validate_tennis_set(6, 7) == (True, "")

    def test_valid_match_tiebreak(self):
        """Test deciding super tie-break scores."""
        assert validate_tennis_set(10, 8) == (True, "")
        assert validate_tennis_set(12, 10) == (True, "")
        assert validate_tennis_set(7, 10) == (True, "")

    def test_six_five_not_over(self):
        is_valid, msg = validate_tennis_set(6, 5)
        assert is_valid is False
        assert "not over" in msg

    def test_match_tiebreak_needs_margin(self):
        is_valid, msg = validate_tennis_set(10, 9)
        assert is_valid is False
        assert "2 point margin" in msg

    def test_tied_set(self):
        is_valid, msg = validate_tennis_set(6, 6)
        assert is_valid is False
        assert "tied" in msg

    def test_negative_scores(self):
        is_valid, msg = validate_tennis_set(-1, 6)
        assert is_valid is False
        assert "negative" in msg

    def test_unreachable_scores(self):
        """Test scores no set can end on."""
        for games in [(5, 3), (8, 6), (9, 2)]:
            is_valid, msg = validate_tennis_set(*games)
            assert is_valid is False
            assert "not a valid set score" in msg


class TestValidateScore:
    """Test cases for validate_score function."""

    def test_valid_scores(self):
        assert validate_score("6-3 6-4") == (True, "")
        assert validate_score("6-3 4-6 10-7") == (True, "")
        assert validate_score("7-6(4) 6-2") == (True, "")

    def test_empty_score(self):
        is_valid, msg = validate_score("  ")
        assert is_valid is False
        assert "at least one set" in msg

    def test_malformed_token(self):
        assert validate_score("6-3 abc") == (False, "Set 2: 'abc' is not in games-games form")

    def test_invalid_set_is_numbered(self):
        is_valid, msg = validate_score("6-3 6-5")
        assert is_valid is False
        assert msg.startswith("Set 2:")


class TestValidateResult:
    """Test cases for validate_winner and validate_result."""

    def setup_method(self):
        self.match = Match(id="m1", player1_id=1, player2_id=2)

    def test_winner_must_play(self):
        assert validate_winner(1, 2, 2) == (True, "")
        is_valid, msg = validate_winner(1, 2, 3)
        assert is_valid is False
        assert "one of the two players" in msg

    def test_consistent_result(self):
        assert validate_result(self.match, 1, "6-3 4-6 6-2") == (True, "")
        assert validate_result(self.match, 2, "3-6 2-6") == (True, "")

    def test_score_favors_other_player(self):
        is_valid, msg = validate_result(self.match, 1, "3-6 2-6")
        assert is_valid is False
        assert "0 sets against 2" in msg

    def test_walkover_needs_no_score(self):
        assert validate_result(self.match, 2, "", is_wo=True) == (True, "")

    def test_walkover_still_needs_valid_winner(self):
        is_valid, _ = validate_result(self.match, 5, "", is_wo=True)
        assert is_valid is False
