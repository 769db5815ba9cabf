"""Tests for the state sanitizer."""

import pytest

from tleague.models import UNKNOWN_PLAYER_NAME, AppState, RoundType
from tleague.sanitizer import sanitize_state


def test_empty_object():
    state = sanitize_state({})

    assert state == AppState()
    assert state.players == []
    assert state.monthly_data == []
    assert state.current_month_index == 0
    assert state.master_bracket == []


@pytest.mark.parametrize("raw", [None, [], [1, 2], "text", 42, True])
def test_non_object_gives_empty_state(raw):
    assert sanitize_state(raw) == AppState()


def test_player_defaults():
    state = sanitize_state({"players": [{"id": 3}]})
    player = state.players[0]

    assert player.id == 3
    assert player.name == UNKNOWN_PLAYER_NAME
    assert player.total_points == 0
    assert player.monthly_points == 0
    assert player.total_wo_losses == 0


def test_player_fields_read():
    raw = {
        "players": [
            {
                "id": 1,
                "name": "Ana",
                "totalPoints": 28,
                "wins": 2,
                "monthlyPoints": 14,
                "totalWoWins": 1,
                "monthlyWoLosses": 1,
            }
        ]
    }
    player = sanitize_state(raw).players[0]

    assert player.total_points == 28
    assert player.wins == 2
    assert player.monthly_points == 14
    assert player.total_wo_wins == 1
    assert player.monthly_wo_losses == 1


def test_wrong_types_fall_back_to_defaults():
    raw = {
        "players": [{"id": 1, "name": 7, "totalPoints": "12", "wins": True, "losses": 2.0}],
        "currentMonthIndex": "1",
        "masterBracket": "none",
    }
    state = sanitize_state(raw)
    player = state.players[0]

    assert player.name == UNKNOWN_PLAYER_NAME
    assert player.total_points == 0
    assert player.wins == 0
    assert player.losses == 2
    assert state.current_month_index == 0
    assert state.master_bracket == []


def test_malformed_list_entries_dropped():
    raw = {"players": [{"id": 1, "name": "Ana"}, "junk", None, 5]}
    assert [p.name for p in sanitize_state(raw).players] == ["Ana"]


def test_duplicate_player_ids_dropped():
    raw = {"players": [{"id": 1, "name": "Ana"}, {"id": 1, "name": "Copy"}]}
    assert [p.name for p in sanitize_state(raw).players] == ["Ana"]


def test_match_defaults():
    raw = {
        "monthlyData": [
            {
                "id": 1,
                "name": "Janeiro",
                "groups": [{"id": 1, "name": "Grupo 1", "playerIds": [1, "x", 2]}],
                "matches": [{"id": 99, "player1Id": 1, "player2Id": 2}],
            }
        ]
    }
    month = sanitize_state(raw).monthly_data[0]
    match = month.matches[0]

    assert month.groups[0].player_ids == [1, 2]
    assert match.id == "99"
    assert match.winner_id is None
    assert match.score == ""
    assert match.is_wo is False
    assert match.is_not_played is False


def test_month_without_lists():
    month = sanitize_state({"monthlyData": [{"id": 2}]}).monthly_data[0]
    assert month.name == ""
    assert month.groups == []
    assert month.matches == []


@pytest.mark.parametrize(
    "index, months, expected",
    [(5, 2, 1), (-3, 2, 0), (1, 2, 1), (4, 0, 0)],
)
def test_current_month_index_clamped(index, months, expected):
    raw = {
        "monthlyData": [{"id": i + 1, "name": f"M{i}"} for i in range(months)],
        "currentMonthIndex": index,
    }
    assert sanitize_state(raw).current_month_index == expected


def test_bracket_match():
    raw = {
        "masterBracket": [
            {"id": "QF-1", "round": "QF", "matchIndex": 1, "sourceMatch1Id": "R16-2", "sourceMatch2Id": "R16-3"},
            {"id": "X", "round": "semis"},
        ]
    }
    first, second = sanitize_state(raw).master_bracket

    assert first.round == RoundType.QUARTERFINAL
    assert first.player1_id is None
    assert first.source_match1_id == "R16-2"
    assert second.round == RoundType.ROUND_OF_16
    assert second.source_match1_id is None


def test_round_trip_of_exported_state():
    raw = {
        "players": [{"id": 1, "name": "Ana", "totalPoints": 14}],
        "monthlyData": [{"id": 1, "name": "Janeiro", "groups": [], "matches": []}],
        "currentMonthIndex": 0,
        "masterBracket": [],
    }
    state = sanitize_state(raw)
    assert sanitize_state(state.to_dict()) == state
