"""Tests for roster management."""

from datetime import date

from tleague.models import AppState, Player
from tleague.roster import add_player, new_league, rename_player


def create_state():
    return AppState(players=[Player(id=1, name="Ana", total_points=14), Player(id=2, name="Bruno")])


def test_rename_player():
    state = create_state()
    new_state = rename_player(state, 1, "  Ana Paula  ")

    assert new_state.get_player(1).name == "Ana Paula"
    assert new_state.get_player(1).total_points == 14
    assert state.get_player(1).name == "Ana"


def test_rename_blank_is_noop():
    state = create_state()
    assert rename_player(state, 1, "   ") is state
    assert rename_player(state, 1, "") is state


def test_rename_unknown_is_noop():
    state = create_state()
    assert rename_player(state, 99, "Zeca") is state


def test_add_player():
    new_state = add_player(create_state(), " Carla ")
    player = new_state.players[-1]

    assert player.id == 3
    assert player.name == "Carla"
    assert player.total_points == 0


def test_add_blank_player_is_noop():
    state = create_state()
    assert add_player(state, "  ") is state


def test_new_league():
    state = new_league(["Ana", "Bruno", "", "Carla", "Diego", "Eva"], today=date(2024, 5, 2))

    assert [p.id for p in state.players] == [1, 2, 3, 4, 5]
    assert state.current_month.name == "Maio"
    assert [g.player_ids for g in state.current_month.groups] == [[1, 2, 3, 4], [5]]
    assert len(state.current_month.matches) == 6
    assert state.master_bracket == []
