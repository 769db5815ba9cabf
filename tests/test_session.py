"""Tests for the league session and its admin gate."""

from datetime import date

import pytest

from tleague.config_loader import validate_config
from tleague.results import BracketLockedError
from tleague.session import LeagueSession, PermissionDeniedError
from tleague.storage import StorageError, load_seed_state
from tleague.validation import ValidationError


@pytest.fixture
def session():
    return LeagueSession(load_seed_state(), admin_password="secret")


@pytest.fixture
def admin(session):
    assert session.login("secret")
    return session


def first_match(session):
    return session.state.current_month.matches[0]


def test_login(session):
    assert session.login("wrong") is False
    assert session.is_admin is False
    assert session.login("secret") is True
    session.logout()
    assert session.is_admin is False


@pytest.mark.parametrize(
    "operation",
    [
        lambda s: s.record_group_match("m1-g1-p1-vs-p2", 1, "6-0 6-0"),
        lambda s: s.reset_group_match("m1-g1-p1-vs-p2"),
        lambda s: s.mark_not_played("m1-g1-p1-vs-p2"),
        lambda s: s.record_bracket_match("R16-0", 1, "6-0 6-0"),
        lambda s: s.reset_bracket_match("R16-0"),
        lambda s: s.advance_season(),
        lambda s: s.rename_player(1, "X"),
        lambda s: s.add_player("X"),
        lambda s: s.import_json("{}"),
    ],
)
def test_changes_need_admin(session, operation):
    before = session.state
    with pytest.raises(PermissionDeniedError):
        operation(session)
    assert session.state is before


def test_views_need_no_login(session):
    assert len(session.ranking()) == 16
    assert len(session.contenders()) == 16
    assert len(session.bracket()) == 15
    assert session.previous_month_ranking() == []
    assert session.wo_stats() == []
    assert session.export_json().startswith("{")


def test_record_valid_result(admin):
    match = first_match(admin)
    changed, warnings = admin.record_group_match(match.id, match.player1_id, "6-3 6-4")

    assert changed is True
    assert warnings == []
    assert admin.state.get_player(match.player1_id).total_points == 14


def test_record_odd_score_warns_but_records(admin):
    match = first_match(admin)
    changed, warnings = admin.record_group_match(match.id, match.player1_id, "6-5")

    assert changed is True
    assert len(warnings) == 1
    assert admin.state.current_month.find_match(match.id).winner_id == match.player1_id


def test_record_wrong_winner_raises(admin):
    match = first_match(admin)
    with pytest.raises(ValidationError):
        admin.record_group_match(match.id, 99, "6-0 6-0")


def test_bracket_lock_surfaces(admin):
    bracket = {m.id: m for m in admin.bracket()}
    admin.record_bracket_match("R16-0", bracket["R16-0"].player1_id, "6-0 6-0")
    admin.record_bracket_match("R16-1", bracket["R16-1"].player1_id, "6-0 6-0")
    admin.record_bracket_match("QF-0", bracket["R16-0"].player1_id, "6-0 6-0")

    with pytest.raises(BracketLockedError):
        admin.reset_bracket_match("R16-0")


def test_advance_and_previous_month(admin):
    match = first_match(admin)
    admin.record_group_match(match.id, match.player1_id, "6-3 6-4")
    admin.advance_season(today=date(2024, 1, 15))

    assert admin.state.current_month.name == "Fevereiro"
    previous = admin.previous_month_ranking()
    assert previous[0].id == match.player1_id
    assert previous[0].monthly_points == 14


def test_group_size_from_config():
    config = validate_config({"admin_password": "pw", "group_size": 8, "lang": "en"})
    session = LeagueSession.from_config(load_seed_state(), config)
    session.login("pw")
    session.advance_season(today=date(2024, 1, 15))

    assert session.lang == "en"
    assert [len(g.player_ids) for g in session.state.current_month.groups] == [8, 8]


def test_add_and_rename(admin):
    player = admin.add_player("  Zeca  ")
    assert player.id == 17
    assert player.name == "Zeca"
    assert admin.add_player(" ") is None

    admin.rename_player(17, "Zeca Pagodinho")
    assert admin.state.get_player(17).name == "Zeca Pagodinho"


def test_import_export_round_trip(admin):
    match = first_match(admin)
    admin.record_group_match(match.id, match.player1_id, "6-3 6-4")
    exported = admin.export_json()
    recorded = admin.state

    admin.import_json('{"players": []}')
    assert admin.state.players == []

    admin.import_json(exported)
    assert admin.state == recorded


def test_import_bad_json_keeps_state(admin):
    before = admin.state
    with pytest.raises(StorageError):
        admin.import_json("not json")
    assert admin.state is before


def test_no_op_operations_report_unchanged(admin):
    before = admin.state

    assert admin.record_group_match("no-such-match", 1, "6-0 6-0") == (False, [])
    assert admin.reset_group_match("no-such-match") is False
    assert admin.mark_not_played("no-such-match") is False
    assert admin.record_bracket_match("X-9", 1, "6-0 6-0") is False
    # QF slots are still empty
    assert admin.record_bracket_match("QF-0", 1, "6-0 6-0") is False
    assert admin.reset_bracket_match("R16-0") is False
    assert admin.state is before


def test_bracket_needs_sixteen_players():
    session = LeagueSession(load_seed_state(), admin_password="secret")
    session.login("secret")
    session.state.players.pop()

    assert session.record_bracket_match("R16-0", 1, "6-0 6-0") is False
    assert session.state.master_bracket == []
