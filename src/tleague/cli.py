"""Command-line interface for tleague."""

import functools
from pathlib import Path

import click

from tleague import __version__


def _load_session(ctx: click.Context):
    """Load config and state file into a LeagueSession."""
    from tleague.config_loader import ConfigError, load_and_validate_config
    from tleague.i18n import get_string
    from tleague.session import LeagueSession
    from tleague.storage import StorageError, load_state

    try:
        cfg = load_and_validate_config(ctx.obj["config_path"])
    except ConfigError as e:
        click.echo(f"[ERROR] Configuration Error: {e}", err=True)
        raise click.Abort()

    state_path = ctx.obj["state_path"] or cfg["state_file"]
    if not Path(state_path).exists():
        click.echo(f"[ERROR] {get_string('cli.no_state', cfg['lang'], path=state_path)}", err=True)
        raise click.Abort()

    try:
        state = load_state(state_path)
    except StorageError as e:
        click.echo(f"[ERROR] {e}", err=True)
        raise click.Abort()

    return LeagueSession.from_config(state, cfg), state_path


def _save_session(session, state_path: str) -> None:
    from tleague.storage import StorageError, save_state

    try:
        save_state(session.state, state_path)
    except StorageError as e:
        click.echo(f"[ERROR] {e}", err=True)
        raise click.Abort()


def admin_command(func):
    """Load the session, log in with --password, run, then save the state."""

    @click.option("--password", envvar="TLEAGUE_PASSWORD", required=True, help="Admin password")
    @click.pass_context
    @functools.wraps(func)
    def wrapper(ctx, password, *args, **kwargs):
        from tleague.i18n import get_string
        from tleague.results import BracketLockedError
        from tleague.session import PermissionDeniedError
        from tleague.storage import StorageError
        from tleague.validation import ValidationError

        session, state_path = _load_session(ctx)
        session.login(password)
        try:
            func(session, *args, **kwargs)
        except PermissionDeniedError:
            click.echo(f"[ERROR] {get_string('cli.auth_denied', session.lang)}", err=True)
            raise click.Abort()
        except BracketLockedError:
            click.echo(f"[ERROR] {get_string('cli.bracket.locked', session.lang)}", err=True)
            raise click.Abort()
        except (ValidationError, StorageError) as e:
            click.echo(f"[ERROR] {e}", err=True)
            raise click.Abort()
        _save_session(session, state_path)

    return wrapper


@click.group()
@click.version_option(version=__version__)
@click.option("--config", "config_path", required=False, help="Path to config YAML file")
@click.option("--state", "state_path", required=False, help="League state JSON file (overrides config)")
@click.pass_context
def cli(ctx, config_path: str, state_path: str):
    """Tennis league manager - monthly groups, Master bracket and rankings."""
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path
    ctx.obj["state_path"] = state_path


@cli.command()
@click.option("--roster", required=False, help="Text file with one player name per line")
@click.option("--force", is_flag=True, help="Replace an existing state file")
@click.pass_context
def init(ctx, roster: str, force: bool):
    """Create the league state from the bundled dataset or a roster file.

    Example:
        tleague init
        tleague init --roster players.txt
    """
    from tleague.config_loader import ConfigError, load_and_validate_config
    from tleague.i18n import get_string
    from tleague.roster import new_league
    from tleague.storage import StorageError, load_seed_state, save_state

    try:
        cfg = load_and_validate_config(ctx.obj["config_path"])
        state_path = ctx.obj["state_path"] or cfg["state_file"]

        if Path(state_path).exists() and not force:
            click.echo(f"[WARNING] {get_string('cli.init.exists', cfg['lang'], path=state_path)}")
            return

        if roster:
            click.echo(f"[INFO] Reading roster: {roster}")
            with open(roster, "r", encoding="utf-8") as f:
                names = f.read().splitlines()
            state = new_league(names, group_size=cfg["group_size"])
        else:
            click.echo("[INFO] Loading bundled dataset")
            state = load_seed_state()

        save_state(state, state_path)
        month = state.current_month.name if state.current_month else "-"
        click.echo(
            f"[SUCCESS] {get_string('cli.init.success', cfg['lang'], players=len(state.players), month=month)}"
        )
    except (ConfigError, StorageError, OSError) as e:
        click.echo(f"[ERROR] {e}", err=True)
        raise click.Abort()


@cli.command()
@click.argument(
    "view",
    type=click.Choice(["ranking", "month", "bracket", "previous", "wo"]),
    default="ranking",
)
@click.pass_context
def show(ctx, view: str):
    """Print a league view.

    Example:
        tleague show ranking
        tleague show bracket
    """
    from tleague.i18n import get_string
    from tleague.standings import group_table, win_rate

    session, _ = _load_session(ctx)
    state = session.state
    names = {p.id: p.name for p in state.players}
    tbd = get_string("common.tbd", session.lang)
    not_played_label = get_string("common.not_played", session.lang)

    if view == "ranking":
        for rank, p in enumerate(session.ranking(), start=1):
            click.echo(
                f"  {rank:>2}. {p.name:<24} {p.total_points:>4}pts "
                f"({p.wins}W-{p.losses}L, {win_rate(p):.0%})"
            )

    elif view == "month":
        month = state.current_month
        if month is None:
            click.echo("[WARNING] No current month")
            return
        click.echo(f"[STATS] {month.name}")
        for group in month.groups:
            click.echo(f"\n  {group.name}")
            for p in group_table(state, group):
                click.echo(f"    {p.name:<24} {p.monthly_points:>3}pts ({p.monthly_wins}W-{p.monthly_losses}L)")
            for m in month.matches:
                if m.player1_id in group.player_ids:
                    result = not_played_label if m.is_not_played else (m.score or "-")
                    marker = " W.O" if m.is_wo else ""
                    click.echo(f"    [{m.id}] {names.get(m.player1_id)} x {names.get(m.player2_id)}: {result}{marker}")

    elif view == "bracket":
        bracket = session.bracket()
        if not bracket:
            click.echo(f"[WARNING] {get_string('cli.bracket.not_ready', session.lang)}")
            return
        for m in bracket:
            p1 = names.get(m.player1_id, tbd) if m.player1_id is not None else tbd
            p2 = names.get(m.player2_id, tbd) if m.player2_id is not None else tbd
            winner = f" -> {names.get(m.winner_id)} {m.score}" if m.winner_id is not None else ""
            click.echo(f"  {m.id:<6} {p1} x {p2}{winner}")

    elif view == "previous":
        for rank, p in enumerate(session.previous_month_ranking(), start=1):
            click.echo(f"  {rank:>2}. {p.name:<24} {p.monthly_points:>3}pts ({p.monthly_wins}W-{p.monthly_losses}L)")

    elif view == "wo":
        for p in session.wo_stats():
            click.echo(f"  {p.name:<24} W.O +{p.total_wo_wins} / -{p.total_wo_losses}")


@cli.command()
@click.argument("match_id")
@click.argument("winner_id", type=int)
@click.argument("score", default="")
@click.option("--wo", is_flag=True, help="Walkover")
@admin_command
def record(session, match_id: str, winner_id: int, score: str, wo: bool):
    """Record a group match result.

    Example:
        tleague record m1-g1-p1-vs-p2 1 "6-3 6-4" --password admin
    """
    from tleague.i18n import get_string

    changed, warnings = session.record_group_match(match_id, winner_id, score, is_wo=wo)
    if not changed:
        click.echo(f"[WARNING] {get_string('cli.unchanged', session.lang, match=match_id)}")
        return
    for warning in warnings:
        click.echo(f"[WARNING] {warning}")
    click.echo(f"[SUCCESS] {get_string('cli.record.success', session.lang, match=match_id)}")


@cli.command()
@click.argument("match_id")
@admin_command
def reset(session, match_id: str):
    """Clear a group match result."""
    from tleague.i18n import get_string

    if not session.reset_group_match(match_id):
        click.echo(f"[WARNING] {get_string('cli.unchanged', session.lang, match=match_id)}")
        return
    click.echo(f"[SUCCESS] {get_string('cli.reset.success', session.lang, match=match_id)}")


@cli.command("not-played")
@click.argument("match_id")
@admin_command
def not_played(session, match_id: str):
    """Mark a group match as not played."""
    from tleague.i18n import get_string

    if not session.mark_not_played(match_id):
        click.echo(f"[WARNING] {get_string('cli.unchanged', session.lang, match=match_id)}")
        return
    click.echo(f"[SUCCESS] {get_string('cli.not_played.success', session.lang, match=match_id)}")


@cli.command("bracket-record")
@click.argument("match_id")
@click.argument("winner_id", type=int)
@click.argument("score", default="")
@admin_command
def bracket_record(session, match_id: str, winner_id: int, score: str):
    """Record a Master bracket result.

    Example:
        tleague bracket-record R16-0 1 "6-2 6-1" --password admin
    """
    from tleague.i18n import get_string

    if not session.record_bracket_match(match_id, winner_id, score):
        click.echo(f"[WARNING] {get_string('cli.unchanged', session.lang, match=match_id)}")
        return
    click.echo(f"[SUCCESS] {get_string('cli.record.success', session.lang, match=match_id)}")


@cli.command("bracket-reset")
@click.argument("match_id")
@admin_command
def bracket_reset(session, match_id: str):
    """Clear a Master bracket result."""
    from tleague.i18n import get_string

    if not session.reset_bracket_match(match_id):
        click.echo(f"[WARNING] {get_string('cli.unchanged', session.lang, match=match_id)}")
        return
    click.echo(f"[SUCCESS] {get_string('cli.reset.success', session.lang, match=match_id)}")


@cli.command()
@click.confirmation_option(prompt="Advance to the next month? This creates new groups and cannot be undone.")
@admin_command
def advance(session):
    """Close the month and create the next one from the standings."""
    from tleague.i18n import get_string

    session.advance_season()
    month = session.state.current_month
    click.echo(f"[SUCCESS] {get_string('cli.advance.success', session.lang, month=month.name)}")
    for group in month.groups:
        click.echo(f"  {group.name}: {len(group.player_ids)} players")


@cli.command()
@click.argument("player_id", type=int)
@click.argument("name")
@admin_command
def rename(session, player_id: int, name: str):
    """Rename a player."""
    from tleague.i18n import get_string

    session.rename_player(player_id, name)
    click.echo(f"[SUCCESS] {get_string('cli.rename.success', session.lang, player_id=player_id, name=name.strip())}")


@cli.command("add-player")
@click.argument("name")
@admin_command
def add_player(session, name: str):
    """Add a player to the roster (grouped from the next month on)."""
    from tleague.i18n import get_string

    player = session.add_player(name)
    if player is None:
        click.echo("[WARNING] Empty name, nothing added")
        return
    click.echo(f"[SUCCESS] {get_string('cli.add_player.success', session.lang, name=player.name, player_id=player.id)}")


@cli.command("export-csv")
@click.option("--out", required=False, help="Output directory (default: .tleague/)")
@click.pass_context
def export_csv(ctx, out: str):
    """Export the overall ranking as CSV."""
    from tleague.exports import generate_ranking_csv, ranking_csv_filename
    from tleague.i18n import get_string
    from tleague.paths import get_data_dir

    session, _ = _load_session(ctx)
    if not session.state.players:
        click.echo(f"[WARNING] {get_string('cli.no_data', session.lang)}")
        return

    out_dir = Path(out) if out else get_data_dir()
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / ranking_csv_filename(session.state)
    path.write_bytes(generate_ranking_csv(session.state, session.lang))
    click.echo(f"[SUCCESS] {get_string('cli.export.success', session.lang, path=path)}")


@cli.command("export-xlsx")
@click.option("--out", required=False, help="Output file (default: .tleague/league.xlsx)")
@click.pass_context
def export_xlsx(ctx, out: str):
    """Export the league as an Excel workbook."""
    from tleague.exports import generate_league_excel
    from tleague.i18n import get_string
    from tleague.paths import get_data_dir

    session, _ = _load_session(ctx)
    path = Path(out) if out else get_data_dir() / "league.xlsx"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(generate_league_excel(session.state, session.lang))
    click.echo(f"[SUCCESS] {get_string('cli.export.success', session.lang, path=path)}")


@cli.command("export-json")
@click.option("--out", required=False, help="Output directory (default: .tleague/)")
@click.pass_context
def export_json(ctx, out: str):
    """Export a JSON backup of the whole league."""
    from tleague.i18n import get_string
    from tleague.paths import get_data_dir
    from tleague.storage import backup_filename

    session, _ = _load_session(ctx)
    out_dir = Path(out) if out else get_data_dir()
    out_dir.mkdir(parents=True, exist_ok=True)
    path = out_dir / backup_filename()
    path.write_text(session.export_json(), encoding="utf-8")
    click.echo(f"[SUCCESS] {get_string('cli.export.success', session.lang, path=path)}")


@cli.command("import-json")
@click.argument("backup", type=click.Path(exists=True, dir_okay=False))
@click.confirmation_option(prompt="Replace ALL current data with this file?")
@admin_command
def import_json(session, backup: str):
    """Replace the league state with a JSON backup."""
    from tleague.i18n import get_string
    from tleague.storage import read_state_text

    session.import_json(read_state_text(backup))
    state = session.state
    message = get_string(
        "cli.import.success", session.lang, players=len(state.players), months=len(state.monthly_data)
    )
    click.echo(f"[SUCCESS] {message}")


if __name__ == "__main__":
    cli()
