"""
Export Module for tleague
Generates the ranking CSV and an Excel workbook with league data.
"""

import csv
import io
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side

from tleague.i18n import DEFAULT_LANGUAGE, get_list, get_string
from tleague.models import AppState, Player
from tleague.results import effective_bracket
from tleague.standings import rank_players, wo_table


def ranking_row(rank: int, p: Player) -> list:
    """One CSV/Excel row: rank, name, lifetime counters, monthly counters."""
    return [
        rank,
        p.name,
        p.total_points, p.games_played, p.wins, p.losses,
        p.sets_won, p.points_from_games, p.total_wo_wins, p.total_wo_losses,
        p.monthly_points, p.monthly_games_played, p.monthly_wins, p.monthly_losses,
        p.monthly_sets_won, p.monthly_points_from_games, p.monthly_wo_wins, p.monthly_wo_losses,
    ]


def generate_ranking_csv(state: AppState, lang: str = DEFAULT_LANGUAGE) -> bytes:
    """Generate the overall ranking CSV.

    One row per player ranked by total points then name. UTF-8 with BOM so
    spreadsheet tools pick up the encoding; the name column is quoted.

    Returns: CSV file as bytes.
    """
    output = io.StringIO()
    # Only the name is a string, so QUOTE_NONNUMERIC quotes exactly that column
    writer = csv.writer(output, quoting=csv.QUOTE_NONNUMERIC, lineterminator="\n")

    output.write(",".join(get_list("csv.ranking_headers", lang)) + "\n")
    for rank, player in enumerate(rank_players(state.players), start=1):
        writer.writerow(ranking_row(rank, player))

    csv_content = output.getvalue().rstrip("\n")
    return ('\ufeff' + csv_content).encode('utf-8')


def ranking_csv_filename(state: AppState) -> str:
    """File name of the ranking export, e.g. ranking_geral_mes_de_março.csv."""
    month = state.current_month
    month_name = month.name.lower() if month else ""
    return f"ranking_geral_mes_de_{month_name}.csv"


def _style_header_row(ws, num_cols: int):
    """Apply consistent header styling to the first row."""
    header_font = Font(bold=True, color="FFFFFF", size=11)
    header_fill = PatternFill(start_color="155E75", end_color="155E75", fill_type="solid")
    header_alignment = Alignment(horizontal="center", vertical="center")
    thin_border = Border(
        left=Side(style="thin"),
        right=Side(style="thin"),
        top=Side(style="thin"),
        bottom=Side(style="thin"),
    )
    for col in range(1, num_cols + 1):
        cell = ws.cell(row=1, column=col)
        cell.font = header_font
        cell.fill = header_fill
        cell.alignment = header_alignment
        cell.border = thin_border


def _auto_width(ws):
    """Auto-adjust column widths based on content."""
    for column_cells in ws.columns:
        max_length = 0
        column_letter = column_cells[0].column_letter
        for cell in column_cells:
            if cell.value is not None:
                max_length = max(max_length, len(str(cell.value)))
        adjusted_width = min(max_length + 3, 40)
        ws.column_dimensions[column_letter].width = max(adjusted_width, 8)


def generate_league_excel(state: AppState, lang: str = DEFAULT_LANGUAGE) -> bytes:
    """
    Generate a multi-sheet Excel workbook with the league data.

    Sheets: overall ranking, current month matches, Master bracket and the
    walkover table.

    Returns: Excel file as bytes.
    """
    names = {p.id: p.name for p in state.players}
    tbd = get_string("common.tbd", lang)
    yes = get_string("common.yes_label", lang)
    no = get_string("common.no_label", lang)
    not_played_label = get_string("common.not_played", lang)

    def name_of(player_id: Optional[int], empty: str = "") -> str:
        if player_id is None:
            return empty
        return names.get(player_id, str(player_id))

    wb = Workbook()

    # --- Sheet 1: Ranking ---
    ws_ranking = wb.active
    ws_ranking.title = get_string("excel.sheets.ranking", lang)
    headers = get_list("csv.ranking_headers", lang)
    ws_ranking.append(headers)
    _style_header_row(ws_ranking, len(headers))
    gold_fill = PatternFill(start_color="FFF9C4", end_color="FFF9C4", fill_type="solid")
    for rank, player in enumerate(rank_players(state.players), start=1):
        ws_ranking.append(ranking_row(rank, player))
        # Master contenders
        if rank <= 16:
            for col in range(1, len(headers) + 1):
                ws_ranking.cell(row=ws_ranking.max_row, column=col).fill = gold_fill
    _auto_width(ws_ranking)

    # --- Sheet 2: Current month matches ---
    ws_month = wb.create_sheet(get_string("excel.sheets.month", lang))
    headers = get_list("excel.month_headers", lang)
    ws_month.append(headers)
    _style_header_row(ws_month, len(headers))
    month = state.current_month
    if month is not None:
        group_of = {pid: g.name for g in month.groups for pid in g.player_ids}
        for m in month.matches:
            ws_month.append([
                group_of.get(m.player1_id, ""),
                name_of(m.player1_id),
                name_of(m.player2_id),
                name_of(m.winner_id, "-"),
                not_played_label if m.is_not_played else (m.score or "-"),
                yes if m.is_wo else no,
                yes if m.is_not_played else no,
            ])
    _auto_width(ws_month)

    # --- Sheet 3: Master bracket ---
    ws_bracket = wb.create_sheet(get_string("excel.sheets.bracket", lang))
    headers = get_list("excel.bracket_headers", lang)
    ws_bracket.append(headers)
    _style_header_row(ws_bracket, len(headers))
    for m in effective_bracket(state):
        ws_bracket.append([
            m.round.value,
            m.id,
            name_of(m.player1_id, tbd),
            name_of(m.player2_id, tbd),
            name_of(m.winner_id, "-"),
            m.score or "-",
        ])
    _auto_width(ws_bracket)

    # --- Sheet 4: Walkovers ---
    ws_wo = wb.create_sheet(get_string("excel.sheets.wo", lang))
    headers = get_list("excel.wo_headers", lang)
    ws_wo.append(headers)
    _style_header_row(ws_wo, len(headers))
    for p in wo_table(state.players):
        ws_wo.append([p.name, p.total_wo_wins, p.total_wo_losses])
    _auto_width(ws_wo)

    # Save to bytes
    output = io.BytesIO()
    wb.save(output)
    output.seek(0)
    return output.read()
