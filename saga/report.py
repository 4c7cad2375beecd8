"""Official standings report: summary, top 3, full table, 60% rule.

The report is built from a ``SagaView`` so it uses exactly the same
standings as the live display. PPG is rounded to two decimals here and
nowhere earlier.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import openpyxl
from openpyxl.styles import Font, PatternFill

from .constants import REPORT_TOP_N
from .models import SagaView
from .utils import save_json

logger = logging.getLogger('saga.report')

STANDINGS_HEADERS = ['Rank', 'Fighter', 'PPG', 'W-L', 'Matches', 'Total Points']
BELOW_HEADERS = ['Fighter', 'Matches Played', 'Required']


@dataclass
class ReportRow:
    rank: int
    name: str
    ppg: float
    record: str
    matches: int
    points: int

    def as_list(self) -> list:
        return [self.rank, self.name, self.ppg, self.record, self.matches, self.points]


@dataclass
class StandingsReport:
    """Everything printed on the standings report."""
    title: str
    generated_at: str
    total_matches: int
    min_required: int
    total_players: int
    top: List[ReportRow] = field(default_factory=list)
    standings: List[ReportRow] = field(default_factory=list)
    below_threshold: List[tuple] = field(default_factory=list)  # (name, played, required)

    def to_dict(self) -> dict:
        return {
            'title': self.title,
            'generatedAt': self.generated_at,
            'summary': {
                'totalMatches': self.total_matches,
                'minRequired': self.min_required,
                'totalPlayers': self.total_players,
            },
            'top': [vars(row) for row in self.top],
            'standings': [vars(row) for row in self.standings],
            'belowThreshold': [
                {'name': name, 'played': played, 'required': required}
                for name, played, required in self.below_threshold
            ],
        }


def build_report(view: SagaView, generated_at: Optional[datetime] = None) -> StandingsReport:
    """
    Build the standings report for a view.

    Args:
        view: Display model from ``build_view``
        generated_at: Timestamp to stamp on the report (default: now)

    Returns:
        StandingsReport
    """
    generated_at = generated_at or datetime.now()
    summary = view.summary
    min_required = summary.min_required if summary else 0

    rows = [
        ReportRow(
            rank=row.rank,
            name=row.name,
            ppg=round(row.standing.ppg, 2),
            record=f'{row.standing.wins}-{row.standing.losses}',
            matches=row.standing.games_played,
            points=row.standing.points,
        )
        for row in view.standings
    ]
    below = [
        (row.name, row.standing.games_played, min_required)
        for row in view.standings
        if not row.standing.eligible_for_trophies
    ]

    return StandingsReport(
        title=f'{view.saga_name.upper()} - OFFICIAL STANDINGS REPORT',
        generated_at=generated_at.strftime('%Y-%m-%d %H:%M:%S'),
        total_matches=summary.total_matches if summary else 0,
        min_required=min_required,
        total_players=len(view.standings),
        top=rows[:REPORT_TOP_N],
        standings=rows,
        below_threshold=below,
    )


def export_report_json(report: StandingsReport, path: Path | str) -> Path:
    """Write the report as JSON. Returns the output path."""
    path = Path(path)
    save_json(path, report)
    logger.info(f'Report saved to {path}')
    return path


def _write_header(ws, headers: list[str], fill: PatternFill) -> None:
    ws.append(headers)
    for cell in ws[ws.max_row]:
        cell.font = Font(bold=True)
        cell.fill = fill


def export_report_xlsx(report: StandingsReport, path: Path | str) -> Path:
    """
    Write the report as an Excel workbook.

    Sheets:
        Summary: title, timestamp and league metrics
        Standings: top 3 block followed by the full table
        Below 60%: players short of the participation rule

    Returns:
        The output path
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    header_fill = PatternFill('solid', fgColor='DDDDDD')

    wb = openpyxl.Workbook()
    ws = wb.active
    ws.title = 'Summary'
    ws.append([report.title])
    ws['A1'].font = Font(bold=True, size=14)
    ws.append([f'Generated on: {report.generated_at}'])
    ws.append([])
    _write_header(ws, ['Metric', 'Value'], header_fill)
    ws.append(['Total Matches Played (No Walkovers)', report.total_matches])
    ws.append(['Minimum Required (60% of Max Played)', report.min_required])
    ws.append(['Total Fighters', report.total_players])
    ws.column_dimensions['A'].width = 40

    ws = wb.create_sheet('Standings')
    ws.append(['Top 3 (Based on PPG)'])
    _write_header(ws, STANDINGS_HEADERS[:-1], header_fill)
    for row in report.top:
        ws.append(row.as_list()[:-1])
    ws.append([])
    ws.append(['Full Standings (Sorted by PPG)'])
    _write_header(ws, STANDINGS_HEADERS, header_fill)
    for row in report.standings:
        ws.append(row.as_list())
    ws.column_dimensions['B'].width = 24

    ws = wb.create_sheet('Below 60%')
    if report.below_threshold:
        _write_header(ws, BELOW_HEADERS, PatternFill('solid', fgColor='C83232'))
        for entry in report.below_threshold:
            ws.append(list(entry))
    else:
        ws.append(['All active fighters meet the 60% rule.'])

    wb.save(path)
    wb.close()
    logger.info(f'Report saved to {path}')
    return path
