from __future__ import annotations

import io
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from openpyxl import Workbook
from openpyxl.styles import Alignment, Font, PatternFill
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from ..models.account_summary import AccountSummaryItem
from ..models.config_models import DEFAULT_OUTPUT_SHEET, PeriodLabels

"""Result workbook writer.

Sheet 1 (``Hasil Olahan``): header row + final_data rows verbatim.
Sheet 2 (``Ringkasan Akun``, optional): per-akun rollup.
"""

__all__ = [
    "SUMMARY_SHEET",
    "result_headers",
    "build_result_workbook",
    "write_result_workbook",
    "result_workbook_bytes",
]

SUMMARY_SHEET = "Ringkasan Akun"
SUMMARY_HEADERS = ["Kode Akun", "Uraian", "Pagu Revisi", "Realisasi", "Persentase", "Sisa"]

HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(start_color="1E40AF", end_color="1E40AF", fill_type="solid")
HEADER_ALIGNMENT = Alignment(horizontal="center")

# Kode / Uraian / 金額 5 列
RESULT_COLUMN_WIDTHS = [20, 50, 15, 15, 15, 15, 15]
SUMMARY_COLUMN_WIDTHS = [12, 50, 18, 18, 12, 18]
NUMBER_FORMAT = "#,##0.##"


def result_headers(labels: PeriodLabels | None = None) -> list[str]:
    labels = labels or PeriodLabels()
    return [
        "Kode",
        "Uraian",
        "Pagu Revisi",
        "Lock Pagu",
        labels.periode_lalu,
        labels.periode_ini,
        labels.sd_periode,
    ]


def _write_sheet(
    ws: Worksheet, headers: list[str], rows: Sequence[Sequence[Any]], widths: list[int]
) -> None:
    ws.append(headers)
    for cell in ws[1]:
        cell.font = HEADER_FONT
        cell.fill = HEADER_FILL
        cell.alignment = HEADER_ALIGNMENT
    for row in rows:
        ws.append(list(row))
    for idx, width in enumerate(widths, start=1):
        ws.column_dimensions[get_column_letter(idx)].width = width


def build_result_workbook(
    final_data: list[list[Any]],
    *,
    labels: PeriodLabels | None = None,
    sheet_name: str = DEFAULT_OUTPUT_SHEET,
    accounts: list[AccountSummaryItem] | None = None,
) -> Workbook:
    wb = Workbook()
    ws = wb.active
    ws.title = sheet_name
    _write_sheet(ws, result_headers(labels), final_data, RESULT_COLUMN_WIDTHS)

    if accounts is not None:
        summary_ws = wb.create_sheet(SUMMARY_SHEET)
        _write_sheet(
            summary_ws,
            SUMMARY_HEADERS,
            [
                [a.code, a.uraian, a.pagu_revisi, a.realisasi, round(a.persentase, 2), a.sisa]
                for a in accounts
            ],
            SUMMARY_COLUMN_WIDTHS,
        )
        for row in summary_ws.iter_rows(min_row=2, min_col=3, max_col=6):
            for cell in row:
                cell.number_format = NUMBER_FORMAT
    return wb


def write_result_workbook(
    final_data: list[list[Any]],
    path: Path,
    *,
    labels: PeriodLabels | None = None,
    sheet_name: str = DEFAULT_OUTPUT_SHEET,
    accounts: list[AccountSummaryItem] | None = None,
) -> Path:
    """Write the result workbook to ``path`` (parent directories are created)."""
    path.parent.mkdir(parents=True, exist_ok=True)
    wb = build_result_workbook(final_data, labels=labels, sheet_name=sheet_name, accounts=accounts)
    wb.save(path)
    return path


def result_workbook_bytes(
    final_data: list[list[Any]],
    *,
    labels: PeriodLabels | None = None,
    sheet_name: str = DEFAULT_OUTPUT_SHEET,
    accounts: list[AccountSummaryItem] | None = None,
) -> bytes:
    """In-memory variant for download responses."""
    buffer = io.BytesIO()
    build_result_workbook(final_data, labels=labels, sheet_name=sheet_name, accounts=accounts).save(buffer)
    return buffer.getvalue()
