from __future__ import annotations

import math
from typing import Any

from ..models.account_summary import AccountSummaryItem
from ..models.processing_result import PipelineResult
from .cells import cell_at, is_finite_number
from .normalization import get_level7_segment, is_six_digit_segment

"""Per-akun rollup of the final record set.

Rows are grouped by their level 7 segment (six digit akun code). The report's
own s.d. periode column is the realisation figure.
"""

__all__ = [
    "PAGU_REVISI_COLUMN",
    "SD_PERIODE_COLUMN",
    "coerce_number",
    "summarize_accounts",
    "progress_percentage",
]

PAGU_REVISI_COLUMN = 2
SD_PERIODE_COLUMN = 6


def coerce_number(value: Any) -> float:
    """Lenient numeric coercion for display figures: numbers and plain numeric
    strings convert, everything else is 0."""
    if is_finite_number(value):
        return float(value)
    if isinstance(value, str):
        text = value.strip()
        # "1_000" のような Python 固有の表記は数値扱いしない
        if text == "" or "_" in text:
            return 0.0
        try:
            number = float(text)
        except ValueError:
            return 0.0
        return number if math.isfinite(number) else 0.0
    return 0.0


def summarize_accounts(result: PipelineResult) -> list[AccountSummaryItem]:
    totals: dict[str, dict[str, Any]] = {}
    for row in result.final_data:
        code = row[0] if row else None
        account_code = get_level7_segment(code)
        if not account_code or not is_six_digit_segment(account_code):
            continue

        pagu_revisi = coerce_number(cell_at(row, PAGU_REVISI_COLUMN))
        realisasi = coerce_number(cell_at(row, SD_PERIODE_COLUMN))
        current = totals.get(account_code)
        if current is not None:
            current["pagu_revisi"] += pagu_revisi
            current["realisasi"] += realisasi
            continue

        description = cell_at(row, 1)
        uraian = (
            result.account_name_map.get(account_code)
            or (description if isinstance(description, str) and description else None)
            or f"Akun {account_code}"
        )
        totals[account_code] = {
            "uraian": uraian,
            "pagu_revisi": pagu_revisi,
            "realisasi": realisasi,
        }

    items: list[AccountSummaryItem] = []
    for code in sorted(totals):
        entry = totals[code]
        pagu = entry["pagu_revisi"]
        realisasi = entry["realisasi"]
        items.append(
            AccountSummaryItem(
                code=code,
                uraian=entry["uraian"],
                pagu_revisi=pagu,
                realisasi=realisasi,
                persentase=(realisasi / pagu * 100) if pagu > 0 else 0.0,
                sisa=pagu - realisasi,
            )
        )
    return items


def progress_percentage(totals: list[float]) -> float:
    """s.d. periode total as a percentage of pagu revisi total."""
    if len(totals) < 5 or totals[0] <= 0:
        return 0.0
    return totals[4] / totals[0] * 100
