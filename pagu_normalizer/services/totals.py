from __future__ import annotations

import logging
from typing import Any

from .cells import cell_at, is_finite_number, parse_locale_number
from .normalization import is_six_digit_segment, split_code

"""Final row filtering and column totals.

Only complete codes reach the output: at least eight segments, the last being
a six digit akun code. Totals are computed over the kept rows only.
"""

__all__ = [
    "MIN_CODE_SEGMENTS",
    "COLUMNS_TO_SUM",
    "is_complete_code",
    "filter_complete_rows",
    "cell_amount",
    "calculate_totals",
    "filter_and_calculate_totals",
]

logger = logging.getLogger(__name__)

MIN_CODE_SEGMENTS = 8
# pagu revisi, lock pagu, periode lalu, periode ini, s.d. periode
COLUMNS_TO_SUM: tuple[int, ...] = (2, 3, 4, 5, 6)


def is_complete_code(code: Any) -> bool:
    segments = split_code(code)
    if len(segments) < MIN_CODE_SEGMENTS:
        return False
    return is_six_digit_segment(segments[-1])


def filter_complete_rows(rows: list[list[Any]]) -> list[list[Any]]:
    """Keep rows whose column 0 is a complete code, preserving order."""
    return [row for row in rows if row and is_complete_code(row[0])]


def cell_amount(value: Any) -> float:
    """Numeric contribution of a cell; anything unparseable contributes 0."""
    if is_finite_number(value):
        return float(value)
    if isinstance(value, str) and value.strip() != "":
        parsed = parse_locale_number(value)
        if parsed is not None:
            return parsed
    return 0.0


def calculate_totals(
    rows: list[list[Any]], columns: tuple[int, ...] = COLUMNS_TO_SUM
) -> list[float]:
    return [sum((cell_amount(cell_at(row, col)) for row in rows), 0.0) for col in columns]


def filter_and_calculate_totals(rows: list[list[Any]]) -> tuple[list[list[Any]], list[float]]:
    final_data = filter_complete_rows(rows)
    logger.debug(f"filter kept={len(final_data)} dropped={len(rows) - len(final_data)}")
    return final_data, calculate_totals(final_data)
