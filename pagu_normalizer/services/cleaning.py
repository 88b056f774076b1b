from __future__ import annotations

import logging
from typing import Any

from .cells import is_empty

"""Initial sheet cleaning: footer note removal, header location, empty columns.

The input is the first sheet of the budget realisation report, read header-less.
Rows above the first program row are report titles and are discarded.
"""

__all__ = [
    "FOOTER_MARKER",
    "HEADER_KEYWORD",
    "drop_footer_rows",
    "locate_header",
    "prune_empty_columns",
    "clean_sheet",
]

logger = logging.getLogger(__name__)

FOOTER_MARKER = (
    "*Lock Pagu adalah jumlah pagu yang sedang dalam proses usulan revisi DIPA atau POK."
)
HEADER_KEYWORD = "Program Dukungan Manajemen"


def _row_contains(row: list[Any], needle: str) -> bool:
    return any(needle in str(cell) for cell in row)


def drop_footer_rows(rows: list[list[Any]], marker: str = FOOTER_MARKER) -> list[list[Any]]:
    """Remove every row in which any cell contains the footnote marker."""
    return [row for row in rows if not _row_contains(row, marker)]


def locate_header(rows: list[list[Any]], keyword: str = HEADER_KEYWORD) -> list[list[Any]]:
    """Discard rows above the first row mentioning ``keyword``.

    When the keyword is missing the rows are returned unchanged and a warning
    is logged; processing continues on the untrimmed data.
    """
    for index, row in enumerate(rows):
        if _row_contains(row, keyword):
            return rows[index:]
    logger.warning(f"header '{keyword}' not found; keeping all {len(rows)} rows")
    return rows


def prune_empty_columns(rows: list[list[Any]]) -> list[list[Any]]:
    """Remove columns that are empty in every row (missing index counts as empty)."""
    if not rows:
        return rows
    width = max(len(row) for row in rows)
    empty_columns = {
        col
        for col in range(width)
        if all(col >= len(row) or is_empty(row[col]) for row in rows)
    }
    if not empty_columns:
        return rows
    logger.debug(f"pruning {len(empty_columns)} empty columns")
    return [
        [cell for col, cell in enumerate(row) if col not in empty_columns]
        for row in rows
    ]


def clean_sheet(
    rows: list[list[Any]],
    *,
    footer_marker: str = FOOTER_MARKER,
    header_keyword: str = HEADER_KEYWORD,
) -> list[list[Any]]:
    """Footer removal -> header location -> empty column pruning."""
    df = drop_footer_rows(rows, footer_marker)
    df = locate_header(df, header_keyword)
    return prune_empty_columns(df)
