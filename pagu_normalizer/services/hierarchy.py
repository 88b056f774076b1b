from __future__ import annotations

import logging
from typing import Any

from ..models.trace import HierarchyState
from .cells import is_empty, is_finite_number, stringify

"""Row restructuring and hierarchical code reconstruction.

Two passes over the cleaned sheet:
1. shift_leading_cells: pull drifted values back into (code, description)
2. build_hierarchical_codes: replace column 0 with a full dotted code, filling
   blank code cells from the trace buffer
"""

__all__ = [
    "shift_leading_cells",
    "build_hierarchical_codes",
    "restructure_and_build_hierarchy",
]

logger = logging.getLogger(__name__)


def _shift_row(source: list[Any]) -> list[Any]:
    row = list(source)
    while len(row) < 2:
        row.append(None)

    # 1) コード列が空 -> 右側で最初の非空セルを移動
    if is_empty(row[0]):
        for i in range(1, len(row)):
            if not is_empty(row[i]):
                row[0] = row[i]
                row[i] = None
                break

    # 2) 説明列が空 -> 列2以降で最初の非数値セルを移動
    if is_empty(row[1]):
        for i in range(2, len(row)):
            val = row[i]
            if not is_empty(val) and not is_finite_number(val):
                row[1] = val
                row[i] = None
                break

    # 3) まだ空 -> コード列の値を説明列へ
    if is_empty(row[1]):
        row[1] = row[0]
        row[0] = None

    return row


def shift_leading_cells(rows: list[list[Any]]) -> list[list[Any]]:
    """Rebuild the (code, description) head of rows whose values drifted right."""
    return [_shift_row(row) for row in rows]


def _normalize_code_text(value: Any) -> str:
    text = stringify(value)
    if text.endswith(".0"):
        text = text[:-2]
    return text


def build_hierarchical_codes(
    rows: list[list[Any]], state: HierarchyState | None = None
) -> list[list[Any]]:
    """Overwrite column 0 of every row with its reconstructed hierarchical code.

    Rows with a code cell keep that code (``.0`` float artefacts removed) and
    feed its segments to the trace; rows without one inherit the trace joined
    with dots.
    """
    if state is None:
        state = HierarchyState()
    start = len(state.codes)
    for row in rows:
        value = row[0] if row else None
        if is_empty(value):
            state.emit_inherited()
        else:
            state.emit_explicit(_normalize_code_text(value))

    result: list[list[Any]] = []
    for row, code in zip(rows, state.codes[start:], strict=True):
        new_row = list(row) if row else [None]
        new_row[0] = code
        result.append(new_row)
    logger.debug(f"hierarchy built rows={len(result)} trace={'.'.join(state.trace.slots)}")
    return result


def restructure_and_build_hierarchy(rows: list[list[Any]]) -> list[list[Any]]:
    """Shift leading cells, then rebuild codes with a fresh trace."""
    return build_hierarchical_codes(shift_leading_cells(rows), HierarchyState())
