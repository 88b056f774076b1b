from __future__ import annotations

from typing import Any

"""Fixed column removal for the realisation report template.

Indexes refer to the sheet after empty-column pruning and row shifting. They
are tied to one template layout (20 columns):

    0 kode | 1 uraian | 2-12 volume/satuan/detail columns | 13 pagu revisi
    14 lock pagu | 15 periode lalu | 16 periode ini | 17 s.d. periode
    18-19 sisa pagu / persentase (recomputed downstream)

After slicing a row is ``[kode, uraian, pagu revisi, lock pagu, periode lalu,
periode ini, s.d. periode]``.
"""

__all__ = [
    "TRAILING_COLUMNS",
    "DETAIL_COLUMNS",
    "remove_columns",
    "remove_unnecessary_columns",
]

# 第 1 段: 末尾の集計列 (index 18, 19)
TRAILING_COLUMNS = frozenset({18, 19})
# 第 2 段: 第 1 段適用後の index 2..12
DETAIL_COLUMNS = frozenset(range(2, 13))


def remove_columns(rows: list[list[Any]], indexes: frozenset[int]) -> list[list[Any]]:
    """Drop the given positions from every row; rows narrower than an index keep the rest."""
    return [[cell for col, cell in enumerate(row) if col not in indexes] for row in rows]


def remove_unnecessary_columns(rows: list[list[Any]]) -> list[list[Any]]:
    return remove_columns(remove_columns(rows, TRAILING_COLUMNS), DETAIL_COLUMNS)
