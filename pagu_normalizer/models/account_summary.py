from __future__ import annotations

from dataclasses import dataclass

__all__ = [
    "AccountSummaryItem",
]


@dataclass(frozen=True)
class AccountSummaryItem:
    """Per-akun (level 7 segment) rollup of the final record set."""
    code: str  # 6 桁 akun コード
    uraian: str
    pagu_revisi: float
    realisasi: float  # s.d. periode
    persentase: float  # realisasi / pagu_revisi * 100
    sisa: float  # pagu_revisi - realisasi
