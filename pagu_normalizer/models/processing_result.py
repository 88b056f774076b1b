from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

"""Processing result models for the budget report normalizer.

PipelineResult is the output of one conversion run over one sheet.
FileStat / ProcessingResult aggregate a batch run over a directory and feed
the SUMMARY output line.
"""

__all__ = [
    "StepTiming",
    "PipelineResult",
    "FileStat",
    "ProcessingResult",
]


@dataclass(frozen=True)
class StepTiming:
    """Duration of one pipeline step."""
    name: str
    duration_ms: float


@dataclass(frozen=True)
class PipelineResult:
    """Canonical record set produced from one uploaded sheet.

    final_data rows are ``[kode, uraian, pagu revisi, lock pagu, periode lalu,
    periode ini, s.d. periode]``; totals are aligned with columns 2..6.
    """
    final_data: list[list[Any]]
    totals: list[float]  # 5 要素固定
    processed_data_for_preview: list[list[Any]]  # final_data 先頭 N 行 (表示用)
    account_name_map: dict[str, str]  # 末尾セグメント -> 初出の説明
    steps: list[StepTiming] = field(default_factory=list)
    input_rows: int = 0
    total_duration_ms: float = 0.0

    @property
    def output_rows(self) -> int:
        return len(self.final_data)


@dataclass(frozen=True)
class FileStat:
    """Per-file statistics for a batch run."""
    file_name: str
    status: str  # success/failed
    output_rows: int
    elapsed_seconds: float
    output_path: str | None = None
    error: str | None = None


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of a batch run (SUMMARY line source)."""
    success_files: int
    failed_files: int
    total_output_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    throughput_rows_per_sec: float
    file_stats: list[FileStat] | None = None
