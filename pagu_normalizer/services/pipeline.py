from __future__ import annotations

import logging
import time
from collections.abc import Callable
from typing import Any, TypeVar

from ..models.config_models import DEFAULT_PREVIEW_ROWS, TemplateConfig
from ..models.processing_result import PipelineResult, StepTiming
from .cleaning import clean_sheet
from .columns import remove_unnecessary_columns
from .hierarchy import restructure_and_build_hierarchy
from .normalization import derive_account_name_map, normalize_code_and_description
from .totals import filter_and_calculate_totals

"""Spreadsheet normalization pipeline.

raw rows
  -> clean (footer / header / empty columns)
  -> restructure + hierarchical codes
  -> code/description normalization
  -> fixed column removal
  -> filter complete codes + totals
  -> account name map

Every step consumes its whole input and returns a new table; nothing is
shared between runs, so concurrent runs over separate inputs are independent.
"""

__all__ = [
    "PipelineError",
    "EmptyDataError",
    "process_excel_data",
]

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PipelineError(Exception):
    """Base exception for failures that abort a conversion run."""


class EmptyDataError(PipelineError):
    """Raised when initial cleaning leaves no rows."""


def _track_step(steps: list[StepTiming], name: str, fn: Callable[[], T]) -> T:
    start = time.perf_counter()
    data = fn()
    duration_ms = (time.perf_counter() - start) * 1000
    steps.append(StepTiming(name=name, duration_ms=duration_ms))
    logger.debug(f"step '{name}' {duration_ms:.2f}ms")
    return data


def process_excel_data(
    data: list[list[Any]],
    *,
    template: TemplateConfig | None = None,
    preview_rows: int = DEFAULT_PREVIEW_ROWS,
) -> PipelineResult:
    """Turn raw sheet rows into the canonical record set.

    Raises:
        EmptyDataError: cleaning produced no rows
    """
    template = template or TemplateConfig()
    steps: list[StepTiming] = []
    start = time.perf_counter()

    try:
        cleaned = _track_step(
            steps,
            "Clean and Prepare Data",
            lambda: clean_sheet(
                data,
                footer_marker=template.footer_marker,
                header_keyword=template.header_keyword,
            ),
        )
        if not cleaned:
            raise EmptyDataError("Initial cleaning failed or data is empty.")

        structured = _track_step(
            steps, "Restructure and Build Hierarchy", lambda: restructure_and_build_hierarchy(cleaned)
        )
        normalized = _track_step(
            steps, "Normalize Data", lambda: normalize_code_and_description(structured)
        )
        sliced = _track_step(steps, "Remove Columns", lambda: remove_unnecessary_columns(normalized))
        final_data, totals = _track_step(
            steps, "Filter and Calculate Totals", lambda: filter_and_calculate_totals(sliced)
        )
        account_name_map = _track_step(
            steps, "Generate Account Map", lambda: derive_account_name_map(normalized)
        )
    except PipelineError as e:
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.debug(
            f"pipeline failed after {len(steps)} steps ({elapsed_ms:.2f}ms): {e}"
        )
        raise

    total_ms = (time.perf_counter() - start) * 1000
    logger.info(
        f"pipeline input_rows={len(data)} output_rows={len(final_data)} duration_ms={total_ms:.2f}"
    )
    return PipelineResult(
        final_data=final_data,
        totals=totals,
        processed_data_for_preview=final_data[:preview_rows],
        account_name_map=account_name_map,
        steps=steps,
        input_rows=len(data),
        total_duration_ms=total_ms,
    )
