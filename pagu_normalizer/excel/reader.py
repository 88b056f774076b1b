from __future__ import annotations

import io
import zipfile
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

from ..services.pipeline import PipelineError

"""Workbook reader: first sheet, header-less, positional rows.

Row 0 is the first raw row of the sheet, not a semantic header. Blank cells
become ``None`` and trailing blanks are dropped so rows are ragged the way the
sheet is. Only truly blank cells count as missing: strings such as ``NA`` or
``-`` stay text.
"""

__all__ = [
    "EmptyFileError",
    "WorkbookReadError",
    "read_first_sheet",
    "parse_excel_bytes",
    "dataframe_to_rows",
]


class EmptyFileError(PipelineError):
    """Raised when the uploaded file has no content."""


class WorkbookReadError(PipelineError):
    """Raised when the workbook cannot be parsed."""


def _to_cell(value: Any) -> Any:
    if value is None:
        return None
    if isinstance(value, float) and np.isnan(value):
        return None
    if value is pd.NaT:
        return None
    if isinstance(value, np.generic):
        # numpy スカラー -> Python 組込み型
        value = value.item()
        if isinstance(value, float) and np.isnan(value):
            return None
    return value


def dataframe_to_rows(df: pd.DataFrame) -> list[list[Any]]:
    """Convert a header-less DataFrame into ragged rows of plain Python values."""
    rows: list[list[Any]] = []
    for raw in df.itertuples(index=False, name=None):
        row = [_to_cell(v) for v in raw]
        while row and row[-1] is None:
            row.pop()
        rows.append(row)
    return rows


def _read_first_sheet_frame(source: Any) -> pd.DataFrame:
    try:
        xls = pd.ExcelFile(source)
        if not xls.sheet_names:
            return pd.DataFrame()
        # ヘッダなしで生読み / 空セルのみ NaN 扱い
        return xls.parse(xls.sheet_names[0], header=None, keep_default_na=False, na_values=[""])
    except (ValueError, OSError, zipfile.BadZipFile, KeyError) as e:
        raise WorkbookReadError(f"unable to read workbook: {e}") from e


def read_first_sheet(path: Path) -> list[list[Any]]:
    """Read the first sheet of a workbook file into positional rows.

    Raises:
        EmptyFileError: the file is empty
        WorkbookReadError: the file is not a readable workbook
    """
    if not path.exists():
        raise WorkbookReadError(f"file not found: {path}")
    if path.stat().st_size == 0:
        raise EmptyFileError("File content is empty.")
    return dataframe_to_rows(_read_first_sheet_frame(path))


def parse_excel_bytes(content: bytes | None) -> list[list[Any]]:
    """Same as read_first_sheet for an in-memory upload."""
    if not content:
        raise EmptyFileError("File content is empty.")
    return dataframe_to_rows(_read_first_sheet_frame(io.BytesIO(content)))
