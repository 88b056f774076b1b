from __future__ import annotations

import math
import re
from typing import Any

"""Cell-level helpers shared by every pipeline step.

Cells coming out of the reader are one of:
- ``None`` (blank cell / index beyond the end of a ragged row)
- ``int`` / ``float`` (numeric cell)
- ``str`` (text cell)

All helpers here are total: they never raise on odd input, they fall back.
"""

__all__ = [
    "cell_at",
    "is_empty",
    "is_finite_number",
    "parse_locale_number",
    "stringify",
]

# 先頭の数値部分のみ解釈する ("12 rb" -> 12)
_LEADING_FLOAT = re.compile(r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")


def is_empty(value: Any) -> bool:
    """True for ``None``, NaN and ``""``. Zero and whitespace strings are not empty."""
    if value is None:
        return True
    if isinstance(value, float) and math.isnan(value):
        return True
    return isinstance(value, str) and value == ""


def cell_at(row: list[Any], index: int) -> Any:
    """Positional access that treats out-of-range indexes as an empty cell."""
    if 0 <= index < len(row):
        return row[index]
    return None


def is_finite_number(value: Any) -> bool:
    # bool は int のサブクラスなので除外
    if isinstance(value, bool):
        return False
    if isinstance(value, int):
        return True
    return isinstance(value, float) and math.isfinite(value)


def stringify(value: Any) -> str:
    """Render a cell as text the way the spreadsheet shows it.

    Integral floats lose their fractional part (``123.0`` -> ``"123"``) so that
    codes read from numeric cells compare equal to codes typed as text.
    """
    if value is None:
        return ""
    if isinstance(value, float) and math.isfinite(value) and value.is_integer():
        return str(int(value))
    return str(value)


def parse_locale_number(text: str) -> float | None:
    """Parse an Indonesian-formatted number (``.`` thousands, ``,`` decimal).

    Every ``.`` is removed before ``,`` becomes the decimal point, so a plain
    decimal such as ``"1234.56"`` reads as ``123456``. Only the leading numeric
    part is used (``"12 rb"`` -> ``12``). Returns ``None`` when nothing parses.
    """
    formatted = text.replace(".", "").replace(",", ".").strip()
    match = _LEADING_FLOAT.match(formatted)
    if match is None:
        return None
    value = float(match.group(0))
    if not math.isfinite(value):
        return None
    return value
