from __future__ import annotations

import re
from typing import Any

"""Code/description normalization and code segment helpers.

Descriptions in the report often carry the account code as a prefix
(``"521211. Belanja Bahan"``). The prefix belongs in the hierarchical code,
not in the description.
"""

__all__ = [
    "DESCRIPTION_PREFIX_REGEX",
    "split_code",
    "get_last_segment",
    "get_segment_at_level",
    "get_level7_segment",
    "is_six_digit_segment",
    "normalize_code_and_description",
    "derive_account_name_map",
]

DESCRIPTION_PREFIX_REGEX = re.compile(r"^([0-9]{6})\.\s*(.+)$")
SIX_DIGIT_CODE_REGEX = re.compile(r"^[0-9]{6}$")

# akun (6 桁) は 7 番目のセグメント
LEVEL7_INDEX = 6


def split_code(code: Any) -> list[str]:
    """Trimmed, non-empty dot segments of a code; non-string codes have none."""
    if not isinstance(code, str):
        return []
    return [segment.strip() for segment in code.strip().split(".") if segment.strip()]


def get_last_segment(code: Any) -> str:
    segments = split_code(code)
    return segments[-1] if segments else ""


def get_segment_at_level(code: Any, level_index: int) -> str:
    segments = split_code(code)
    if 0 <= level_index < len(segments):
        return segments[level_index]
    return ""


def get_level7_segment(code: Any) -> str:
    return get_segment_at_level(code, LEVEL7_INDEX)


def is_six_digit_segment(segment: str) -> bool:
    return bool(SIX_DIGIT_CODE_REGEX.fullmatch(segment))


def _normalize_row(source: list[Any]) -> list[Any]:
    row = list(source)
    description = row[1].strip() if len(row) > 1 and isinstance(row[1], str) else ""
    match = DESCRIPTION_PREFIX_REGEX.match(description)
    if match is None:
        return row

    six_digit_code, cleaned_description = match.groups()
    segments = split_code(row[0] if row else None)
    if not segments or segments[-1] != six_digit_code:
        segments.append(six_digit_code)

    while len(row) < 2:
        row.append(None)
    row[0] = ".".join(segments)
    row[1] = cleaned_description.strip()
    return row


def normalize_code_and_description(rows: list[list[Any]]) -> list[list[Any]]:
    """Move a ``NNNNNN.`` description prefix into the code (appending if absent)."""
    return [_normalize_row(row) for row in rows]


def derive_account_name_map(rows: list[list[Any]]) -> dict[str, str]:
    """Map last code segment -> first-seen description (first write wins)."""
    names: dict[str, str] = {}
    for row in rows:
        code = row[0] if row else None
        description = row[1] if len(row) > 1 else None
        if not isinstance(code, str) or not isinstance(description, str):
            continue
        description = description.strip()
        if not code.strip() or not description:
            continue
        last_segment = get_last_segment(code)
        if last_segment and last_segment not in names:
            names[last_segment] = description
    return names
