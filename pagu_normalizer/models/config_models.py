from __future__ import annotations

from dataclasses import dataclass, field

from ..services.cleaning import FOOTER_MARKER, HEADER_KEYWORD

"""Config dataclasses for the budget report normalizer.

Built by pagu_normalizer/config/loader.py after schema validation. Defaults
here match the realisation report template and the download workbook layout.
"""

__all__ = [
    "DEFAULT_PREVIEW_ROWS",
    "DEFAULT_OUTPUT_SHEET",
    "PeriodLabels",
    "TemplateConfig",
    "NormalizeConfig",
]

DEFAULT_PREVIEW_ROWS = 100
DEFAULT_OUTPUT_SHEET = "Hasil Olahan"


@dataclass(frozen=True)
class PeriodLabels:
    """Header labels of the three realisation columns in the result workbook."""
    periode_lalu: str = "Periode Lalu"
    periode_ini: str = "Periode Ini"
    sd_periode: str = "s.d. Periode"


@dataclass(frozen=True)
class TemplateConfig:
    """Markers of the input report template."""
    header_keyword: str = HEADER_KEYWORD  # この行より上はタイトル行として破棄
    footer_marker: str = FOOTER_MARKER  # 脚注行 (含む行は削除)


@dataclass(frozen=True)
class NormalizeConfig:
    """Root configuration object for a batch run."""
    source_directory: str  # 入力 .xlsx を探すディレクトリ
    output_directory: str  # 結果ブックの出力先
    output_sheet_name: str = DEFAULT_OUTPUT_SHEET
    preview_rows: int = DEFAULT_PREVIEW_ROWS
    period_labels: PeriodLabels = field(default_factory=PeriodLabels)
    template: TemplateConfig = field(default_factory=TemplateConfig)
