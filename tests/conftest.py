# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path
from typing import Any

import pytest

from pagu_normalizer.logging.init import reset_logging
from report_builders import make_workbook, report_rows


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_pagu_env(monkeypatch):
    monkeypatch.delenv("PAGU_SOURCE_DIRECTORY", raising=False)
    monkeypatch.delenv("PAGU_OUTPUT_DIRECTORY", raising=False)


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./output
output_sheet_name: Hasil Olahan
preview_rows: 100
period_labels:
  periode_lalu: Realisasi s.d. Mei
  periode_ini: Realisasi Juni
  sd_periode: Realisasi s.d. Juni
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "normalize.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def raw_report() -> list[list[Any]]:
    return report_rows()


@pytest.fixture()
def report_workbook(temp_workdir: Path) -> Path:
    return make_workbook(temp_workdir / "data" / "lra_juni.xlsx", report_rows())
