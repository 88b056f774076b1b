from __future__ import annotations

from pathlib import Path

import pytest

from pagu_normalizer.config.loader import ConfigError, load_config
from pagu_normalizer.models.config_models import (
    DEFAULT_OUTPUT_SHEET,
    DEFAULT_PREVIEW_ROWS,
    PeriodLabels,
    TemplateConfig,
)


def test_load_config_success(write_config: Path):
    cfg = load_config(write_config)
    assert cfg.source_directory == "./data"
    assert cfg.output_directory == "./output"
    assert cfg.output_sheet_name == "Hasil Olahan"
    assert cfg.preview_rows == 100
    assert cfg.period_labels.periode_lalu == "Realisasi s.d. Mei"
    assert cfg.period_labels.sd_periode == "Realisasi s.d. Juni"
    assert cfg.template == TemplateConfig()


def test_load_config_minimal_applies_defaults(temp_workdir: Path):
    p = temp_workdir / "config" / "min.yml"
    p.write_text("source_directory: ./in\noutput_directory: ./out\n", encoding="utf-8")
    cfg = load_config(p)
    assert cfg.output_sheet_name == DEFAULT_OUTPUT_SHEET
    assert cfg.preview_rows == DEFAULT_PREVIEW_ROWS
    assert cfg.period_labels == PeriodLabels()


def test_load_config_partial_labels_and_template(temp_workdir: Path):
    p = temp_workdir / "config" / "partial.yml"
    p.write_text(
        "source_directory: ./in\n"
        "output_directory: ./out\n"
        "period_labels:\n  periode_ini: Juni\n"
        "template:\n  header_keyword: Program Generik\n",
        encoding="utf-8",
    )
    cfg = load_config(p)
    assert cfg.period_labels.periode_ini == "Juni"
    assert cfg.period_labels.periode_lalu == "Periode Lalu"
    assert cfg.template.header_keyword == "Program Generik"
    assert cfg.template.footer_marker == TemplateConfig().footer_marker


def test_env_overrides_directories(write_config: Path, monkeypatch):
    monkeypatch.setenv("PAGU_SOURCE_DIRECTORY", "/srv/lra/in")
    monkeypatch.setenv("PAGU_OUTPUT_DIRECTORY", "/srv/lra/out")
    cfg = load_config(write_config)
    assert cfg.source_directory == "/srv/lra/in"
    assert cfg.output_directory == "/srv/lra/out"


def test_empty_env_value_does_not_override(write_config: Path, monkeypatch):
    monkeypatch.setenv("PAGU_SOURCE_DIRECTORY", "")
    assert load_config(write_config).source_directory == "./data"


def test_missing_file(temp_workdir: Path):
    with pytest.raises(ConfigError, match="config file not found"):
        load_config(temp_workdir / "config" / "nope.yml")


def test_invalid_yaml(temp_workdir: Path):
    p = temp_workdir / "config" / "bad.yml"
    p.write_text("source_directory: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="invalid yaml"):
        load_config(p)


def test_root_must_be_mapping(temp_workdir: Path):
    p = temp_workdir / "config" / "list.yml"
    p.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="mapping"):
        load_config(p)


def test_empty_file_fails_required_keys(temp_workdir: Path):
    p = temp_workdir / "config" / "empty.yml"
    p.write_text("", encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(p)


@pytest.mark.parametrize(
    "body",
    [
        "output_directory: ./out\n",
        "source_directory: ./in\noutput_directory: ./out\nunknown: 1\n",
        "source_directory: ./in\noutput_directory: ./out\npreview_rows: -1\n",
        "source_directory: ./in\noutput_directory: ./out\npreview_rows: many\n",
        "source_directory: ./in\noutput_directory: ./out\noutput_sheet_name: " + "x" * 32 + "\n",
        "source_directory: ./in\noutput_directory: ./out\nperiod_labels:\n  bulan: Juni\n",
    ],
)
def test_schema_violations(temp_workdir: Path, body: str):
    p = temp_workdir / "config" / "invalid.yml"
    p.write_text(body, encoding="utf-8")
    with pytest.raises(ConfigError, match="config validation failed"):
        load_config(p)
