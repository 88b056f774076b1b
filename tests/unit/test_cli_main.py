from __future__ import annotations

from pathlib import Path
from unittest.mock import patch

from pagu_normalizer.cli import main
from report_builders import make_workbook


def test_main_success(write_config: Path, report_workbook: Path, temp_workdir: Path, capsys):
    code = main(["--config", str(write_config)])
    out = capsys.readouterr().out
    assert code == 0
    assert "SUMMARY files=1/1 success=1 failed=0 rows=4" in out
    assert (temp_workdir / "output" / "lra_juni-olahan.xlsx").exists()


def test_main_config_error(temp_workdir: Path, capsys):
    code = main(["--config", str(temp_workdir / "config" / "missing.yml")])
    assert code == 1
    assert "ERROR config: config file not found" in capsys.readouterr().out


def test_main_missing_source_directory(write_config: Path, temp_workdir: Path, capsys):
    (temp_workdir / "data").rmdir()
    code = main(["--config", str(write_config)])
    assert code == 1
    assert "ERROR directory not found" in capsys.readouterr().out


def test_main_env_file_overrides_source(write_config: Path, temp_workdir: Path, capsys, monkeypatch):
    other = temp_workdir / "incoming"
    make_workbook(other / "lra.xlsx", [["Program Dukungan Manajemen"]])
    env = temp_workdir / ".env.test"
    env.write_text(f"PAGU_SOURCE_DIRECTORY={other}\n", encoding="utf-8")
    # load_dotenv は os.environ を直接書き換えるので後片付けを登録
    monkeypatch.setenv("PAGU_SOURCE_DIRECTORY", "")

    code = main(["--config", str(write_config), "--env-file", str(env)])
    out = capsys.readouterr().out
    assert code == 0
    assert f"Processing files from: {other}" in out
    assert (temp_workdir / "output" / "lra-olahan.xlsx").exists()


def test_main_partial_failure_exit_code(write_config: Path, report_workbook: Path, temp_workdir: Path, capsys):
    (temp_workdir / "data" / "zz_empty.xlsx").write_bytes(b"")
    code = main(["--config", str(write_config)])
    out = capsys.readouterr().out
    assert code == 2
    assert "ERROR file zz_empty.xlsx failed (EMPTY_FILE)" in out
    assert "SUMMARY files=2/2 success=1 failed=1" in out


def test_main_debug_flag(write_config: Path, report_workbook: Path, capsys):
    assert main(["--config", str(write_config), "--debug"]) == 0
    out = capsys.readouterr().out
    assert "DEBUG debug mode enabled" in out
    assert "DEBUG step 'Clean and Prepare Data'" in out


def test_inspect_data_prints_without_writing(write_config: Path, report_workbook: Path, temp_workdir: Path, capsys):
    code = main(["--config", str(write_config), "--inspect-data"])
    out = capsys.readouterr().out
    assert code == 0
    assert "FILE: lra_juni.xlsx" in out
    assert "rows=4 totals=[9000.0, 0.0, 2634.5, 1250.0, 3884.5]" in out
    assert "WA.4073.EBA.962.051.0A.521211.000001" in out
    assert not (temp_workdir / "output").exists()


def test_inspect_data_reports_file_errors(write_config: Path, temp_workdir: Path, capsys):
    (temp_workdir / "data" / "empty.xlsx").write_bytes(b"")
    assert main(["--config", str(write_config), "--inspect-data"]) == 0
    assert "error=File content is empty." in capsys.readouterr().out


def test_inspect_data_no_files(write_config: Path, capsys):
    assert main(["--config", str(write_config), "--inspect-data"]) == 0
    assert "inspect: no .xlsx files" in capsys.readouterr().out


def test_processing_error_is_fatal(write_config: Path, capsys):
    from pagu_normalizer.services.orchestrator import ProcessingError

    with patch("pagu_normalizer.cli.__main__.process_all", side_effect=ProcessingError("unreadable")):
        assert main(["--config", str(write_config)]) == 1
    assert "ERROR processing: unreadable" in capsys.readouterr().out


def test_inspect_data_survives_unwrapped_reader_error(write_config: Path, report_workbook: Path, capsys):
    with patch("pagu_normalizer.cli.__main__.convert_file", side_effect=[KeyError("xl/workbook.xml")]):
        assert main(["--config", str(write_config), "--inspect-data"]) == 0
    out = capsys.readouterr().out
    assert "FILE: lra_juni.xlsx" in out
    assert "error='xl/workbook.xml'" in out
