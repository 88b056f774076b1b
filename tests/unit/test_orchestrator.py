from __future__ import annotations

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from openpyxl import load_workbook

from pagu_normalizer.excel.reader import EmptyFileError, WorkbookReadError
from pagu_normalizer.logging.error_log import ErrorLogBuffer
from pagu_normalizer.models.config_models import NormalizeConfig
from pagu_normalizer.services.orchestrator import (
    ProcessingError,
    _classify,
    output_path_for,
    process_all,
    scan_excel_files,
)
from pagu_normalizer.services.pipeline import EmptyDataError, PipelineError
from report_builders import make_workbook, report_rows


def _config(root: Path) -> NormalizeConfig:
    return NormalizeConfig(source_directory=str(root / "data"), output_directory=str(root / "output"))


def test_scan_excel_files_sorted_and_filtered(temp_workdir: Path):
    data = temp_workdir / "data"
    for name in ["b.xlsx", "a.xlsx", "~$a.xlsx", "notes.txt", "old.xls"]:
        (data / name).write_bytes(b"x")
    (data / "sub.xlsx").mkdir()
    assert [p.name for p in scan_excel_files(data)] == ["a.xlsx", "b.xlsx"]


def test_scan_excel_files_errors(temp_workdir: Path):
    with pytest.raises(ProcessingError, match="Directory not found"):
        scan_excel_files(temp_workdir / "missing")
    f = temp_workdir / "file.txt"
    f.write_text("x", encoding="utf-8")
    with pytest.raises(ProcessingError, match="not a directory"):
        scan_excel_files(f)


def test_output_path_for():
    assert output_path_for(Path("data/lra_juni.xlsx"), Path("out")) == Path("out/lra_juni-olahan.xlsx")


@pytest.mark.parametrize(
    "exc, expected",
    [
        (EmptyFileError("x"), ("read", "EMPTY_FILE")),
        (WorkbookReadError("x"), ("read", "READ_ERROR")),
        (EmptyDataError("x"), ("pipeline", "EMPTY_DATA")),
        (PipelineError("x"), ("pipeline", "PIPELINE_ERROR")),
        (PermissionError("x"), ("write", "WRITE_ERROR")),
        (RuntimeError("x"), ("pipeline", "UNEXPECTED_ERROR")),
    ],
)
def test_classify(exc, expected):
    assert _classify(exc) == expected


def test_process_all_success(report_workbook: Path, temp_workdir: Path):
    error_log = ErrorLogBuffer(logs_dir=temp_workdir / "logs")
    result = process_all(_config(temp_workdir), error_log)

    assert result.success_files == 1
    assert result.failed_files == 0
    assert result.total_output_rows == 4
    assert result.file_stats[0].status == "success"

    out = temp_workdir / "output" / "lra_juni-olahan.xlsx"
    assert out.exists()
    wb = load_workbook(out)
    assert wb.sheetnames == ["Hasil Olahan", "Ringkasan Akun"]
    assert wb.active.max_row == 5
    assert list(temp_workdir.joinpath("logs").iterdir()) == []


def test_process_all_continues_after_failure(temp_workdir: Path):
    make_workbook(temp_workdir / "data" / "a_ok.xlsx", report_rows())
    (temp_workdir / "data" / "b_empty.xlsx").write_bytes(b"")
    make_workbook(temp_workdir / "data" / "c_blank.xlsx", [["Program Dukungan Manajemen"], [None]])
    make_workbook(temp_workdir / "data" / "d_ok.xlsx", report_rows())

    result = process_all(_config(temp_workdir), ErrorLogBuffer(logs_dir=temp_workdir / "logs"))

    assert result.success_files == 3
    assert result.failed_files == 1
    assert [s.status for s in result.file_stats] == ["success", "failed", "success", "success"]
    # ヘッダ行のみ -> 0 行出力で成功
    assert result.file_stats[2].output_rows == 0

    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    record = json.loads(logs[0].read_text(encoding="utf-8").splitlines()[0])
    assert record["file"] == "b_empty.xlsx"
    assert record["stage"] == "read"
    assert record["error_type"] == "EMPTY_FILE"


def test_process_all_unexpected_error_is_recorded(report_workbook: Path, temp_workdir: Path):
    error_log = ErrorLogBuffer(logs_dir=temp_workdir / "logs")
    with patch("pagu_normalizer.services.orchestrator.read_first_sheet", side_effect=RuntimeError("boom")):
        result = process_all(_config(temp_workdir), error_log)
    assert result.failed_files == 1
    assert result.file_stats[0].error == "boom"


def test_process_all_write_error(report_workbook: Path, temp_workdir: Path):
    error_log = ErrorLogBuffer(logs_dir=temp_workdir / "logs")
    with patch(
        "pagu_normalizer.services.orchestrator.write_result_workbook",
        side_effect=PermissionError("read-only"),
    ), patch.object(error_log, "flush", return_value=None):
        result = process_all(_config(temp_workdir), error_log)
    assert result.failed_files == 1
    assert error_log.records[0].error_type == "WRITE_ERROR"
    assert error_log.records[0].stage == "write"


def test_process_all_flush_failure_does_not_abort(temp_workdir: Path):
    (temp_workdir / "data" / "empty.xlsx").write_bytes(b"")
    error_log = ErrorLogBuffer(logs_dir=temp_workdir / "logs")
    with patch.object(error_log, "flush", side_effect=OSError("disk full")):
        result = process_all(_config(temp_workdir), error_log)
    assert result.failed_files == 1


def test_process_all_missing_source(temp_workdir: Path):
    cfg = NormalizeConfig(source_directory=str(temp_workdir / "none"), output_directory="out")
    with pytest.raises(ProcessingError):
        process_all(cfg, ErrorLogBuffer(logs_dir=temp_workdir / "logs"))


def test_process_all_empty_directory(temp_workdir: Path):
    result = process_all(_config(temp_workdir), ErrorLogBuffer(logs_dir=temp_workdir / "logs"))
    assert result.success_files == 0
    assert result.failed_files == 0
    assert result.file_stats == []
