from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..excel.reader import EmptyFileError, WorkbookReadError, read_first_sheet
from ..excel.writer import write_result_workbook
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.config_models import NormalizeConfig
from ..models.processing_result import FileStat, PipelineResult, ProcessingResult
from .account_summary import summarize_accounts
from .pipeline import EmptyDataError, PipelineError, process_excel_data
from .progress import ProgressTracker

"""Batch orchestration: every workbook in source_directory -> result workbook.

Each file is converted independently (own rows, own trace buffer). A failing
file is recorded in the error log and the run continues with the next one.
"""

__all__ = [
    "ProcessingError",
    "OUTPUT_SUFFIX",
    "scan_excel_files",
    "output_path_for",
    "convert_file",
    "process_all",
]

logger = logging.getLogger(__name__)

OUTPUT_SUFFIX = "-olahan"


class ProcessingError(Exception):
    """Fatal errors that prevent the batch run from starting."""


def scan_excel_files(directory: Path) -> list[Path]:
    """List .xlsx files in ``directory`` (non-recursive, sorted by name).

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            p for p in directory.iterdir()
            # Excel のロックファイル (~$xxx.xlsx) は除外
            if p.is_file() and p.suffix == ".xlsx" and not p.name.startswith("~$")
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def output_path_for(source: Path, output_directory: Path) -> Path:
    return output_directory / f"{source.stem}{OUTPUT_SUFFIX}.xlsx"


def convert_file(path: Path, config: NormalizeConfig) -> PipelineResult:
    """Read the first sheet of ``path`` and run the normalization pipeline."""
    rows = read_first_sheet(path)
    return process_excel_data(rows, template=config.template, preview_rows=config.preview_rows)


def _classify(exc: Exception) -> tuple[str, str]:
    """(stage, error_type) for the error log."""
    if isinstance(exc, EmptyFileError):
        return "read", "EMPTY_FILE"
    if isinstance(exc, WorkbookReadError):
        return "read", "READ_ERROR"
    if isinstance(exc, EmptyDataError):
        return "pipeline", "EMPTY_DATA"
    if isinstance(exc, PipelineError):
        return "pipeline", "PIPELINE_ERROR"
    if isinstance(exc, OSError):
        return "write", "WRITE_ERROR"
    return "pipeline", "UNEXPECTED_ERROR"


def _process_single_file(
    file_path: Path, config: NormalizeConfig, error_log: ErrorLogBuffer
) -> FileStat:
    start = datetime.now(UTC)
    output_path = output_path_for(file_path, Path(config.output_directory))
    try:
        result = convert_file(file_path, config)
        write_result_workbook(
            result.final_data,
            output_path,
            labels=config.period_labels,
            sheet_name=config.output_sheet_name,
            accounts=summarize_accounts(result),
        )
    except Exception as e:
        stage, error_type = _classify(e)
        error_log.append(
            ErrorRecord.create(
                file=file_path.name, stage=stage, error_type=error_type, message=str(e)
            )
        )
        logger.error(f"file {file_path.name} failed ({error_type}): {e}")
        return FileStat(
            file_name=file_path.name,
            status="failed",
            output_rows=0,
            elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
            error=str(e),
        )

    logger.info(
        f"file {file_path.name} rows={result.output_rows} -> {output_path.name}"
    )
    return FileStat(
        file_name=file_path.name,
        status="success",
        output_rows=result.output_rows,
        elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
        output_path=str(output_path),
    )


def process_all(config: NormalizeConfig, error_log: ErrorLogBuffer | None = None) -> ProcessingResult:
    """Convert every workbook in the configured source directory.

    Raises:
        ProcessingError: source directory missing or unreadable
    """
    start_time = datetime.now(UTC)
    error_log = error_log if error_log is not None else ErrorLogBuffer()

    file_paths = scan_excel_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_rows = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            stat = _process_single_file(file_path, config, error_log)
            if stat.status == "success":
                success_count += 1
                total_rows += stat.output_rows
            else:
                failed_count += 1
            progress.set_postfix(success=success_count, failed=failed_count, rows=total_rows)
            progress.finish_file()
            file_stats.append(stat)

    try:
        log_path = error_log.flush()
    except OSError as e:
        # エラーログ書き込み失敗で全体を失敗させない
        logger.warning(f"error log flush failed: {e}")
    else:
        if log_path is not None:
            logger.info(f"error log written: {log_path}")

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = total_rows / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_output_rows=total_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
        file_stats=file_stats,
    )
