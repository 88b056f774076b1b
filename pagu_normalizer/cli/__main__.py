from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..logging.init import log_summary, set_debug, setup_logging
from ..models.config_models import NormalizeConfig
from ..services.orchestrator import ProcessingError, convert_file, process_all, scan_excel_files
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (PAGU_* overrides) and the YAML config
- Convert every .xlsx in source_directory into output_directory
- Print the SUMMARY line and exit with the contract exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

INSPECT_SAMPLE_ROWS = 3


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env using python-dotenv; values override the process environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="pagu-normalizer",
        description="Normalize budget realisation reports (Laporan Realisasi Anggaran) into flat workbooks",
    )
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Config YAML path")
    p.add_argument("--env-file", type=Path, default=Path(".env"), help=".env file to load")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data",
        action="store_true",
        help="Print totals and first output rows per file without writing output",
    )
    return p.parse_args(argv)


def _inspect_data(cfg: NormalizeConfig) -> int:
    try:
        excel_files = scan_excel_files(Path(cfg.source_directory))
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not excel_files:
        print("inspect: no .xlsx files")
        return EXIT_SUCCESS_ALL
    for f in excel_files:
        print(f"FILE: {f.name}")
        try:
            result = convert_file(f, cfg)
        except Exception as e:
            # バッチ処理と同様、1 ファイルの失敗で中断しない
            print(f"  error={e}")
            continue
        print(f"  rows={result.output_rows} totals={result.totals}")
        for row in result.processed_data_for_preview[:INSPECT_SAMPLE_ROWS]:
            print(f"    {row}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみシステム引数を読む ([] はそのまま使う)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(args.env_file, override=True)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Processing files from: {directory}")
    try:
        result = process_all(cfg)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary が "SUMMARY " を付与する
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
