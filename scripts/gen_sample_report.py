#!/usr/bin/env python3
"""Sample dataset generation for the budget report normalizer.

Generates a synthetic Laporan Realisasi Anggaran workbook in the fixed
template layout:
- Title rows above the first program row (discarded by the normalizer)
- One spacer column after the code column and one at the far right (pruned)
- 20 data columns: kode, uraian, 11 numeric detail columns, pagu revisi,
  lock pagu, periode lalu, periode ini, s.d. periode, sisa, persentase
- Akun header rows with a code cell, detail rows without one and with a
  ``NNNNNN. Uraian`` description
- The Lock Pagu footnote as the last row

Useful for manual runs and rough performance checks of the CLI.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

import numpy as np
import pandas as pd

FOOTER_NOTE = "*Lock Pagu adalah jumlah pagu yang sedang dalam proses usulan revisi DIPA atau POK."
DETAIL_COLUMNS = 11
RAW_WIDTH = 22  # 20 data columns + 2 spacer columns

AKUN = [
    ("521211", "Belanja Bahan"),
    ("521213", "Belanja Honor Output Kegiatan"),
    ("521811", "Belanja Barang Persediaan Barang Konsumsi"),
    ("522151", "Belanja Jasa Profesi"),
    ("524111", "Belanja Perjalanan Dinas Biasa"),
    ("524113", "Belanja Perjalanan Dinas Dalam Kota"),
]


def _raw_row(code: Any, uraian: str, amounts: list[float] | None, rng: np.random.Generator) -> list[Any]:
    """Lay out one report row in raw (pre-pruning) column positions."""
    row: list[Any] = [None] * RAW_WIDTH
    row[0] = code
    # row[1] は空の区切り列
    row[2] = uraian
    if amounts is not None:
        details = rng.integers(1, 500, DETAIL_COLUMNS).tolist()
        row[3:3 + DETAIL_COLUMNS] = details
        pagu, lock, lalu, ini = amounts
        sd = lalu + ini
        row[14:21] = [pagu, lock, lalu, ini, sd, pagu - sd, round(sd / pagu * 100, 2) if pagu else 0]
    return row


def generate_report_rows(
    komponen: int, akun_per_komponen: int, seed: int = 42, items_per_akun: int = 3
) -> list[list[Any]]:
    rng = np.random.default_rng(seed)
    rows: list[list[Any]] = [
        ["LAPORAN REALISASI ANGGARAN"] + [None] * (RAW_WIDTH - 1),
        ["Satuan Kerja: Contoh Satker"] + [None] * (RAW_WIDTH - 1),
    ]
    rows.append(_raw_row("WA", "Program Dukungan Manajemen", None, rng))
    rows.append(_raw_row("4073", "Dukungan Manajemen dan Pelaksanaan Tugas Teknis Lainnya", None, rng))
    rows.append(_raw_row("4073.EBA", "Layanan Dukungan Manajemen Internal", None, rng))
    rows.append(_raw_row("4073.EBA.962", "Layanan Umum", None, rng))

    for k in range(komponen):
        rows.append(_raw_row(f"{51 + k:03d}", f"Komponen {k + 1}", None, rng))
        rows.append(_raw_row("0A", "Tanpa Sub Komponen", None, rng))
        for code, name in AKUN[:akun_per_komponen]:
            rows.append(_raw_row(code, name, None, rng))
            for item in range(1, items_per_akun + 1):
                pagu = float(rng.integers(10, 500)) * 1_000_000
                lock = float(rng.integers(0, 3)) * 1_000_000
                lalu = float(np.floor(pagu * rng.uniform(0, 0.5)))
                ini = float(np.floor(pagu * rng.uniform(0, 0.3)))
                rows.append(_raw_row(None, f"{item:06d}. Rincian {item}", [pagu, lock, lalu, ini], rng))

    rows.append([FOOTER_NOTE] + [None] * (RAW_WIDTH - 1))
    return rows


def create_excel_file(
    output_path: Path, komponen: int, akun_per_komponen: int, seed: int = 42, items_per_akun: int = 3
) -> int:
    """Write the sample workbook; returns the number of detail rows generated."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    rows = generate_report_rows(komponen, akun_per_komponen, seed, items_per_akun)
    with pd.ExcelWriter(output_path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name="Sheet1", header=False, index=False)
    detail_rows = komponen * min(akun_per_komponen, len(AKUN)) * items_per_akun
    print(f"Created Excel file: {output_path}")
    print(f"  Raw rows: {len(rows)}")
    print(f"  Detail rows: {detail_rows}")
    return detail_rows


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Generate a synthetic budget realisation report workbook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s data/sample.xlsx
  %(prog)s data/large.xlsx --komponen 500 --akun 6 --seed 7
        """,
    )
    parser.add_argument("output", type=Path, help="Output Excel file path")
    parser.add_argument("--komponen", type=int, default=5, help="Number of komponen blocks (default: 5)")
    parser.add_argument("--akun", type=int, default=4, help="Akun rows per komponen (default: 4)")
    parser.add_argument("--items", type=int, default=3, help="Detail rows per akun (default: 3)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    args = parser.parse_args()

    if args.komponen <= 0 or args.komponen > 949:
        print("Error: --komponen must be between 1 and 949", file=sys.stderr)
        return 1
    if args.akun <= 0 or args.items <= 0:
        print("Error: --akun and --items must be positive", file=sys.stderr)
        return 1

    create_excel_file(args.output, args.komponen, args.akun, args.seed, args.items)
    return 0


if __name__ == "__main__":
    sys.exit(main())
