"""Budget realisation report normalizer.

Turns the first sheet of a Laporan Realisasi Anggaran workbook into a flat
record set (hierarchical code, description, five amount columns), column
totals and an akun name map.
"""

__version__ = "0.1.0"
