from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

"""Conversion result models.

FileStat carries per-file metrics, ConversionResult the aggregate used for the
SUMMARY line and the CLI exit code.
"""


@dataclass(frozen=True)
class FileStat:
    """Per-file conversion statistics."""
    file_name: str  # source CSV name
    status: str  # success/failed/skipped
    converted_rows: int  # documents written
    elapsed_seconds: float  # file processing time
    failed_rows: int = 0  # rows dropped by transform errors


@dataclass(frozen=True)
class ConversionResult:
    """Aggregated results of one batch conversion."""
    success_files: int
    failed_files: int
    skipped_files: int  # excluded by name (e.g. daemons.csv)
    total_converted_rows: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float  # end - start
    throughput_rows_per_sec: float  # total_converted / elapsed
    total_failed_rows: int = 0
    file_stats: list[FileStat] | None = None

    @property
    def total_files(self) -> int:
        return self.success_files + self.failed_files
