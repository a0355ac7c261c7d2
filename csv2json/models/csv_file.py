from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""CsvFile domain model and FileStatus enum.

The CsvFile represents the conversion context for a single CSV file,
tracking its status from discovery to success/failed.
"""


class FileStatus(Enum):
    """Status enum for CsvFile processing lifecycle.

    State transitions: pending -> (success | failed); excluded files are
    skipped without being converted.

    - PENDING: File discovered but not yet converted
    - SUCCESS: JSON written for the file
    - FAILED: File could not be read, parsed or written
    - SKIPPED: File excluded by name (never reaches the transformer)
    """
    PENDING = "pending"
    SUCCESS = "success"
    FAILED = "failed"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class CsvFile:
    """Conversion context for a single CSV file."""
    path: Path                           # Source CSV path
    name: str                            # Source file name
    output_path: Path | None = None      # Destination JSON path
    start_time: datetime | None = None   # Processing start (UTC)
    end_time: datetime | None = None     # Processing end (UTC)
    status: FileStatus = FileStatus.PENDING
    total_rows: int = 0                  # Documents written
    failed_rows: int = 0                 # Rows dropped by a transform error
    error: str | None = None             # Failure reason summary
