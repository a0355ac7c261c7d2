"""Domain models for the CSV -> JSON converter."""

from .csv_file import CsvFile, FileStatus
from .error_record import ErrorRecord
from .processing_result import ConversionResult, FileStat
from .row_data import RowData

__all__ = [
    # Per-file models
    "CsvFile",
    "FileStatus",
    "RowData",
    # Results
    "ConversionResult",
    "FileStat",
    "ErrorRecord",
]
