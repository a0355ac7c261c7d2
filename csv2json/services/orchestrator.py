from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from ..config.loader import ConvertConfig
from ..logging.error_log import ErrorLogBuffer, ErrorRecord
from ..models.csv_file import CsvFile, FileStatus
from ..models.processing_result import ConversionResult, FileStat
from ..tabular.reader import CsvParseError, CsvReadError, normalize_table, read_csv_file
from ..transform.normalizer import process_row
from .progress import ProgressTracker

logger = logging.getLogger(__name__)

"""Batch conversion of one input folder.

<input_root>/<folder>/*.csv  ->  <output_root>/<folder>/*.json

Each file is converted inside its own error boundary: a file that cannot be
read, parsed or written is recorded in the error log and counted as failed,
and the batch moves on. A line wider than the header, or a row whose
transformation raises, is recorded and left out of the file's output.
"""

CSV_SUFFIX = ".csv"
JSON_SUFFIX = ".json"


class ProcessingError(Exception):
    """Fatal batch error (input folder unusable)."""
    pass


def scan_csv_files(directory: Path, excluded: Iterable[str] = ()) -> tuple[list[Path], list[Path]]:
    """Scan directory for .csv files (non-recursive, sorted by name).

    Args:
        directory: Directory to scan
        excluded: File names that are never converted

    Returns:
        (files to convert, excluded files found)

    Raises:
        ProcessingError: If directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")

    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")

    excluded_names = set(excluded)
    try:
        candidates = sorted(
            (p for p in directory.iterdir() if p.is_file() and p.name.endswith(CSV_SUFFIX)),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e

    files = [p for p in candidates if p.name not in excluded_names]
    skipped = [p for p in candidates if p.name in excluded_names]
    return files, skipped


def output_path_for(csv_path: Path, export_dir: Path) -> Path:
    """`monsters.csv` -> `<export_dir>/monsters.json`."""
    return export_dir / csv_path.with_suffix(JSON_SUFFIX).name


def write_json(path: Path, documents: list[dict[str, Any]], indent: int = 2) -> None:
    """Serialize documents as a JSON array (trailing newline included)."""
    with path.open("w", encoding="utf-8") as f:
        json.dump(documents, f, indent=indent, ensure_ascii=False, allow_nan=False)
        f.write("\n")


def _failed(csv_path: Path, output_path: Path, start_time: datetime, error: str) -> CsvFile:
    return CsvFile(
        path=csv_path,
        name=csv_path.name,
        output_path=output_path,
        start_time=start_time,
        end_time=datetime.now(UTC),
        status=FileStatus.FAILED,
        error=error,
    )


def convert_file(
    csv_path: Path,
    export_dir: Path,
    config: ConvertConfig,
    error_log: ErrorLogBuffer,
    folder: str,
) -> CsvFile:
    """Convert one CSV file to its JSON counterpart.

    Never raises; failures are reported through the returned CsvFile and the
    error log.
    """
    start_time = datetime.now(UTC)
    output_path = output_path_for(csv_path, export_dir)

    def record(row: int, error_type: str, message: str) -> None:
        error_log.append(ErrorRecord.create(file=csv_path.name, row=row, error_type=error_type, message=message))

    bad_lines: list[list[str]] = []

    try:
        try:
            frame = read_csv_file(csv_path, encoding=config.encoding, on_bad_line=bad_lines.append)
            table = normalize_table(frame, csv_path.name)
        except CsvReadError as e:
            logger.error("Error reading file %s: %s", csv_path.name, e)
            record(-1, "CSV_READ_ERROR", str(e))
            return _failed(csv_path, output_path, start_time, str(e))
        except CsvParseError as e:
            logger.error("Error parsing CSV file %s: %s", csv_path.name, e)
            record(-1, "CSV_PARSE_ERROR", str(e))
            return _failed(csv_path, output_path, start_time, str(e))

        # the tokenizer does not report where a dropped line was
        for cells in bad_lines:
            logger.warning("file=%s dropped line with %d cells: %s", csv_path.name, len(cells), cells)
            record(-1, "ROW_PARSE_ERROR", f"line has more cells than the header ({len(cells)}): {cells}")

        documents: list[dict[str, Any]] = []
        failed_rows = len(bad_lines)
        for row in table.rows:
            try:
                documents.append(process_row(row.values, table.headers))
            except Exception as e:
                failed_rows += 1
                logger.warning("file=%s row=%d transform failed: %s", csv_path.name, row.row_number, e)
                record(row.row_number, "ROW_TRANSFORM_ERROR", str(e))
        logger.debug(
            "file=%s headers=%s rows=%d failed_rows=%d",
            csv_path.name,
            table.headers,
            len(documents),
            failed_rows,
        )

        try:
            write_json(output_path, documents, indent=config.json_indent)
        except (OSError, TypeError, ValueError) as e:
            logger.error("Error writing JSON for %s: %s", csv_path.name, e)
            record(-1, "JSON_WRITE_ERROR", str(e))
            return _failed(csv_path, output_path, start_time, str(e))

        logger.info("Successfully converted %s to JSON in folder %s", csv_path.name, folder)
        return CsvFile(
            path=csv_path,
            name=csv_path.name,
            output_path=output_path,
            start_time=start_time,
            end_time=datetime.now(UTC),
            status=FileStatus.SUCCESS,
            total_rows=len(documents),
            failed_rows=failed_rows,
        )

    except Exception as e:
        logger.error("Unexpected error converting %s: %s", csv_path.name, e)
        record(-1, "UNEXPECTED_ERROR", str(e))
        return _failed(csv_path, output_path, start_time, str(e))


def convert_all(config: ConvertConfig, folder: str) -> ConversionResult:
    """Convert every CSV file of one input folder.

    1. Scan <input_root>/<folder> for .csv files (excluded names skipped)
    2. Ensure <output_root>/<folder> exists
    3. Convert each file in its own error boundary
    4. Flush the error log once and return aggregated metrics

    Raises:
        ProcessingError: input folder missing/unreadable or output folder not creatable
    """
    start_time = datetime.now(UTC)
    import_dir = Path(config.input_root) / folder
    export_dir = Path(config.output_root) / folder
    error_log = ErrorLogBuffer(Path(config.error_log_dir))

    file_paths, skipped = scan_csv_files(import_dir, config.excluded_files)
    file_stats: list[FileStat] = []
    for p in skipped:
        logger.info("Skipping excluded file %s", p.name)
        file_stats.append(
            FileStat(file_name=p.name, status=FileStatus.SKIPPED.value, converted_rows=0, elapsed_seconds=0.0)
        )

    try:
        export_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ProcessingError(f"Cannot create output directory {export_dir}: {e}") from e

    if not file_paths:
        logger.warning("No CSV files found in %s", import_dir)

    success_count = 0
    failed_count = 0
    total_rows = 0
    total_failed_rows = 0

    with ProgressTracker(len(file_paths), description="Converting files") as progress:
        for file_path in file_paths:
            progress.start_file(file_path)

            file_result = convert_file(file_path, export_dir, config, error_log, folder)
            ok = file_result.status == FileStatus.SUCCESS
            if ok:
                success_count += 1
                total_rows += file_result.total_rows
                total_failed_rows += file_result.failed_rows
            else:
                failed_count += 1

            progress.set_postfix(success=success_count, failed=failed_count, rows=total_rows)
            progress.finish_file(success=ok)

            elapsed = 0.0
            if file_result.start_time and file_result.end_time:
                elapsed = (file_result.end_time - file_result.start_time).total_seconds()
            file_stats.append(
                FileStat(
                    file_name=file_path.name,
                    status=file_result.status.value,
                    converted_rows=file_result.total_rows,
                    elapsed_seconds=elapsed,
                    failed_rows=file_result.failed_rows,
                )
            )

    try:
        log_path = error_log.flush()
    except OSError as e:
        # the batch result stands even if the error log cannot be written
        logger.error("Error writing error log: %s", e)
    else:
        if log_path is not None:
            logger.info("Error details written to %s", log_path)

    end_time = datetime.now(UTC)
    elapsed_seconds = (end_time - start_time).total_seconds()
    throughput_rps = total_rows / elapsed_seconds if elapsed_seconds > 0 else 0.0

    return ConversionResult(
        success_files=success_count,
        failed_files=failed_count,
        skipped_files=len(skipped),
        total_converted_rows=total_rows,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=elapsed_seconds,
        throughput_rows_per_sec=throughput_rps,
        total_failed_rows=total_failed_rows,
        file_stats=file_stats,
    )
