from __future__ import annotations

import csv
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.row_data import RowData

"""CSV reader.

The first line is the header, every following non-blank line is a record.
Cells are kept as raw strings (no pandas NA conversion, no dtype inference):
typing is the transformer's job. A line with more cells than the header is
dropped and handed to the caller's ``on_bad_line`` callback; the rest of the
file still loads.
"""

__all__ = [
    "CsvReadError",
    "CsvParseError",
    "CsvData",
    "read_csv_file",
    "normalize_table",
]


class CsvReadError(Exception):
    """Raised when the CSV file cannot be opened or read."""

class CsvParseError(Exception):
    """Raised when the CSV content cannot be tokenized or decoded."""

@dataclass
class CsvData:
    file_name: str
    headers: list[str]
    rows: list[RowData]


def read_csv_file(
    path: Path,
    encoding: str = "utf-8-sig",
    on_bad_line: Callable[[list[str]], None] | None = None,
) -> pd.DataFrame:
    """Read a CSV file into a raw, header-less DataFrame of strings.

    Parameters
    ----------
    path: CSV file path
    encoding: text encoding (utf-8-sig drops a leading BOM)
    on_bad_line: called with the cells of every line wider than the header;
        such lines are left out of the frame
    """

    def drop_line(cells: list[str]) -> None:
        if on_bad_line is not None:
            on_bad_line(cells)
        return None

    try:
        return pd.read_csv(
            path,
            header=None,
            dtype=object,  # no casting: short rows keep their None padding
            keep_default_na=False,
            na_filter=False,
            skip_blank_lines=True,
            encoding=encoding,
            engine="python",  # callable on_bad_lines needs the python engine
            on_bad_lines=drop_line,
        )
    except pd.errors.EmptyDataError:
        return pd.DataFrame()
    except (pd.errors.ParserError, csv.Error, UnicodeDecodeError) as e:
        raise CsvParseError(f"{path.name}: {e}") from e
    except OSError as e:
        raise CsvReadError(f"{path.name}: {e}") from e


def _is_cell(value: Any) -> bool:
    # short rows are padded by pandas with non-string fillers
    return isinstance(value, str)


def normalize_table(df: pd.DataFrame, file_name: str) -> CsvData:
    """Split a raw DataFrame into header names and RowData records.

    Steps:
    1. Empty frame -> no headers, no rows
    2. Row 0 is the header
    3. Remaining rows become RowData; cells missing on short rows are omitted
       and rows with no cells at all are dropped
    """
    if df.shape[0] == 0:
        return CsvData(file_name=file_name, headers=[], rows=[])

    headers = [c if _is_cell(c) else "" for c in df.iloc[0].tolist()]
    rows: list[RowData] = []
    for row_number, raw in enumerate(df.iloc[1:].itertuples(index=False, name=None), start=2):
        values = {col: val for col, val in zip(headers, raw, strict=False) if _is_cell(val)}
        if not values:
            continue
        rows.append(RowData(row_number=row_number, values=values))
    return CsvData(file_name=file_name, headers=headers, rows=rows)
