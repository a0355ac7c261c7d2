from __future__ import annotations

from dataclasses import dataclass

"""RowData model for the CSV -> JSON converter.

RowData is one data line of a CSV file as read from disk, before coercion.
"""

__all__ = [
    "RowData",
]


@dataclass(frozen=True)
class RowData:
    """One raw CSV record.

    row_number counts records, not physical lines: the header is 1 and the
    first data row is 2. Blank lines, lines dropped for having too many cells
    and line breaks inside quoted cells do not advance it.
    """
    row_number: int  # 1-based record number (header = 1)
    values: dict[str, str]  # Column name -> raw cell text (missing cells omitted)
