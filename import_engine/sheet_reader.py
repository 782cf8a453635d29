"""
import_engine.sheet_reader - Low-level .xlsx reading.

Responsibilities:
  • Open the workbook read-only with cached formula values
  • Pick the first worksheet
  • Skip the header row and fully empty rows
  • Return positional cell tuples tagged with their sheet row number
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

from openpyxl import load_workbook

from import_engine.errors import InvalidFile

HEADER_ROW = 1


@dataclass(frozen=True)
class ImportRow:
    row_number: int            # row number as shown in the spreadsheet
    cells: tuple[Any, ...]     # padded / truncated to the schema width

    def cell(self, position: int) -> Any:
        return self.cells[position]


def _blank(value: Any) -> bool:
    return value is None or value == ""


def read_rows(path: str | Path, width: int) -> list[ImportRow]:
    """
    Read every data row of the first worksheet at `path`.
    Raises InvalidFile when the file is not a readable workbook.
    """
    try:
        workbook = load_workbook(path, read_only=True, data_only=True)
    except Exception as exc:
        raise InvalidFile("Could not read the uploaded file as an Excel workbook") from exc

    try:
        if not workbook.worksheets:
            raise InvalidFile("No worksheet found in the Excel file")
        sheet = workbook.worksheets[0]

        rows: list[ImportRow] = []
        for row_number, values in enumerate(
            sheet.iter_rows(min_row=HEADER_ROW + 1, values_only=True),
            start=HEADER_ROW + 1,
        ):
            values = tuple(values or ())
            if all(_blank(val) for val in values):
                continue
            cells = values[:width] + (None,) * max(0, width - len(values))
            rows.append(ImportRow(row_number=row_number, cells=cells))
        return rows
    finally:
        workbook.close()
