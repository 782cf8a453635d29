"""
import_engine.report - Structured result of one spreadsheet import.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

REJECTED_MESSAGE = "Invalid data in Excel file"


class ImportState(enum.Enum):
    RECEIVED    = "received"
    PARSING     = "parsing"
    VALIDATING  = "validating"
    REJECTED    = "rejected"
    COMMITTING  = "committing"
    COMMITTED   = "committed"
    ROLLED_BACK = "rolled_back"


@dataclass(frozen=True)
class RowError:
    row_number: int
    errors: tuple[str, ...]

    def to_dict(self) -> dict:
        return {"row_number": self.row_number, "errors": list(self.errors)}


@dataclass
class ImportReport:
    kind: str
    state: ImportState = ImportState.RECEIVED
    total_rows: int = 0
    records: list = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)

    def add_error(self, row_number: int, errors: list[str]):
        self.errors.append(RowError(row_number, tuple(errors)))

    @property
    def message(self) -> str:
        return f"Imported {len(self.records)} row(s) into {self.kind}"

    def to_dict(self) -> dict:
        if self.errors:
            return {
                "error": REJECTED_MESSAGE,
                "details": [e.to_dict() for e in self.errors],
            }
        return {
            "message": self.message,
            "data": [r.to_dict() for r in self.records],
        }
