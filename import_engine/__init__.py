"""
import_engine - Spreadsheet import pipeline.

Public API:
    run_import(session, kind, path) → ImportReport
    get_schema(kind)                → EntitySchema
"""

from import_engine.importer import run_import, release_upload      # noqa: F401
from import_engine.report import ImportReport, ImportState, RowError   # noqa: F401
from import_engine.field_map import get_schema, SCHEMAS          # noqa: F401
from import_engine.errors import (                               # noqa: F401
    ImportFailure, InvalidFile, PersistenceFailure, CategoryNotFound,
)
