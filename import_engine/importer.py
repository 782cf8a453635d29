"""
import_engine.importer - Top-level orchestrator.

Coordinates sheet_reader → resolver prefetch → row_processor → writer
and produces a structured ImportReport.  The uploaded file is deleted
on every exit path.
"""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.orm import Session

from import_engine.errors import PersistenceFailure
from import_engine.field_map import EntitySchema, get_schema
from import_engine.report import ImportReport, ImportState
from import_engine.resolver import CategoryResolver
from import_engine.row_processor import RowProcessor, RowRejected
from import_engine.sheet_reader import read_rows
from import_engine.writer import write_batch

logger = logging.getLogger(__name__)


def run_import(
    session: Session,
    kind: str | EntitySchema,
    path: str | Path,
) -> ImportReport:
    """
    Import the workbook at `path` as `kind` ("employees" / "products").

    Parameters
    ----------
    session : open session; committed or rolled back here, closed by caller
    kind    : schema name or EntitySchema
    path    : temporary upload, removed before returning or raising

    Returns
    -------
    ImportReport in state COMMITTED, or REJECTED with every row error.
    Raises InvalidFile / PersistenceFailure for request-fatal problems.
    """
    schema = kind if isinstance(kind, EntitySchema) else get_schema(kind)
    report = ImportReport(kind=schema.kind)

    try:
        report.state = ImportState.PARSING
        rows = read_rows(path, schema.width)
        report.total_rows = len(rows)
        logger.info(f"Importing {schema.kind} from {Path(path).name}: {len(rows)} row(s)")

        report.state = ImportState.VALIDATING
        resolver = None
        if schema.lookup_columns:
            resolver = CategoryResolver(session)
            resolver.prefetch(
                row.cell(pos) for row in rows for pos, _ in schema.lookup_columns
            )

        processor = RowProcessor(schema, resolver)
        staged = []
        for row in rows:
            try:
                staged.append(processor.process(row))
            except RowRejected as exc:
                report.add_error(row.row_number, exc.errors)

        if report.errors:
            report.state = ImportState.REJECTED
            logger.info(f"Rejected {schema.kind} import: {len(report.errors)} invalid row(s)")
            return report

        report.state = ImportState.COMMITTING
        if staged:
            try:
                write_batch(session, schema.model, staged)
            except PersistenceFailure:
                report.state = ImportState.ROLLED_BACK
                raise
        report.records = staged
        report.state = ImportState.COMMITTED
        logger.info(f"Committed {len(staged)} {schema.kind} row(s)")
        return report
    finally:
        release_upload(path)


def release_upload(path: str | Path) -> None:
    """Delete the temporary upload; failure is logged, never raised."""
    try:
        Path(path).unlink()
    except OSError as exc:
        logger.warning(f"Could not remove upload {path}: {exc}")
