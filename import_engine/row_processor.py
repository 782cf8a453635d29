"""
import_engine.row_processor - Validate and transform one sheet row into a record.

Single-responsibility: given an ImportRow, either return a frozen
record ready for the writer, or raise RowRejected carrying every
field error of that row.
"""

from __future__ import annotations

from import_engine.errors import AmbiguousCategory, CategoryNotFound
from import_engine.field_map import EntitySchema
from import_engine.resolver import CategoryResolver
from import_engine.sheet_reader import ImportRow
from import_engine.validators import FieldError


class RowRejected(Exception):
    """Raised when a row cannot be imported."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__("; ".join(errors))


class RowProcessor:

    def __init__(self, schema: EntitySchema, resolver: CategoryResolver | None = None):
        if schema.lookup_columns and resolver is None:
            raise ValueError(f"{schema.kind} import needs a CategoryResolver")
        self._schema = schema
        self._resolver = resolver

    def process(self, row: ImportRow):
        """
        Run every column rule (and the category lookup where the schema
        asks for one).  All failures of the row are reported together.
        """
        values: dict = {}
        errors: list[str] = []

        for pos, column in enumerate(self._schema.columns):
            raw = row.cell(pos)
            try:
                value = column.rule(raw, column.label)
                if column.lookup:
                    value = self._resolver.resolve(raw)
            except (FieldError, CategoryNotFound, AmbiguousCategory) as exc:
                errors.append(str(exc))
                continue
            values[column.attr] = value

        if errors:
            raise RowRejected(errors)
        return self._schema.record(**values)
