"""
import_engine.errors - Failures that end an import request.

Per-field validation problems are not exceptions at this level; they
are collected into RowError entries on the ImportReport.
"""

from __future__ import annotations


class ImportFailure(Exception):
    """Base class for failures fatal to one import request."""


class InvalidFile(ImportFailure):
    """Missing upload, unreadable workbook or no worksheet."""


class PersistenceFailure(ImportFailure):
    """The batch insert failed and was rolled back."""


class CategoryNotFound(LookupError):
    """No category slug matches the normalised free-text name."""

    def __init__(self, name):
        self.name = name
        super().__init__(f'Category "{name}" not found in categories table')


class AmbiguousCategory(LookupError):
    """More than one category row shares the normalised slug."""

    def __init__(self, name, matches: int):
        self.name = name
        self.matches = matches
        super().__init__(
            f'Category "{name}" matches {matches} rows in categories table'
        )
