"""
import_engine.field_map - Positional column ↔ record-field mapping.

Sheets carry no header-aware mapping: column 1 of the sheet is always
the first Column of the schema, and so on.  A Column flagged `lookup`
holds free text that the CategoryResolver turns into an identifier.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass

from db.models import Employee, Product
from import_engine import validators as v


# ── Validated records ──────────────────────────────────────────────────

@dataclass(frozen=True)
class EmployeeRecord:
    full_name: str
    department: str
    salary: float

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class ProductRecord:
    name: str
    slug: str
    quantity: int
    category_id: int

    def to_dict(self) -> dict:
        return asdict(self)


# ── Schemas ────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class Column:
    label: str                 # sheet header, also used in messages
    attr: str                  # record / model attribute
    rule: v.Rule
    lookup: bool = False


@dataclass(frozen=True)
class EntitySchema:
    kind: str
    model: type
    record: type
    columns: tuple[Column, ...]

    @property
    def width(self) -> int:
        return len(self.columns)

    @property
    def lookup_columns(self) -> list[tuple[int, Column]]:
        return [(i, c) for i, c in enumerate(self.columns) if c.lookup]

    @property
    def headers(self) -> list[str]:
        return [c.label for c in self.columns]


EMPLOYEE_SCHEMA = EntitySchema(
    kind="employees",
    model=Employee,
    record=EmployeeRecord,
    columns=(
        Column("FullName",   "full_name",  v.non_empty_string),
        Column("Department", "department", v.non_empty_string),
        Column("Salary",     "salary",     v.non_negative_number),
    ),
)

PRODUCT_SCHEMA = EntitySchema(
    kind="products",
    model=Product,
    record=ProductRecord,
    columns=(
        Column("Name",     "name",        v.non_empty_string),
        Column("Slug",     "slug",        v.non_empty_string),
        Column("Quantity", "quantity",    v.non_negative_integer),
        Column("Category", "category_id", v.non_empty_string, lookup=True),
    ),
)

SCHEMAS: dict[str, EntitySchema] = {
    s.kind: s for s in (EMPLOYEE_SCHEMA, PRODUCT_SCHEMA)
}


def get_schema(kind: str) -> EntitySchema:
    try:
        return SCHEMAS[kind]
    except KeyError:
        raise ValueError(f"Unknown import kind {kind!r}") from None
