"""
services.employees_service - CRUD, search and .xlsx export of employees.

Field rules are the same ones the spreadsheet import applies, so a
value accepted by one path is accepted by the other.
"""

from __future__ import annotations

import io

from openpyxl import Workbook
from openpyxl.styles import Font, PatternFill
from sqlalchemy.orm import Session, Query

from db.models import Employee
from import_engine.field_map import EMPLOYEE_SCHEMA
from import_engine.validators import FieldError
from services.errors import BadInput, NotFound
from services.pagination import Page

# JSON key → (schema column).  The API accepts either the attribute name
# or the sheet header (full_name / FullName).
_COLUMNS = {c.attr: c for c in EMPLOYEE_SCHEMA.columns}

EXPORT_WIDTHS = {"FullName": 20, "Department": 20, "Salary": 15}
HEADER_FONT = Font(bold=True, color="FFFFFF")
HEADER_FILL = PatternFill(fill_type="solid", fgColor="4F81BD")


def validate_payload(data: dict, *, partial: bool = False) -> dict:
    """Apply the import rules to a JSON body; BadInput lists every failure."""
    clean: dict = {}
    errors: list[str] = []
    for attr, column in _COLUMNS.items():
        if attr in data:
            raw = data[attr]
        elif column.label in data:
            raw = data[column.label]
        elif partial:
            continue
        else:
            raw = None
        try:
            clean[attr] = column.rule(raw, column.label)
        except FieldError as exc:
            errors.append(str(exc))
    if errors:
        raise BadInput("Validation failed", details=errors)
    if not clean:
        raise BadInput("No fields to update")
    return clean


class EmployeesService:

    # ── Read ───────────────────────────────────────────────────────────

    @staticmethod
    def filtered(
        session: Session,
        *,
        q: str = "",
        min_salary: float | None = None,
        max_salary: float | None = None,
    ) -> Query:
        query = session.query(Employee)
        if q:
            like = f"%{q}%"
            query = query.filter(
                Employee.full_name.ilike(like) | Employee.department.ilike(like)
            )
        if min_salary is not None:
            query = query.filter(Employee.salary >= min_salary)
        if max_salary is not None:
            query = query.filter(Employee.salary <= max_salary)
        return query

    @staticmethod
    def search(session: Session, page: Page, **filters) -> tuple[list[Employee], int]:
        """Alphabetical by full_name.  Returns (employees, total_count)."""
        query = EmployeesService.filtered(session, **filters)
        total = query.count()
        employees = (
            query.order_by(Employee.full_name.asc(), Employee.id.asc())
            .offset(page.offset).limit(page.limit).all()
        )
        return employees, total

    @staticmethod
    def get(session: Session, employee_id: int) -> Employee:
        employee = session.get(Employee, employee_id)
        if employee is None:
            raise NotFound("Employee not found")
        return employee

    # ── Write ──────────────────────────────────────────────────────────

    @staticmethod
    def create(session: Session, data: dict) -> Employee:
        employee = Employee(**validate_payload(data))
        session.add(employee)
        session.flush()
        return employee

    @staticmethod
    def update(session: Session, employee_id: int, data: dict) -> Employee:
        fields = validate_payload(data, partial=True)
        employee = EmployeesService.get(session, employee_id)
        for attr, val in fields.items():
            setattr(employee, attr, val)
        session.flush()
        return employee

    @staticmethod
    def delete(session: Session, employee_id: int) -> dict:
        employee = EmployeesService.get(session, employee_id)
        snapshot = employee.to_dict()
        session.delete(employee)
        session.flush()
        return snapshot

    # ── Export ─────────────────────────────────────────────────────────

    @staticmethod
    def export_xlsx(session: Session, page: Page, **filters) -> bytes:
        """
        One page of employees as a workbook laid out exactly like the
        import expects (FullName, Department, Salary), header styled.
        """
        employees, _total = EmployeesService.search(session, page, **filters)

        wb = Workbook()
        ws = wb.active
        ws.title = "Employees"
        ws.append(EMPLOYEE_SCHEMA.headers)
        for col_idx, header in enumerate(EMPLOYEE_SCHEMA.headers, start=1):
            cell = ws.cell(row=1, column=col_idx)
            cell.font = HEADER_FONT
            cell.fill = HEADER_FILL
            ws.column_dimensions[cell.column_letter].width = EXPORT_WIDTHS[header]

        for e in employees:
            ws.append([e.full_name, e.department, e.salary])

        buf = io.BytesIO()
        wb.save(buf)
        return buf.getvalue()
