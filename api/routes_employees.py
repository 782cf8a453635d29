"""
api.routes_employees - /api/v1/employees CRUD and export endpoints.
"""

from flask import Response, current_app, request, jsonify

from api import api_bp
from api.payload import json_body
from api.auth import require_auth
from db import get_session
from services.employees_service import EmployeesService
from services.pagination import parse_bound, parse_page

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _listing_args():
    cfg = current_app.config
    page = parse_page(
        request.args.get("page"), request.args.get("limit"),
        default_limit=cfg["API_DEFAULT_LIMIT"], max_limit=cfg["API_MAX_LIMIT"],
    )
    filters = {
        "q": request.args.get("search", "").strip(),
        "min_salary": parse_bound(request.args.get("minSalary"), "minSalary"),
        "max_salary": parse_bound(request.args.get("maxSalary"), "maxSalary"),
    }
    return page, filters


@api_bp.route("/employees")
def list_employees():
    """GET /api/v1/employees?page=1&limit=10&search=&minSalary=&maxSalary="""
    page, filters = _listing_args()
    session = get_session()
    try:
        employees, total = EmployeesService.search(session, page, **filters)
        return jsonify(page.envelope([e.to_dict() for e in employees], total))
    finally:
        session.close()


@api_bp.route("/employees/export")
def export_employees():
    """
    GET /api/v1/employees/export  (same query parameters as the listing)

    Returns employees.xlsx in the layout /employees/import reads.
    """
    page, filters = _listing_args()
    session = get_session()
    try:
        content = EmployeesService.export_xlsx(session, page, **filters)
    finally:
        session.close()
    return Response(
        content,
        mimetype=XLSX_MIMETYPE,
        headers={"Content-Disposition": "attachment; filename=employees.xlsx"},
    )


@api_bp.route("/employees/<int:employee_id>")
def get_employee(employee_id: int):
    """GET /api/v1/employees/{id}"""
    session = get_session()
    try:
        return jsonify(EmployeesService.get(session, employee_id).to_dict())
    finally:
        session.close()


@api_bp.route("/employees", methods=["POST"])
@require_auth
def create_employee():
    """POST /api/v1/employees  JSON body: {full_name, department, salary}"""
    data = json_body()
    session = get_session()
    try:
        employee = EmployeesService.create(session, data)
        session.commit()
        return jsonify({
            "message": "Employee created successfully",
            "employee": employee.to_dict(),
        }), 201
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@api_bp.route("/employees/<int:employee_id>", methods=["PATCH", "PUT"])
@require_auth
def update_employee(employee_id: int):
    """PATCH /api/v1/employees/{id}  (any subset of the create fields)"""
    data = json_body()
    session = get_session()
    try:
        employee = EmployeesService.update(session, employee_id, data)
        session.commit()
        return jsonify({
            "message": "Employee updated successfully",
            "employee": employee.to_dict(),
        })
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@api_bp.route("/employees/<int:employee_id>", methods=["DELETE"])
@require_auth
def delete_employee(employee_id: int):
    """DELETE /api/v1/employees/{id}"""
    session = get_session()
    try:
        employee = EmployeesService.delete(session, employee_id)
        session.commit()
        return jsonify({"message": "Employee deleted", "employee": employee})
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
