"""
api.routes_import - /api/v1/{employees,products}/import endpoints.

Accepts one .xlsx via multipart upload (field 'file' or 'excelFile').
Columns are positional:
    employees  FullName | Department | Salary
    products   Name | Slug | Quantity | Category
"""

import logging

from flask import jsonify
from werkzeug.exceptions import HTTPException

from api import api_bp
from api.uploads import stage_upload
from db import get_session
from import_engine import run_import, InvalidFile, PersistenceFailure
from services.errors import ServiceError

logger = logging.getLogger(__name__)


@api_bp.route("/employees/import", methods=["POST"])
def import_employees():
    """POST /api/v1/employees/import"""
    return _import("employees")


@api_bp.route("/products/import", methods=["POST"])
def import_products():
    """POST /api/v1/products/import"""
    return _import("products")


def _import(kind: str):
    session = get_session()
    try:
        path = stage_upload()
        report = run_import(session, kind, path)
    except InvalidFile as exc:
        return jsonify({"error": str(exc)}), 400
    except PersistenceFailure:
        return jsonify({"error": f"Failed to import {kind}"}), 500
    except (ServiceError, HTTPException):
        raise
    except Exception:
        logger.exception(f"Unexpected error importing {kind}")
        return jsonify({"error": f"Failed to import {kind}"}), 500
    finally:
        session.close()

    if report.errors:
        return jsonify(report.to_dict()), 400
    return jsonify(report.to_dict())
