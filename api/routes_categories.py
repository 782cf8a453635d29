"""
api.routes_categories - /api/v1/categories reference-table endpoints.
"""

from flask import jsonify

from api import api_bp
from api.payload import json_body
from api.auth import require_auth
from db import get_session
from services.categories_service import CategoriesService


@api_bp.route("/categories")
def list_categories():
    """GET /api/v1/categories"""
    session = get_session()
    try:
        return jsonify([c.to_dict() for c in CategoriesService.list(session)])
    finally:
        session.close()


@api_bp.route("/categories", methods=["POST"])
@require_auth
def create_category():
    """
    POST /api/v1/categories  JSON body: {name, slug?}

    slug defaults to the name normalised the way imports match it.
    """
    data = json_body()
    session = get_session()
    try:
        category = CategoriesService.create(session, data)
        session.commit()
        return jsonify(category.to_dict()), 201
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
