"""
api.errors - JSON error handlers for the API blueprint.
"""

from flask import jsonify, request
from werkzeug.exceptions import HTTPException

from api import api_bp
from services.errors import ServiceError


@api_bp.errorhandler(ServiceError)
def api_service_error(e: ServiceError):
    return jsonify(e.to_dict()), e.status


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return jsonify({"error": "bad request"}), 400


@api_bp.errorhandler(405)
def api_method_not_allowed(_e):
    return jsonify({"error": "method not allowed"}), 405


@api_bp.errorhandler(413)
def api_too_large(_e):
    return jsonify({"error": "uploaded file is too large"}), 413


@api_bp.errorhandler(500)
def api_server_error(_e):
    return jsonify({"error": "internal server error"}), 500


def register_app_handlers(app):
    """
    Blueprint handlers never see routing 404/405 (no endpoint matched),
    so mirror them app-wide for /api paths.
    """
    @app.errorhandler(HTTPException)
    def _http_error(e: HTTPException):
        if request.path.startswith(api_bp.url_prefix):
            return jsonify({"error": e.description or e.name}), e.code
        return e
