"""
api.auth - Bearer-token guard for mutating endpoints.
"""

from __future__ import annotations

from functools import wraps

from flask import current_app, g, request

from services.auth_service import decode_token
from services.errors import Unauthorized


def require_auth(view):
    """
    401 without a bearer token, 403 when it does not verify.
    The decoded claims are available as g.current_user.
    """
    @wraps(view)
    def wrapper(*args, **kwargs):
        header = request.headers.get("Authorization", "")
        parts = header.split()
        token = parts[1] if len(parts) == 2 else ""
        if not token:
            raise Unauthorized("Access denied. No token provided.")
        g.current_user = decode_token(token, current_app.config)
        return view(*args, **kwargs)

    return wrapper


def current_user_id() -> int | None:
    claims = g.get("current_user") or {}
    return claims.get("id")
