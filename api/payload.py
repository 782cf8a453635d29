"""
api.payload - JSON request body helper.
"""

from flask import request

from services.errors import BadInput


def json_body() -> dict:
    """Parsed JSON object body; absent or unparsable bodies count as empty."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise BadInput("Request body must be a JSON object")
    return data
