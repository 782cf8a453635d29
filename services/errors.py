"""
services.errors - Business-rule failures carrying their HTTP status.

Raised by services, translated to JSON by api.errors.
"""

from __future__ import annotations


class ServiceError(Exception):
    status = 400

    def __init__(self, message: str, details: list[str] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict:
        d = {"error": self.message}
        if self.details:
            d["details"] = self.details
        return d


class BadInput(ServiceError):
    status = 400


class Conflict(ServiceError):
    status = 400


class NotFound(ServiceError):
    status = 404


class Unauthorized(ServiceError):
    status = 401


class Forbidden(ServiceError):
    status = 403
