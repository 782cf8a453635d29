"""
db - Database layer.

Public API:
    init_db()       → create engine + tables
    get_session()   → new Session
    Category, Product, Employee, User, UserOtp → ORM models
"""

from db.engine import init_db, get_session          # noqa: F401
from db.models import (                             # noqa: F401
    Base, Category, Product, Employee, User, UserOtp,
)
