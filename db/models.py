"""
db.models - SQLAlchemy ORM declarations.

Tables
------
categories - reference table; imports resolve free-text category
             names against its unique slug column.
products   - stock items, optionally linked to a category.
employees  - staff records (name, department, salary).
users      - accounts allowed to mutate data.
user_otps  - one-time codes mailed at registration.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Column, String, Integer, Float, Boolean, DateTime, ForeignKey,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt else None


class Base(DeclarativeBase):
    pass


class Category(Base):
    __tablename__ = "categories"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    name       = Column(String(255), nullable=False)
    slug       = Column(String(255), nullable=False, unique=True, index=True)
    created_at = Column(DateTime, default=_utcnow)

    products = relationship("Product", back_populates="category")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "created_at": _iso(self.created_at),
        }


class Product(Base):
    __tablename__ = "products"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    name        = Column(String(255), nullable=False)
    slug        = Column(String(255), nullable=False, unique=True, index=True)
    quantity    = Column(Integer, nullable=False, default=0)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True, index=True)

    # ── Audit ──────────────────────────────────────────────────────────
    created_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    updated_by = Column(Integer, ForeignKey("users.id"), nullable=True)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    category = relationship("Category", back_populates="products")

    def to_summary(self) -> dict:
        """Listing shape: the columns the search endpoints expose."""
        return {
            "id": self.id,
            "name": self.name,
            "slug": self.slug,
            "quantity": self.quantity,
        }

    def to_dict(self) -> dict:
        d = self.to_summary()
        d.update({
            "category_id": self.category_id,
            "created_by": self.created_by,
            "updated_by": self.updated_by,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        })
        return d


class Employee(Base):
    __tablename__ = "employees"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    full_name  = Column(String(255), nullable=False, index=True)
    department = Column(String(255), nullable=False, index=True)
    salary     = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime, default=_utcnow)
    updated_at = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "full_name": self.full_name,
            "department": self.department,
            "salary": self.salary,
            "created_at": _iso(self.created_at),
            "updated_at": _iso(self.updated_at),
        }


class User(Base):
    __tablename__ = "users"

    id          = Column(Integer, primary_key=True, autoincrement=True)
    username    = Column(String(150), nullable=False, unique=True, index=True)
    password    = Column(String(255), nullable=False)          # werkzeug hash
    email       = Column(String(255), nullable=False, unique=True, index=True)
    is_verified = Column(Boolean, nullable=False, default=False)
    created_at  = Column(DateTime, default=_utcnow)
    updated_at  = Column(DateTime, default=_utcnow, onupdate=_utcnow)

    otps = relationship(
        "UserOtp", back_populates="user", cascade="all, delete-orphan",
    )

    def to_public(self) -> dict:
        return {"id": self.id, "username": self.username, "email": self.email}


class UserOtp(Base):
    __tablename__ = "user_otps"

    id         = Column(Integer, primary_key=True, autoincrement=True)
    user_id    = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"),
                        nullable=False, index=True)
    otp_code   = Column(String(12), nullable=False)
    expires_at = Column(DateTime, nullable=False)
    created_at = Column(DateTime, default=_utcnow)

    user = relationship("User", back_populates="otps")
