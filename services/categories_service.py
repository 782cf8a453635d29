"""
services.categories_service - The category reference table.

Slugs are produced with the same normalisation the import resolver
applies, so a category created here is found by name in spreadsheets.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db.models import Category
from import_engine import validators as v
from import_engine.resolver import category_slug
from services.errors import BadInput, Conflict


class CategoriesService:

    @staticmethod
    def list(session: Session) -> list[Category]:
        return session.query(Category).order_by(Category.name, Category.id).all()

    @staticmethod
    def create(session: Session, data: dict) -> Category:
        try:
            name = v.non_empty_string(data.get("name"), "Name")
            raw_slug = data.get("slug")
            slug = v.slug(raw_slug) if raw_slug else category_slug(name)
        except v.FieldError as exc:
            raise BadInput(str(exc)) from None

        category = Category(name=name, slug=slug)
        session.add(category)
        try:
            session.flush()
        except IntegrityError:
            session.rollback()
            raise Conflict("Category slug already exists") from None
        return category
