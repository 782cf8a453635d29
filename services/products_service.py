"""
services.products_service - CRUD and search on Product records.

All session management is the caller's responsibility (open before,
close/commit after).  This keeps the service testable and allows
the caller to batch multiple operations in one transaction.
"""

from __future__ import annotations

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from db.models import Category, Product
from import_engine import validators as v
from services.errors import BadInput, Conflict, NotFound
from services.pagination import Page, search_keyword

NAME_MAX = 255


def validate_payload(data: dict) -> dict:
    """
    Check a create/edit body.  Returns the cleaned fields or raises
    BadInput listing every problem.
    """
    errors: list[str] = []
    clean: dict = {}

    name = data.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append("Name is required")
    elif len(name.strip()) > NAME_MAX:
        errors.append(f"Name must be <= {NAME_MAX} characters")
    else:
        clean["name"] = name.strip()

    slug = data.get("slug")
    if not isinstance(slug, str) or not slug.strip():
        errors.append("Slug is required")
    else:
        try:
            clean["slug"] = v.slug(slug)
        except v.FieldError as exc:
            errors.append(str(exc))

    quantity = data.get("quantity", 0)
    try:
        clean["quantity"] = v.non_negative_integer(
            0 if quantity is None else quantity, "Quantity")
    except v.FieldError:
        errors.append("Quantity must be a non-negative integer")

    category_id = data.get("category_id")
    if category_id in (None, "", 0):
        clean["category_id"] = None
    else:
        try:
            clean["category_id"] = v.non_negative_integer(category_id, "category_id")
        except v.FieldError:
            errors.append("Invalid category_id")

    if errors:
        raise BadInput("Validation failed", details=errors)
    return clean


class ProductsService:

    # ── Read ───────────────────────────────────────────────────────────

    @staticmethod
    def search(
        session: Session,
        page: Page,
        *,
        q: str = "",
        min_quantity: int | None = None,
        max_quantity: int | None = None,
    ) -> tuple[list[Product], int]:
        """Newest first.  Returns (products, total_count)."""
        query = session.query(Product)
        if q:
            query = query.filter(
                Product.name.ilike(f"%{q}%")
                | Product.slug.ilike(f"%{search_keyword(q)}%")
            )
        if min_quantity is not None:
            query = query.filter(Product.quantity >= min_quantity)
        if max_quantity is not None:
            query = query.filter(Product.quantity <= max_quantity)

        total = query.count()
        products = (
            query.order_by(Product.id.desc())
            .offset(page.offset).limit(page.limit).all()
        )
        return products, total

    @staticmethod
    def get(session: Session, product_id: int) -> Product:
        product = session.get(Product, product_id)
        if product is None:
            raise NotFound("Product not found")
        return product

    @staticmethod
    def get_by_slug(session: Session, slug: str) -> Product:
        product = session.query(Product).filter(Product.slug == slug).first()
        if product is None:
            raise NotFound("Product not found")
        return product

    @staticmethod
    def by_category(session: Session, category_id: int) -> list[dict]:
        rows = (
            session.query(Product, Category.name)
            .outerjoin(Category, Product.category_id == Category.id)
            .filter(Product.category_id == category_id)
            .order_by(Product.id)
            .all()
        )
        if not rows:
            raise NotFound("No products found for this category")
        return [dict(p.to_dict(), category_name=cat_name) for p, cat_name in rows]

    # ── Write ──────────────────────────────────────────────────────────

    @staticmethod
    def create(session: Session, data: dict, user_id: int) -> Product:
        fields = validate_payload(data)
        ProductsService._check_category(session, fields["category_id"])
        product = Product(created_by=user_id, **fields)
        session.add(product)
        ProductsService._flush(session)
        return product

    @staticmethod
    def update(session: Session, product_id: int, data: dict, user_id: int) -> Product:
        fields = validate_payload(data)
        ProductsService._check_category(session, fields["category_id"])
        product = ProductsService.get(session, product_id)
        for attr, val in fields.items():
            setattr(product, attr, val)
        product.updated_by = user_id
        ProductsService._flush(session)
        return product

    @staticmethod
    def delete(session: Session, product_id: int) -> dict:
        product = ProductsService.get(session, product_id)
        snapshot = product.to_dict()
        session.delete(product)
        session.flush()
        return snapshot

    # ── Internal ───────────────────────────────────────────────────────

    @staticmethod
    def _check_category(session: Session, category_id: int | None) -> None:
        if category_id is not None and session.get(Category, category_id) is None:
            raise BadInput("Invalid category_id")

    @staticmethod
    def _flush(session: Session) -> None:
        try:
            session.flush()
        except IntegrityError:
            session.rollback()
            raise Conflict("Slug already exists") from None
