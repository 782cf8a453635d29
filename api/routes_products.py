"""
api.routes_products - /api/v1/products CRUD endpoints.
"""

from flask import current_app, request, jsonify

from api import api_bp
from api.payload import json_body
from api.auth import require_auth, current_user_id
from db import get_session
from services.pagination import parse_bound, parse_page
from services.products_service import ProductsService


@api_bp.route("/products")
def list_products():
    """
    GET /api/v1/products?page=1&limit=10&search=&minQuantity=&maxQuantity=

    Newest first.  search matches name, or slug with spaces read as '-'.
    """
    cfg = current_app.config
    page = parse_page(
        request.args.get("page"), request.args.get("limit"),
        default_limit=cfg["API_DEFAULT_LIMIT"], max_limit=cfg["API_MAX_LIMIT"],
    )
    q = request.args.get("search", "").strip()
    min_q = parse_bound(request.args.get("minQuantity"), "minQuantity", int)
    max_q = parse_bound(request.args.get("maxQuantity"), "maxQuantity", int)

    session = get_session()
    try:
        products, total = ProductsService.search(
            session, page, q=q, min_quantity=min_q, max_quantity=max_q,
        )
        return jsonify(page.envelope([p.to_summary() for p in products], total))
    finally:
        session.close()


@api_bp.route("/products/<int:product_id>")
def get_product(product_id: int):
    """GET /api/v1/products/{id}"""
    session = get_session()
    try:
        return jsonify(ProductsService.get(session, product_id).to_dict())
    finally:
        session.close()


@api_bp.route("/products/slug/<slug>")
def get_product_by_slug(slug: str):
    """GET /api/v1/products/slug/{slug}"""
    session = get_session()
    try:
        return jsonify(ProductsService.get_by_slug(session, slug).to_summary())
    finally:
        session.close()


@api_bp.route("/products/category/<int:category_id>")
def list_products_by_category(category_id: int):
    """GET /api/v1/products/category/{id}  (each row carries category_name)"""
    session = get_session()
    try:
        return jsonify(ProductsService.by_category(session, category_id))
    finally:
        session.close()


@api_bp.route("/products", methods=["POST"])
@require_auth
def create_product():
    """
    POST /api/v1/products

    JSON body: {name, slug, quantity?, category_id?}.
    """
    data = json_body()
    session = get_session()
    try:
        product = ProductsService.create(session, data, current_user_id())
        session.commit()
        return jsonify({
            "message": "Product created successfully",
            "product": product.to_dict(),
        }), 201
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@api_bp.route("/products/<int:product_id>", methods=["PATCH", "PUT"])
@require_auth
def update_product(product_id: int):
    """PATCH /api/v1/products/{id}  (same body as create)"""
    data = json_body()
    session = get_session()
    try:
        product = ProductsService.update(session, product_id, data, current_user_id())
        session.commit()
        return jsonify({
            "message": "Product updated successfully",
            "product": product.to_dict(),
        })
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@api_bp.route("/products/<int:product_id>", methods=["DELETE"])
@require_auth
def delete_product(product_id: int):
    """DELETE /api/v1/products/{id}"""
    session = get_session()
    try:
        product = ProductsService.delete(session, product_id)
        session.commit()
        return jsonify({"message": "Product deleted", "product": product})
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
