# Overview: Flask API routes for products operations; parses input and returns JSON responses.

# backend/greenleaf/routes/products.py
"""
Product catalog routes.

Storage goes through the backend built by create_app(); routes only parse,
validate and map results to status codes.
"""
from flask import Blueprint, current_app, request

from ..extensions import get_backend
from ..models import Product
from ..services import products_service
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_product,
    ValidationError,
    ConflictError,
)

PRODUCT_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "name", "description", "price", "stock_quantity", "category",
        "strain_type", "thc_content", "cbd_content", "image_url",
    }),
    required_on_create=frozenset({"name", "price", "stock_quantity"}),
)

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
def list_products():
    """
    List all products ordered by name.

    Query params:
    - category: str (optional) - exact category match, case-insensitive
    - in_stock: "true" to list only products with stock_quantity > 0
    """
    category = request.args.get("category")
    in_stock_only = request.args.get("in_stock", "false").lower() == "true"
    items = products_service.list_products(get_backend(), category=category, in_stock_only=in_stock_only)
    return {"items": items, "count": len(items)}


@products_bp.get("/low-stock")
def low_stock_products():
    threshold = request.args.get("threshold", current_app.config["LOW_STOCK_THRESHOLD"], type=int)
    items = products_service.list_low_stock(get_backend(), threshold=threshold)
    return {"items": items, "count": len(items), "threshold": threshold}


@products_bp.get("/<int:product_id>")
def get_product(product_id: int):
    product = products_service.get_product(get_backend(), product_id)
    if product is None:
        return {"error": "Product not found"}, 404
    return product


@products_bp.post("")
def create_product_route():
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY, partial=False)
        enforce_rules_product(patch)
        created = products_service.create_product(get_backend(), patch=patch)
    except ValidationError as e:
        return {"error": str(e)}, 400
    except ConflictError as e:
        return {"error": str(e)}, 409

    return created, 201


@products_bp.put("/<int:product_id>")
def update_product_route(product_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=Product, payload=payload, policy=PRODUCT_POLICY, partial=True)
        enforce_rules_product(patch)
        updated = products_service.update_product(get_backend(), product_id=product_id, patch=patch)
    except ValidationError as e:
        return {"error": str(e)}, 400
    except ConflictError as e:
        return {"error": str(e)}, 409

    if updated is None:
        return {"error": "Product not found"}, 404
    return updated, 200


@products_bp.delete("/<int:product_id>")
def delete_product_route(product_id: int):
    try:
        deleted = products_service.delete_product(get_backend(), product_id=product_id)
    except ConflictError as e:
        return {"error": str(e)}, 409

    if not deleted:
        return {"error": "Product not found"}, 404
    return {"ok": True}, 200
