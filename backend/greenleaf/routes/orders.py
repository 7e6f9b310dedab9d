# Overview: Flask API routes for orders and order items; parses input and returns JSON responses.

# backend/greenleaf/routes/orders.py
"""
Order history routes.

POST /api/orders writes the order and then each item; the writes are not
wrapped in a transaction.
"""
from flask import Blueprint, current_app, request

from ..extensions import get_backend
from ..models import Order
from ..services import orders_service
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_order,
    ValidationError,
    ConflictError,
)

ORDER_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "customer_id", "employee_id", "total_amount",
        "payment_method", "payment_status", "stripe_payment_id",
    }),
    required_on_create=frozenset({"payment_method"}),
)

# Orders are history: only payment fields change after creation.
ORDER_UPDATE_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"payment_status", "stripe_payment_id"}),
)

orders_bp = Blueprint("orders", __name__, url_prefix="/api/orders")


@orders_bp.get("")
def list_orders():
    items = orders_service.list_orders(get_backend(), payment_status=request.args.get("payment_status"))
    return {"items": items, "count": len(items)}


@orders_bp.get("/items")
def list_all_order_items():
    items = orders_service.list_order_items(get_backend())
    return {"items": items, "count": len(items)}


@orders_bp.get("/<int:order_id>")
def get_order_details(order_id: int):
    """Order with its items, each joined with the referenced product."""
    details = orders_service.get_order_details(get_backend(), order_id)
    if details is None:
        return {"error": "Order not found"}, 404
    return details


@orders_bp.get("/<int:order_id>/items")
def list_order_items(order_id: int):
    backend = get_backend()
    if orders_service.get_order(backend, order_id) is None:
        return {"error": "Order not found"}, 404
    items = orders_service.list_order_items(backend, order_id=order_id)
    return {"items": items, "count": len(items)}


@orders_bp.post("")
def create_order_route():
    payload = dict(request.get_json(silent=True) or {})
    items = payload.pop("items", [])
    if not isinstance(items, list):
        return {"error": "items must be a list"}, 400

    try:
        patch = validate_payload(model=Order, payload=payload, policy=ORDER_POLICY, partial=False)
        enforce_rules_order(patch)
        created = orders_service.create_order(get_backend(), patch=patch, items=items)
    except ValidationError as e:
        return {"error": str(e)}, 400
    except ConflictError as e:
        return {"error": str(e)}, 409
    except Exception:
        current_app.logger.exception("Failed to create order")
        return {"error": "Failed to create order"}, 500

    return created, 201


@orders_bp.post("/<int:order_id>/items")
def add_order_item_route(order_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        item = orders_service.add_order_item(get_backend(), order_id=order_id, item=payload)
    except ValidationError as e:
        return {"error": str(e)}, 400
    except ConflictError as e:
        return {"error": str(e)}, 409

    if item is None:
        return {"error": "Order not found"}, 404
    return item, 201


@orders_bp.put("/<int:order_id>")
def update_order_route(order_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=Order, payload=payload, policy=ORDER_UPDATE_POLICY, partial=True)
        updated = orders_service.update_order(get_backend(), order_id=order_id, patch=patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    if updated is None:
        return {"error": "Order not found"}, 404
    return updated, 200


@orders_bp.delete("/<int:order_id>")
def delete_order_route(order_id: int):
    try:
        deleted = orders_service.delete_order(get_backend(), order_id=order_id)
    except ConflictError as e:
        return {"error": str(e)}, 409

    if not deleted:
        return {"error": "Order not found"}, 404
    return {"ok": True}, 200
