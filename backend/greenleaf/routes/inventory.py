# backend/greenleaf/routes/inventory.py
from flask import Blueprint, request

from ..extensions import get_backend
from ..models import InventoryTransaction
from ..services import inventory_service
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_inventory_transaction,
    ValidationError,
    ConflictError,
)

TRANSACTION_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"product_id", "employee_id", "transaction_type", "quantity_change", "notes"}),
    required_on_create=frozenset({"product_id", "transaction_type", "quantity_change"}),
)

inventory_bp = Blueprint("inventory", __name__, url_prefix="/api/inventory")


@inventory_bp.get("/transactions")
def list_transactions():
    product_id = request.args.get("product_id", type=int)
    items = inventory_service.list_transactions(get_backend(), product_id=product_id)
    return {"items": items, "count": len(items)}


@inventory_bp.get("/transactions/<int:transaction_id>")
def get_transaction(transaction_id: int):
    txn = inventory_service.get_transaction(get_backend(), transaction_id)
    if txn is None:
        return {"error": "Inventory transaction not found"}, 404
    return txn


@inventory_bp.post("/transactions")
def record_transaction_route():
    """Record a restock, sale or adjustment and apply it to the product's stock."""
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(
            model=InventoryTransaction, payload=payload, policy=TRANSACTION_POLICY, partial=False
        )
        enforce_rules_inventory_transaction(patch)
        txn = inventory_service.record_transaction(get_backend(), patch=patch)
    except ValidationError as e:
        return {"error": str(e)}, 400
    except ConflictError as e:
        return {"error": str(e)}, 409

    return txn, 201
