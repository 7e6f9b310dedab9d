# backend/greenleaf/routes/customers.py
from flask import Blueprint, request

from ..extensions import get_backend
from ..models import Customer
from ..services import customers_service
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_customer,
    ValidationError,
    ConflictError,
)

CUSTOMER_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "first_name", "last_name", "email", "phone",
        "date_of_birth", "license_number", "address",
    }),
    required_on_create=frozenset({"first_name", "last_name"}),
)

customers_bp = Blueprint("customers", __name__, url_prefix="/api/customers")


@customers_bp.get("")
def list_customers():
    items = customers_service.list_customers(get_backend(), search=request.args.get("q"))
    return {"items": items, "count": len(items)}


@customers_bp.get("/<int:customer_id>")
def get_customer(customer_id: int):
    customer = customers_service.get_customer(get_backend(), customer_id)
    if customer is None:
        return {"error": "Customer not found"}, 404
    return customer


@customers_bp.post("")
def create_customer_route():
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=Customer, payload=payload, policy=CUSTOMER_POLICY, partial=False)
        enforce_rules_customer(patch)
        created = customers_service.create_customer(get_backend(), patch=patch)
    except ValidationError as e:
        return {"error": str(e)}, 400
    except ConflictError as e:
        return {"error": str(e)}, 409

    return created, 201


@customers_bp.put("/<int:customer_id>")
def update_customer_route(customer_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=Customer, payload=payload, policy=CUSTOMER_POLICY, partial=True)
        enforce_rules_customer(patch)
        updated = customers_service.update_customer(get_backend(), customer_id=customer_id, patch=patch)
    except ValidationError as e:
        return {"error": str(e)}, 400
    except ConflictError as e:
        return {"error": str(e)}, 409

    if updated is None:
        return {"error": "Customer not found"}, 404
    return updated, 200


@customers_bp.delete("/<int:customer_id>")
def delete_customer_route(customer_id: int):
    try:
        deleted = customers_service.delete_customer(get_backend(), customer_id=customer_id)
    except ConflictError as e:
        return {"error": str(e)}, 409

    if not deleted:
        return {"error": "Customer not found"}, 404
    return {"ok": True}, 200
