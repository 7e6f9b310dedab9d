# backend/greenleaf/routes/dispensaries.py
from flask import Blueprint, request

from ..extensions import get_backend
from ..models import Dispensary
from ..services import dispensaries_service
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_dispensary,
    ValidationError,
)

DISPENSARY_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"name", "address", "city", "phone", "hours", "license", "status"}),
    required_on_create=frozenset({"name", "address", "city", "phone", "hours", "license"}),
)

dispensaries_bp = Blueprint("dispensaries", __name__, url_prefix="/api/dispensaries")


@dispensaries_bp.get("")
def list_dispensaries():
    """
    Query params:
    - q: str (optional) - matches name, city, address or license
    - status: Active | Pending | Closed (optional)
    """
    backend = get_backend()
    items = dispensaries_service.list_dispensaries(
        backend,
        search=request.args.get("q"),
        status=request.args.get("status"),
    )
    return {"items": items, "count": len(items), "statuses": dispensaries_service.status_counts(backend)}


@dispensaries_bp.get("/<int:dispensary_id>")
def get_dispensary(dispensary_id: int):
    dispensary = dispensaries_service.get_dispensary(get_backend(), dispensary_id)
    if dispensary is None:
        return {"error": "Dispensary not found"}, 404
    return dispensary


@dispensaries_bp.post("")
def create_dispensary_route():
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=Dispensary, payload=payload, policy=DISPENSARY_POLICY, partial=False)
        enforce_rules_dispensary(patch)
        created = dispensaries_service.create_dispensary(get_backend(), patch=patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    return created, 201


@dispensaries_bp.put("/<int:dispensary_id>")
def update_dispensary_route(dispensary_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=Dispensary, payload=payload, policy=DISPENSARY_POLICY, partial=True)
        enforce_rules_dispensary(patch)
        updated = dispensaries_service.update_dispensary(get_backend(), dispensary_id=dispensary_id, patch=patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    if updated is None:
        return {"error": "Dispensary not found"}, 404
    return updated, 200


@dispensaries_bp.delete("/<int:dispensary_id>")
def delete_dispensary_route(dispensary_id: int):
    if not dispensaries_service.delete_dispensary(get_backend(), dispensary_id=dispensary_id):
        return {"error": "Dispensary not found"}, 404
    return {"ok": True}, 200
