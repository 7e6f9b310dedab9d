# backend/greenleaf/routes/catalog.py
"""Weedmaps marketplace listings."""
from flask import Blueprint, request

from ..extensions import get_backend
from ..models import WeedmapsProduct
from ..services import catalog_service
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_catalog_listing,
    ValidationError,
    ConflictError,
)

LISTING_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({
        "weedmaps_id", "external_id", "name", "description", "published", "featured",
        "picture", "gallery_images", "category", "tags", "strain", "genetics",
        "cbd_percentage", "thc_percentage",
    }),
    required_on_create=frozenset({"name"}),
)

catalog_bp = Blueprint("catalog", __name__, url_prefix="/api/catalog")


def _flag(name: str):
    raw = request.args.get(name)
    if raw is None:
        return None
    return raw.lower() == "true"


@catalog_bp.get("")
def list_listings():
    items = catalog_service.list_listings(get_backend(), published=_flag("published"), featured=_flag("featured"))
    return {"items": items, "count": len(items)}


@catalog_bp.get("/<int:listing_id>")
def get_listing(listing_id: int):
    listing = catalog_service.get_listing(get_backend(), listing_id)
    if listing is None:
        return {"error": "Listing not found"}, 404
    return listing


@catalog_bp.post("")
def create_listing_route():
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=WeedmapsProduct, payload=payload, policy=LISTING_POLICY, partial=False)
        enforce_rules_catalog_listing(patch)
        created = catalog_service.create_listing(get_backend(), patch=patch)
    except ValidationError as e:
        return {"error": str(e)}, 400
    except ConflictError as e:
        return {"error": str(e)}, 409

    return created, 201


@catalog_bp.put("/<int:listing_id>")
def update_listing_route(listing_id: int):
    payload = request.get_json(silent=True) or {}

    try:
        patch = validate_payload(model=WeedmapsProduct, payload=payload, policy=LISTING_POLICY, partial=True)
        enforce_rules_catalog_listing(patch)
        updated = catalog_service.update_listing(get_backend(), listing_id=listing_id, patch=patch)
    except ValidationError as e:
        return {"error": str(e)}, 400

    if updated is None:
        return {"error": "Listing not found"}, 404
    return updated, 200


@catalog_bp.delete("/<int:listing_id>")
def delete_listing_route(listing_id: int):
    if not catalog_service.delete_listing(get_backend(), listing_id=listing_id):
        return {"error": "Listing not found"}, 404
    return {"ok": True}, 200
