# backend/greenleaf/services/catalog_service.py
"""Weedmaps catalog listings. Independent of the internal products table."""
from __future__ import annotations

TABLE = "weedmaps_products"


def list_listings(backend, *, published: bool | None = None, featured: bool | None = None) -> list[dict]:
    listings = backend.list_all(TABLE)
    if published is not None:
        listings = [x for x in listings if bool(x.get("published")) is published]
    if featured is not None:
        listings = [x for x in listings if bool(x.get("featured")) is featured]
    return listings


def get_listing(backend, listing_id: int) -> dict | None:
    return backend.get_by_id(TABLE, listing_id)


def create_listing(backend, *, patch: dict) -> dict:
    fields = dict(patch)
    fields.setdefault("published", True)
    fields.setdefault("featured", False)
    result = backend.insert(TABLE, fields)
    return backend.get_by_id(TABLE, result.inserted_id)


def update_listing(backend, *, listing_id: int, patch: dict) -> dict | None:
    if not backend.update(TABLE, listing_id, patch).changed:
        return None
    return backend.get_by_id(TABLE, listing_id)


def delete_listing(backend, *, listing_id: int) -> bool:
    return backend.delete(TABLE, listing_id).changed
