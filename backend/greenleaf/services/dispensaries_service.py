# backend/greenleaf/services/dispensaries_service.py
from __future__ import annotations

from ..models import DISPENSARY_STATUSES

TABLE = "dispensaries"

SEARCH_FIELDS = ("name", "city", "address", "license")


def list_dispensaries(backend, *, search: str | None = None, status: str | None = None) -> list[dict]:
    dispensaries = backend.list_all(TABLE)
    if status:
        dispensaries = [d for d in dispensaries if d.get("status") == status]
    if search:
        term = search.casefold()
        dispensaries = [
            d for d in dispensaries
            if any(term in (d.get(f) or "").casefold() for f in SEARCH_FIELDS)
        ]
    return dispensaries


def get_dispensary(backend, dispensary_id: int) -> dict | None:
    return backend.get_by_id(TABLE, dispensary_id)


def create_dispensary(backend, *, patch: dict) -> dict:
    fields = dict(patch)
    fields.setdefault("status", "Active")
    result = backend.insert(TABLE, fields)
    return backend.get_by_id(TABLE, result.inserted_id)


def update_dispensary(backend, *, dispensary_id: int, patch: dict) -> dict | None:
    if not backend.update(TABLE, dispensary_id, patch).changed:
        return None
    return backend.get_by_id(TABLE, dispensary_id)


def delete_dispensary(backend, *, dispensary_id: int) -> bool:
    return backend.delete(TABLE, dispensary_id).changed


def status_counts(backend) -> dict:
    counts = {status: 0 for status in DISPENSARY_STATUSES}
    for dispensary in backend.list_all(TABLE):
        if dispensary.get("status") in counts:
            counts[dispensary["status"]] += 1
    return counts
