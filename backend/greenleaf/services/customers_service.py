# backend/greenleaf/services/customers_service.py
from __future__ import annotations

from ..validation import ConflictError

TABLE = "customers"


def _email_taken(backend, email: str | None, *, exclude_id: int | None = None) -> bool:
    if not email:
        return False
    wanted = email.casefold()
    for customer in backend.list_all(TABLE):
        if customer.get("id") == exclude_id:
            continue
        if (customer.get("email") or "").casefold() == wanted:
            return True
    return False


def list_customers(backend, *, search: str | None = None) -> list[dict]:
    customers = backend.list_all(TABLE)
    if search:
        term = search.casefold()
        customers = [
            c for c in customers
            if any(term in (c.get(f) or "").casefold() for f in ("first_name", "last_name", "email", "phone"))
        ]
    return customers


def get_customer(backend, customer_id: int) -> dict | None:
    return backend.get_by_id(TABLE, customer_id)


def create_customer(backend, *, patch: dict) -> dict:
    """
    Raises:
        ConflictError: If another customer already uses the email
    """
    if _email_taken(backend, patch.get("email")):
        raise ConflictError("Email already registered to another customer.")
    result = backend.insert(TABLE, patch)
    return backend.get_by_id(TABLE, result.inserted_id)


def update_customer(backend, *, customer_id: int, patch: dict) -> dict | None:
    if "email" in patch and _email_taken(backend, patch["email"], exclude_id=customer_id):
        raise ConflictError("Email already registered to another customer.")
    if not backend.update(TABLE, customer_id, patch).changed:
        return None
    return backend.get_by_id(TABLE, customer_id)


def delete_customer(backend, *, customer_id: int) -> bool:
    return backend.delete(TABLE, customer_id).changed
