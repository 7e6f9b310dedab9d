# backend/greenleaf/services/products_service.py
"""
Products Service

Catalog CRUD over whichever storage backend the app was built with. The
backend is passed in explicitly; nothing here reaches for globals.
"""
from __future__ import annotations

TABLE = "products"


def list_products(backend, *, category: str | None = None, in_stock_only: bool = False) -> list[dict]:
    """
    All products ordered by name.

    in_stock_only drops products with stock_quantity <= 0 (register view).
    """
    products = backend.list_all(TABLE)
    if category is not None:
        wanted = category.casefold()
        products = [p for p in products if (p.get("category") or "").casefold() == wanted]
    if in_stock_only:
        products = [p for p in products if (p.get("stock_quantity") or 0) > 0]
    return products


def get_product(backend, product_id: int) -> dict | None:
    return backend.get_by_id(TABLE, product_id)


def create_product(backend, *, patch: dict) -> dict:
    result = backend.insert(TABLE, patch)
    return backend.get_by_id(TABLE, result.inserted_id)


def update_product(backend, *, product_id: int, patch: dict) -> dict | None:
    """Returns the updated product, or None if not found."""
    result = backend.update(TABLE, product_id, patch)
    if not result.changed:
        return None
    return backend.get_by_id(TABLE, product_id)


def delete_product(backend, *, product_id: int) -> bool:
    """
    Hard delete. Order items that reference the product are left alone
    (the record store keeps them as orphans; the relational backend refuses
    with ConflictError).
    """
    return backend.delete(TABLE, product_id).changed


def list_low_stock(backend, *, threshold: int) -> list[dict]:
    return [p for p in backend.list_all(TABLE) if (p.get("stock_quantity") or 0) < threshold]
