# backend/greenleaf/services/inventory_service.py
"""
Inventory Service

A stock movement is recorded as an inventory transaction and then applied
to the product's stock_quantity. The two writes are independent.
"""
from __future__ import annotations

from ..validation import ValidationError

TABLE = "inventory_transactions"

TRANSACTION_TYPES = ("restock", "sale", "adjustment")


def record_transaction(backend, *, patch: dict) -> dict:
    """
    Record a stock movement and apply it to the product.

    Raises:
        ValidationError: If the product is missing, the type is unknown, or
            the movement would take stock below zero
    """
    if patch.get("transaction_type") not in TRANSACTION_TYPES:
        raise ValidationError(f"transaction_type must be one of: {', '.join(TRANSACTION_TYPES)}")

    product_id = patch["product_id"]
    product = backend.get_by_id("products", product_id)
    if product is None:
        raise ValidationError(f"Product {product_id} not found")

    new_quantity = (product.get("stock_quantity") or 0) + patch["quantity_change"]
    if new_quantity < 0:
        raise ValidationError(
            f"Insufficient stock: {product.get('stock_quantity') or 0} on hand, change {patch['quantity_change']}"
        )

    result = backend.insert(TABLE, patch)
    backend.update("products", product_id, {"stock_quantity": new_quantity})
    return backend.get_by_id(TABLE, result.inserted_id)


def list_transactions(backend, *, product_id: int | None = None) -> list[dict]:
    if product_id is None:
        return backend.list_all(TABLE)
    return backend.list_where(TABLE, "product_id", product_id)


def get_transaction(backend, transaction_id: int) -> dict | None:
    return backend.get_by_id(TABLE, transaction_id)
