# backend/greenleaf/services/orders_service.py
"""
Orders Service

An order is written first, then each of its items as separate writes.
There is no transaction around the sequence: if an item write fails the
order stays behind with the items written so far.
"""
from __future__ import annotations

from ..validation import ValidationError

ORDERS = "orders"
ORDER_ITEMS = "order_items"

DEFAULT_PAYMENT_STATUS = "pending"


def _round_money(value: float) -> float:
    return round(value, 2)


def build_order_items(backend, items: list[dict]) -> list[dict]:
    """
    Resolve unit prices and line totals for incoming order items.

    unit_price defaults to the product's current price; total_price is
    always quantity * unit_price.
    """
    lines = []
    for raw in items:
        product_id = raw.get("product_id")
        quantity = raw.get("quantity")
        if not isinstance(product_id, int) or isinstance(product_id, bool):
            raise ValidationError("product_id must be an integer")
        if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity <= 0:
            raise ValidationError("quantity must be a positive integer")

        unit_price = raw.get("unit_price")
        if unit_price is None:
            product = backend.get_by_id("products", product_id)
            if product is None:
                raise ValidationError(f"Product {product_id} not found")
            unit_price = product["price"]
        if isinstance(unit_price, bool) or not isinstance(unit_price, (int, float)) or unit_price < 0:
            raise ValidationError("unit_price must be a non-negative number")

        lines.append({
            "product_id": product_id,
            "quantity": quantity,
            "unit_price": float(unit_price),
            "total_price": _round_money(quantity * unit_price),
        })
    return lines


def create_order(backend, *, patch: dict, items: list[dict] | None = None) -> dict:
    """
    Create an order and its items.

    total_amount defaults to the sum of the item totals; payment_status
    defaults to "pending".

    Returns the order with an "items" list.
    """
    lines = build_order_items(backend, items or [])

    fields = dict(patch)
    fields.setdefault("payment_status", DEFAULT_PAYMENT_STATUS)
    if fields.get("total_amount") is None:
        fields["total_amount"] = _round_money(sum(line["total_price"] for line in lines))

    order_id = backend.insert(ORDERS, fields).inserted_id
    for line in lines:
        backend.insert(ORDER_ITEMS, {"order_id": order_id, **line})

    return get_order_details(backend, order_id, include_products=False)


def add_order_item(backend, *, order_id: int, item: dict) -> dict | None:
    """Append one item to an existing order. Returns None if the order is missing."""
    if backend.get_by_id(ORDERS, order_id) is None:
        return None
    [line] = build_order_items(backend, [item])
    result = backend.insert(ORDER_ITEMS, {"order_id": order_id, **line})
    return backend.get_by_id(ORDER_ITEMS, result.inserted_id)


def list_orders(backend, *, payment_status: str | None = None) -> list[dict]:
    if payment_status:
        return backend.list_where(ORDERS, "payment_status", payment_status)
    return backend.list_all(ORDERS)


def get_order(backend, order_id: int) -> dict | None:
    return backend.get_by_id(ORDERS, order_id)


def list_order_items(backend, *, order_id: int | None = None) -> list[dict]:
    if order_id is None:
        return backend.list_all(ORDER_ITEMS)
    return backend.list_where(ORDER_ITEMS, "order_id", order_id)


def get_order_details(backend, order_id: int, *, include_products: bool = True) -> dict | None:
    """
    Order plus its items. With include_products each item also carries the
    referenced product (None when the product has since been deleted).
    """
    order = backend.get_by_id(ORDERS, order_id)
    if order is None:
        return None

    items = list_order_items(backend, order_id=order_id)
    if include_products:
        items = [{**item, "product": backend.get_by_id("products", item["product_id"])} for item in items]
    return {**order, "items": items}


def update_order(backend, *, order_id: int, patch: dict) -> dict | None:
    if not backend.update(ORDERS, order_id, patch).changed:
        return None
    return backend.get_by_id(ORDERS, order_id)


def delete_order(backend, *, order_id: int) -> bool:
    """Removes the order row only; its items are not cascaded."""
    return backend.delete(ORDERS, order_id).changed
