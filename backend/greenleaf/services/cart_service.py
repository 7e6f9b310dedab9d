# backend/greenleaf/services/cart_service.py
"""
Register cart

A cart maps product id -> {product snapshot, quantity}. It lives with the
client (the HTTP layer keeps it in the signed session cookie), never in
storage.

Checkout totals the cart and empties it. It does NOT write an order or any
order items; callers that need an order record use orders_service.
"""
from __future__ import annotations

from dataclasses import dataclass

from ..validation import ConflictError, ValidationError

SNAPSHOT_FIELDS = ("id", "name", "price", "stock_quantity", "category", "image_url")


class StockLimitError(ConflictError):
    """Requested quantity exceeds the product's stock on hand."""


class EmptyCartError(ValidationError):
    """Checkout attempted with nothing in the cart."""


@dataclass
class CartLine:
    product: dict
    quantity: int

    @property
    def line_total(self) -> float:
        return round(self.product["price"] * self.quantity, 2)

    def to_dict(self) -> dict:
        return {
            "product": self.product,
            "quantity": self.quantity,
            "line_total": self.line_total,
        }


def snapshot(product: dict) -> dict:
    return {k: product.get(k) for k in SNAPSHOT_FIELDS}


class Cart:
    def __init__(self, lines: dict[int, CartLine] | None = None):
        self.lines: dict[int, CartLine] = dict(lines or {})

    def __len__(self) -> int:
        return len(self.lines)

    def add(self, product: dict) -> CartLine:
        """
        Add one unit of product.

        The snapshot is refreshed from the product passed in, so the stock
        cap always uses the latest stock_quantity the caller has.

        Raises:
            StockLimitError: If one more unit would exceed stock; the cart
                is left unchanged
        """
        product_id = product["id"]
        stock = product.get("stock_quantity") or 0
        current = self.lines.get(product_id)
        new_quantity = (current.quantity if current else 0) + 1
        if new_quantity > stock:
            raise StockLimitError(
                f"Cannot add more {product.get('name')!s} than available in stock ({stock})"
            )
        line = CartLine(product=snapshot(product), quantity=new_quantity)
        self.lines[product_id] = line
        return line

    def set_quantity(self, product_id: int, quantity: int, product: dict | None = None) -> CartLine | None:
        """
        Set a line's quantity. Zero removes the line and returns None.

        When product is given the snapshot is refreshed from it before the
        stock cap is checked, as add() does.

        Raises:
            KeyError: If the product has no line in the cart
            StockLimitError: If quantity exceeds stock; the line is left as is
        """
        if quantity < 0:
            raise ValidationError("quantity must be >= 0")
        line = self.lines.get(product_id)
        if line is None:
            raise KeyError(product_id)
        if quantity == 0:
            self.remove(product_id)
            return None
        current = snapshot(product) if product is not None else line.product
        stock = current.get("stock_quantity") or 0
        if quantity > stock:
            raise StockLimitError(
                f"Cannot add more {current.get('name')!s} than available in stock ({stock})"
            )
        line.product = current
        line.quantity = quantity
        return line

    def remove(self, product_id: int) -> bool:
        return self.lines.pop(product_id, None) is not None

    def clear(self) -> None:
        self.lines.clear()

    def total(self) -> float:
        return round(sum(line.product["price"] * line.quantity for line in self.lines.values()), 2)

    def item_count(self) -> int:
        return sum(line.quantity for line in self.lines.values())

    def checkout(self, payment_method: str) -> dict:
        """
        Total the cart and empty it. No order record is written.

        Raises:
            EmptyCartError: If the cart has no lines
        """
        if not self.lines:
            raise EmptyCartError("Please add items to cart before checkout")
        receipt = {
            "payment_method": payment_method,
            "total": self.total(),
            "item_count": self.item_count(),
            "lines": [line.to_dict() for line in self.lines.values()],
        }
        self.clear()
        return receipt

    def to_dict(self) -> dict:
        return {
            "lines": [line.to_dict() for line in self.lines.values()],
            "total": self.total(),
            "item_count": self.item_count(),
        }

    def to_session(self) -> list:
        return [{"product": line.product, "quantity": line.quantity} for line in self.lines.values()]

    @classmethod
    def from_session(cls, data: list | None) -> "Cart":
        lines = {}
        for entry in data or []:
            product = entry["product"]
            lines[product["id"]] = CartLine(product=product, quantity=int(entry["quantity"]))
        return cls(lines)
