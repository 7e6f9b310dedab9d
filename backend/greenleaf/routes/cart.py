# Overview: Register cart routes; the cart is held client-side in the signed session cookie.

# backend/greenleaf/routes/cart.py
"""
Register (POS) cart routes.

Checkout totals and empties the cart and returns the refreshed in-stock
product list. It does not create an order.
"""
from flask import Blueprint, current_app, request, session

from ..extensions import get_backend
from ..services import products_service
from ..services.cart_service import Cart, EmptyCartError, StockLimitError

SESSION_KEY = "cart"

cart_bp = Blueprint("cart", __name__, url_prefix="/api/cart")


def _load_cart() -> Cart:
    return Cart.from_session(session.get(SESSION_KEY))


def _save_cart(cart: Cart) -> None:
    session[SESSION_KEY] = cart.to_session()


def _int_field(payload: dict, name: str):
    value = payload.get(name)
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


@cart_bp.get("")
def get_cart():
    return _load_cart().to_dict()


@cart_bp.get("/products")
def register_products():
    """Products that can be sold right now (stock_quantity > 0)."""
    items = products_service.list_products(get_backend(), in_stock_only=True)
    return {"items": items, "count": len(items)}


@cart_bp.post("/items")
def add_to_cart():
    payload = request.get_json(silent=True) or {}
    product_id = _int_field(payload, "product_id")
    if product_id is None:
        return {"error": "product_id must be an integer"}, 400

    product = products_service.get_product(get_backend(), product_id)
    if product is None:
        return {"error": "Product not found"}, 404

    cart = _load_cart()
    try:
        cart.add(product)
    except StockLimitError as e:
        return {"error": str(e), "warning": "stock_limit", "cart": cart.to_dict()}, 409

    _save_cart(cart)
    return cart.to_dict(), 200


@cart_bp.put("/items/<int:product_id>")
def set_cart_quantity(product_id: int):
    payload = request.get_json(silent=True) or {}
    quantity = _int_field(payload, "quantity")
    if quantity is None or quantity < 0:
        return {"error": "quantity must be a non-negative integer"}, 400

    cart = _load_cart()
    product = None
    if quantity > 0 and product_id in cart.lines:
        product = products_service.get_product(get_backend(), product_id)
        if product is None:
            return {"error": "Product not found"}, 404
    try:
        cart.set_quantity(product_id, quantity, product)
    except KeyError:
        return {"error": "Product not in cart"}, 404
    except StockLimitError as e:
        return {"error": str(e), "warning": "stock_limit", "cart": cart.to_dict()}, 409

    _save_cart(cart)
    return cart.to_dict(), 200


@cart_bp.delete("/items/<int:product_id>")
def remove_from_cart(product_id: int):
    cart = _load_cart()
    if not cart.remove(product_id):
        return {"error": "Product not in cart"}, 404
    _save_cart(cart)
    return cart.to_dict(), 200


@cart_bp.post("/checkout")
def checkout():
    payload = request.get_json(silent=True) or {}
    payment_method = str(payload.get("payment_method") or "cash").strip().lower()

    cart = _load_cart()
    try:
        receipt = cart.checkout(payment_method)
    except EmptyCartError as e:
        return {"error": str(e)}, 400

    _save_cart(cart)
    current_app.logger.info(
        "Checkout completed: %d items, total %.2f, %s", receipt["item_count"], receipt["total"], payment_method
    )
    products = products_service.list_products(get_backend(), in_stock_only=True)
    return {"receipt": receipt, "products": products}, 200
