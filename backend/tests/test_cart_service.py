import pytest

from greenleaf.services.cart_service import Cart, EmptyCartError, StockLimitError


def _product(product_id=1, *, price=10.0, stock=3, name="Blue Dream"):
    return {"id": product_id, "name": name, "price": price, "stock_quantity": stock, "category": "Flower"}


def test_add_increments_quantity():
    cart = Cart()
    cart.add(_product())
    cart.add(_product())

    assert cart.lines[1].quantity == 2
    assert cart.item_count() == 2
    assert cart.total() == 20.0


def test_add_beyond_stock_raises_and_leaves_cart_unchanged():
    cart = Cart()
    product = _product(stock=3)
    for _ in range(3):
        cart.add(product)

    with pytest.raises(StockLimitError, match="available in stock"):
        cart.add(product)

    assert cart.lines[1].quantity == 3


def test_out_of_stock_product_cannot_be_added():
    cart = Cart()
    with pytest.raises(StockLimitError):
        cart.add(_product(stock=0))
    assert len(cart) == 0


def test_add_refreshes_snapshot():
    cart = Cart()
    cart.add(_product(price=10.0))
    cart.add(_product(price=12.0))

    assert cart.lines[1].product["price"] == 12.0
    assert cart.total() == 24.0


def test_set_quantity_zero_removes_line():
    cart = Cart()
    cart.add(_product())

    assert cart.set_quantity(1, 0) is None
    assert len(cart) == 0


def test_set_quantity_caps_at_stock():
    cart = Cart()
    cart.add(_product(stock=3))

    with pytest.raises(StockLimitError):
        cart.set_quantity(1, 4)
    assert cart.set_quantity(1, 3).quantity == 3


def test_set_quantity_uses_fresh_stock():
    cart = Cart()
    cart.add(_product(stock=5))

    with pytest.raises(StockLimitError):
        cart.set_quantity(1, 4, _product(stock=2))
    assert cart.lines[1].quantity == 1

    line = cart.set_quantity(1, 6, _product(stock=8, price=11.0))
    assert line.quantity == 6
    assert line.product["stock_quantity"] == 8
    assert cart.total() == 66.0


def test_set_quantity_for_missing_line():
    with pytest.raises(KeyError):
        Cart().set_quantity(7, 1)


def test_remove():
    cart = Cart()
    cart.add(_product())
    assert cart.remove(1) is True
    assert cart.remove(1) is False


def test_checkout_totals_and_clears():
    cart = Cart()
    cart.add(_product(1, price=10.0))
    cart.add(_product(2, price=2.5, name="Pre-Roll"))
    cart.add(_product(2, price=2.5, name="Pre-Roll"))

    receipt = cart.checkout("card")

    assert receipt["total"] == 15.0
    assert receipt["item_count"] == 3
    assert receipt["payment_method"] == "card"
    assert [line["line_total"] for line in receipt["lines"]] == [10.0, 5.0]
    assert len(cart) == 0


def test_checkout_empty_cart():
    with pytest.raises(EmptyCartError):
        Cart().checkout("cash")


def test_checkout_writes_nothing(backend):
    product_id = backend.insert("products", {"name": "Gummies", "price": 20.0, "stock_quantity": 5}).inserted_id
    cart = Cart()
    cart.add(backend.get_by_id("products", product_id))

    cart.checkout("cash")

    assert backend.count("orders") == 0
    assert backend.count("order_items") == 0
    assert backend.get_by_id("products", product_id)["stock_quantity"] == 5


def test_session_round_trip_keeps_lines():
    cart = Cart()
    cart.add(_product(5, price=4.0, stock=9))
    cart.add(_product(5, price=4.0, stock=9))

    restored = Cart.from_session(cart.to_session())

    assert restored.lines[5].quantity == 2
    assert restored.total() == 8.0
