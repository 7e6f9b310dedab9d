"""Customers, catalog listings, dispensaries and the products service."""
from datetime import datetime

import pytest

from greenleaf.services import (
    catalog_service,
    customers_service,
    dispensaries_service,
    products_service,
    reporting_service,
)
from greenleaf.validation import ConflictError
from conftest import product_fields

DISPENSARY = {
    "name": "Greenleaf Downtown", "address": "420 Main St", "city": "Denver",
    "phone": "555-0142", "hours": "9am-9pm", "license": "LIC-0001",
}


class TestProducts:

    def test_filters(self, backend):
        backend.insert("products", product_fields(name="Tincture", category="Tinctures", stock_quantity=0))
        backend.insert("products", product_fields(name="Blue Dream", category="Flower", stock_quantity=5))

        assert [p["name"] for p in products_service.list_products(backend, category="flower")] == ["Blue Dream"]
        assert [p["name"] for p in products_service.list_products(backend, in_stock_only=True)] == ["Blue Dream"]
        assert [p["name"] for p in products_service.list_low_stock(backend, threshold=3)] == ["Tincture"]

    def test_update_missing_returns_none(self, backend):
        assert products_service.update_product(backend, product_id=99, patch={"price": 1.0}) is None
        assert products_service.delete_product(backend, product_id=99) is False


class TestCustomers:

    def test_email_unique_case_insensitive(self, backend):
        customers_service.create_customer(backend, patch={"first_name": "A", "last_name": "B", "email": "Jamie@Example.com"})

        with pytest.raises(ConflictError):
            customers_service.create_customer(backend, patch={"first_name": "C", "last_name": "D", "email": "jamie@example.com"})

    def test_update_own_email_allowed(self, backend):
        customer = customers_service.create_customer(
            backend, patch={"first_name": "A", "last_name": "B", "email": "a@b.io"}
        )
        updated = customers_service.update_customer(
            backend, customer_id=customer["id"], patch={"email": "a@b.io", "phone": "555"}
        )
        assert updated["phone"] == "555"

    def test_search(self, backend):
        customers_service.create_customer(backend, patch={"first_name": "Jamie", "last_name": "Doe", "phone": "555-0100"})
        customers_service.create_customer(backend, patch={"first_name": "Riley", "last_name": "Roe"})

        assert [c["first_name"] for c in customers_service.list_customers(backend, search="0100")] == ["Jamie"]


class TestCatalog:

    def test_defaults_and_filters(self, backend):
        catalog_service.create_listing(backend, patch={"name": "Blue Dream", "featured": True})
        hidden = catalog_service.create_listing(backend, patch={"name": "Archived", "published": False})

        assert hidden["published"] is False
        assert hidden["featured"] is False
        assert [x["name"] for x in catalog_service.list_listings(backend, published=True)] == ["Blue Dream"]
        assert [x["name"] for x in catalog_service.list_listings(backend, featured=False)] == ["Archived"]


class TestDispensaries:

    def test_default_status_and_counts(self, backend):
        dispensaries_service.create_dispensary(backend, patch=DISPENSARY)
        dispensaries_service.create_dispensary(backend, patch={**DISPENSARY, "name": "Boulder", "status": "Pending"})

        assert dispensaries_service.status_counts(backend) == {"Active": 1, "Pending": 1, "Closed": 0}
        assert [d["name"] for d in dispensaries_service.list_dispensaries(backend)] == ["Boulder", "Greenleaf Downtown"]
        assert [d["name"] for d in dispensaries_service.list_dispensaries(backend, status="Active")] == ["Greenleaf Downtown"]


def test_dashboard_summary(backend):
    backend.insert("products", product_fields(name="A", category="Flower", stock_quantity=2))
    backend.insert("products", product_fields(name="B", category=None, stock_quantity=50))
    backend.insert("orders", {"total_amount": 30.0, "payment_method": "cash"})
    backend.insert("orders", {"total_amount": 10.0, "payment_method": "card"})

    summary = reporting_service.dashboard_summary(backend, low_stock_threshold=10, now=datetime(2026, 1, 15, 18, 0))

    assert summary["total_products"] == 2
    assert summary["low_stock_products"] == 1
    assert summary["total_revenue"] == 40.0
    assert summary["average_order_value"] == 20.0
    assert summary["categories"] == [{"name": "Flower", "value": 1}, {"name": "Other", "value": 1}]
    assert summary["sales_by_day"][-1] == {"date": "2026-01-15", "sales": 40.0, "orders": 2}
    assert len(summary["sales_by_day"]) == 7
