# backend/greenleaf/services/reporting_service.py
"""
Dashboard and report figures computed from whole collections.

Everything here is derived; nothing is stored.
"""
from __future__ import annotations

from collections import Counter
from datetime import timedelta

from ..time_utils import parse_iso_datetime, utcnow

UNCATEGORIZED = "Other"


def category_distribution(products: list[dict]) -> list[dict]:
    counts = Counter((p.get("category") or UNCATEGORIZED) for p in products)
    return [{"name": name, "value": value} for name, value in sorted(counts.items())]


def sales_by_day(orders: list[dict], *, days: int = 7, now=None) -> list[dict]:
    """Revenue and order count for each of the last `days` UTC dates, oldest first."""
    today = (now or utcnow()).date()
    buckets = {today - timedelta(days=offset): {"sales": 0.0, "orders": 0} for offset in range(days - 1, -1, -1)}
    for order in orders:
        created = parse_iso_datetime(order.get("created_at"))
        if created is None or created.date() not in buckets:
            continue
        bucket = buckets[created.date()]
        bucket["sales"] = round(bucket["sales"] + (order.get("total_amount") or 0), 2)
        bucket["orders"] += 1
    return [{"date": day.isoformat(), **values} for day, values in buckets.items()]


def dashboard_summary(backend, *, low_stock_threshold: int = 10, now=None) -> dict:
    products = backend.list_all("products")
    orders = backend.list_all("orders")

    revenue = round(sum(o.get("total_amount") or 0 for o in orders), 2)
    order_count = len(orders)
    low_stock = [p for p in products if (p.get("stock_quantity") or 0) < low_stock_threshold]

    return {
        "total_products": len(products),
        "low_stock_products": len(low_stock),
        "low_stock": low_stock,
        "total_customers": backend.count("customers"),
        "total_revenue": revenue,
        "total_orders": order_count,
        "average_order_value": round(revenue / order_count, 2) if order_count else 0.0,
        "categories": category_distribution(products),
        "sales_by_day": sales_by_day(orders, now=now),
    }
