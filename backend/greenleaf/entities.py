# backend/greenleaf/entities.py
"""
Entity registry shared by both storage backends.

Each logical table is described once, from its SQLAlchemy model: which
fields a patch may touch, which timestamps the table carries, and the
natural key used to order list_all() results.
"""
from __future__ import annotations

from dataclasses import dataclass

from .models import (
    Product,
    Customer,
    Employee,
    Order,
    OrderItem,
    InventoryTransaction,
    WeedmapsProduct,
    Dispensary,
)

GENERATED_FIELDS = frozenset({"id", "created_at", "updated_at"})


@dataclass(frozen=True)
class EntitySpec:
    table: str
    model: type
    sort_key: str | None = None

    @property
    def columns(self) -> frozenset[str]:
        return frozenset(c.key for c in self.model.__mapper__.columns)

    @property
    def mutable_fields(self) -> frozenset[str]:
        return self.columns - GENERATED_FIELDS

    @property
    def has_created_at(self) -> bool:
        return "created_at" in self.columns

    @property
    def has_updated_at(self) -> bool:
        return "updated_at" in self.columns

    def sort(self, records: list[dict]) -> list[dict]:
        """
        Order records by the natural key, casefolded. Records must arrive in
        id order; sorted() is stable, so equal keys keep that order.
        """
        if self.sort_key is None:
            return records
        key = self.sort_key
        return sorted(records, key=lambda r: str(r.get(key) or "").casefold())


ENTITIES: dict[str, EntitySpec] = {
    spec.table: spec
    for spec in (
        EntitySpec("products", Product, sort_key="name"),
        EntitySpec("customers", Customer),
        EntitySpec("employees", Employee, sort_key="first_name"),
        EntitySpec("orders", Order),
        EntitySpec("order_items", OrderItem),
        EntitySpec("inventory_transactions", InventoryTransaction),
        EntitySpec("weedmaps_products", WeedmapsProduct, sort_key="name"),
        EntitySpec("dispensaries", Dispensary, sort_key="name"),
    )
}

TABLE_NAMES = tuple(ENTITIES)


def get_entity(table: str) -> EntitySpec:
    try:
        return ENTITIES[table]
    except KeyError:
        raise KeyError(f"Unknown table: {table}") from None
