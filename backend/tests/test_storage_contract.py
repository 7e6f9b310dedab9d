"""
CRUD contract tests.

Every test here runs against both the record store and the relational
backend through the parametrized `backend` fixture.
"""
import pytest

from greenleaf.time_utils import parse_iso_datetime
from greenleaf.validation import ValidationError
from conftest import product_fields


class TestInsertAndGet:

    def test_get_returns_inserted_fields_plus_generated(self, backend):
        fields = product_fields()
        result = backend.insert("products", fields)

        assert result.changed is True
        assert isinstance(result.inserted_id, int)

        record = backend.get_by_id("products", result.inserted_id)
        assert record["id"] == result.inserted_id
        for key, value in fields.items():
            assert record[key] == value
        assert record["created_at"] == record["updated_at"]
        assert record["created_at"].endswith("Z")

    def test_get_missing_id_is_none(self, backend):
        assert backend.get_by_id("products", 999) is None

    def test_entity_without_updated_at_only_gets_created_at(self, backend):
        result = backend.insert("orders", {"total_amount": 12.5, "payment_method": "cash", "payment_status": "pending"})
        record = backend.get_by_id("orders", result.inserted_id)
        assert "created_at" in record
        assert "updated_at" not in record

    def test_order_items_have_no_timestamps(self, backend):
        product_id = backend.insert("products", product_fields()).inserted_id
        order_id = backend.insert("orders", {"total_amount": 70.0, "payment_method": "card"}).inserted_id
        item_id = backend.insert("order_items", {
            "order_id": order_id, "product_id": product_id,
            "quantity": 2, "unit_price": 35.0, "total_price": 70.0,
        }).inserted_id

        item = backend.get_by_id("order_items", item_id)
        assert "created_at" not in item
        assert item["total_price"] == 70.0

    def test_insert_rejects_unknown_fields(self, backend):
        with pytest.raises(ValidationError):
            backend.insert("products", product_fields(colour="green"))

    def test_unknown_table_raises_key_error(self, backend):
        with pytest.raises(KeyError):
            backend.list_all("vendors")


class TestListAll:

    def test_empty_table_lists_nothing(self, backend):
        assert backend.list_all("products") == []
        assert backend.list_all("dispensaries") == []

    def test_products_sorted_by_name(self, backend):
        backend.insert("products", product_fields(name="B"))
        backend.insert("products", product_fields(name="A"))

        assert [p["name"] for p in backend.list_all("products")] == ["A", "B"]

    def test_name_sort_ignores_case(self, backend):
        backend.insert("products", product_fields(name="banana kush"))
        backend.insert("products", product_fields(name="Apple Fritter"))
        backend.insert("products", product_fields(name="Cherry Pie"))

        names = [p["name"] for p in backend.list_all("products")]
        assert names == ["Apple Fritter", "banana kush", "Cherry Pie"]

    def test_customers_keep_insertion_order(self, backend):
        backend.insert("customers", {"first_name": "Zed", "last_name": "Z"})
        backend.insert("customers", {"first_name": "Amy", "last_name": "A"})

        assert [c["first_name"] for c in backend.list_all("customers")] == ["Zed", "Amy"]

    def test_employees_sorted_by_first_name(self, backend):
        for first, email in (("Morgan", "m@x.io"), ("Alex", "a@x.io")):
            backend.insert("employees", {
                "first_name": first, "last_name": "L", "email": email,
                "role": "cashier", "password_hash": "x",
            })

        assert [e["first_name"] for e in backend.list_all("employees")] == ["Alex", "Morgan"]

    def test_list_where_filters_on_column(self, backend):
        p1 = backend.insert("products", product_fields(name="One")).inserted_id
        p2 = backend.insert("products", product_fields(name="Two")).inserted_id
        order_a = backend.insert("orders", {"total_amount": 1.0, "payment_method": "cash"}).inserted_id
        order_b = backend.insert("orders", {"total_amount": 2.0, "payment_method": "cash"}).inserted_id
        for order_id, product_id in ((order_a, p1), (order_b, p2), (order_a, p2)):
            backend.insert("order_items", {
                "order_id": order_id, "product_id": product_id,
                "quantity": 1, "unit_price": 1.0, "total_price": 1.0,
            })

        items = backend.list_where("order_items", "order_id", order_a)
        assert [i["product_id"] for i in items] == [p1, p2]

    def test_list_where_keeps_name_order(self, backend):
        backend.insert("products", product_fields(name="Zkittlez", category="Flower"))
        backend.insert("products", product_fields(name="Tincture", category="Tinctures"))
        backend.insert("products", product_fields(name="Apple Fritter", category="Flower"))

        flower = backend.list_where("products", "category", "Flower")
        assert [p["name"] for p in flower] == ["Apple Fritter", "Zkittlez"]

    def test_non_ascii_names_sort_the_same(self, backend):
        backend.insert("products", product_fields(name="Émile Kush"))
        backend.insert("products", product_fields(name="Zeta"))
        backend.insert("products", product_fields(name="élan OG"))

        names = [p["name"] for p in backend.list_all("products")]
        assert names == ["Zeta", "élan OG", "Émile Kush"]

    def test_list_where_unknown_column(self, backend):
        with pytest.raises(KeyError):
            backend.list_where("products", "sku", "X")


class TestUpdate:

    def test_update_merges_patch_and_refreshes_updated_at(self, backend):
        product_id = backend.insert("products", product_fields(price=35.0)).inserted_id
        before = backend.get_by_id("products", product_id)

        result = backend.update("products", product_id, {"price": 30.0})
        after = backend.get_by_id("products", product_id)

        assert result.changed is True
        assert after["price"] == 30.0
        assert after["name"] == before["name"]
        assert after["created_at"] == before["created_at"]
        assert parse_iso_datetime(after["updated_at"]) > parse_iso_datetime(before["updated_at"])

    def test_update_missing_id_is_not_an_error(self, backend):
        result = backend.update("products", 42, {"price": 1.0})
        assert result.changed is False

    @pytest.mark.parametrize("field", ["id", "created_at", "updated_at", "not_a_column"])
    def test_update_rejects_non_mutable_fields(self, backend, field):
        product_id = backend.insert("products", product_fields()).inserted_id
        with pytest.raises(ValidationError):
            backend.update("products", product_id, {field: 1})

        assert backend.get_by_id("products", product_id)["id"] == product_id


class TestDelete:

    def test_delete_then_get_is_none(self, backend):
        product_id = backend.insert("products", product_fields()).inserted_id

        assert backend.delete("products", product_id).changed is True
        assert backend.get_by_id("products", product_id) is None

    def test_delete_missing_id_is_not_an_error(self, backend):
        result = backend.delete("products", 7)
        assert result.changed is False


class TestIdentity:

    def test_ids_strictly_increase_and_are_never_reused(self, backend):
        ids = [backend.insert("products", product_fields(name=f"P{i}")).inserted_id for i in range(5)]
        assert ids == sorted(ids)
        assert len(set(ids)) == 5

        backend.delete("products", ids[1])
        backend.delete("products", ids[-1])

        new_id = backend.insert("products", product_fields(name="P5")).inserted_id
        assert new_id > ids[-1]
        assert new_id not in ids

    def test_tables_have_independent_counters(self, backend):
        backend.insert("products", product_fields())
        backend.insert("products", product_fields(name="Second"))
        customer_id = backend.insert("customers", {"first_name": "A", "last_name": "B"}).inserted_id

        assert customer_id == 1

    def test_wipe_keeps_ids_monotonic(self, backend):
        first = backend.insert("products", product_fields()).inserted_id
        backend.wipe()

        assert backend.list_all("products") == []
        assert backend.insert("products", product_fields()).inserted_id > first

    def test_count(self, backend):
        assert backend.count("customers") == 0
        backend.insert("customers", {"first_name": "A", "last_name": "B"})
        assert backend.count("customers") == 1
