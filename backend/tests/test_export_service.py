import json
from datetime import datetime

import pytest

from greenleaf.services.export_service import (
    ExportError,
    export_all,
    export_filename,
    export_table,
    to_csv,
    to_json,
)
from conftest import product_fields

NOW = datetime(2026, 3, 4, 9, 30, 0)


def test_csv_header_and_rows():
    records = [{"id": 1, "name": "A", "price": 10.0}, {"id": 2, "name": "B", "price": 0}]
    assert to_csv(records) == "id,name,price\n1,A,10.0\n2,B,0"


def test_csv_empty_is_empty_string():
    assert to_csv([]) == ""


def test_csv_quotes_delimiter_quote_and_newline():
    records = [{"name": 'Say "hi"', "notes": "a,b", "description": "line1\nline2"}]
    assert to_csv(records) == 'name,notes,description\n"Say ""hi""","a,b","line1\nline2"'


def test_csv_header_is_union_in_first_seen_order():
    records = [{"id": 1, "name": "A"}, {"id": 2, "email": "b@x.io"}]
    assert to_csv(records) == "id,name,email\n1,A,\n2,,b@x.io"


def test_csv_flattens_none_and_nested_values():
    records = [{"id": 1, "tags": ["a", "b"], "meta": {"k": 1}, "notes": None, "featured": True}]
    assert to_csv(records) == "id,tags,meta,notes,featured\n1,,,,true"


def test_csv_custom_delimiter():
    assert to_csv([{"a": "x;y", "b": 2}], delimiter=";") == 'a;b\n"x;y";2'


def test_json_is_indented():
    assert to_json([{"id": 1}]) == '[\n  {\n    "id": 1\n  }\n]'


def test_filename_uses_date():
    assert export_filename("products", "csv", "2026-03-04") == "products_2026-03-04.csv"


def test_export_table_csv(backend):
    backend.insert("products", product_fields(name="Zkittlez"))
    backend.insert("products", product_fields(name="Apple"))

    filename, content, mimetype = export_table(backend, "products", "csv", now=NOW)

    assert filename == "products_2026-03-04.csv"
    assert mimetype.startswith("text/csv")
    lines = content.split("\n")
    assert lines[0].startswith("id,")
    assert "Apple" in lines[1]
    assert "Zkittlez" in lines[2]


def test_export_table_json_parses_back(backend):
    backend.insert("customers", {"first_name": "Jamie", "last_name": "Doe"})

    _, content, mimetype = export_table(backend, "customers", "json", now=NOW)

    assert mimetype.startswith("application/json")
    [customer] = json.loads(content)
    assert customer["first_name"] == "Jamie"


def test_export_empty_table_csv(backend):
    _, content, _ = export_table(backend, "dispensaries", "csv", now=NOW)
    assert content == ""


@pytest.mark.parametrize("table,fmt", [("employees", "csv"), ("products", "xml")])
def test_export_table_rejects(backend, table, fmt):
    with pytest.raises(ExportError):
        export_table(backend, table, fmt)


def test_export_all_json_bundle(backend):
    backend.insert("products", product_fields())
    backend.insert("orders", {"total_amount": 35.0, "payment_method": "cash"})

    filename, content, _ = export_all(backend, "json", now=NOW)

    assert filename == "complete_database_2026-03-04.json"
    [bundle] = json.loads(content)
    assert set(bundle) == {"products", "orders", "order_items", "customers", "weedmaps_products", "exported_at"}
    assert bundle["exported_at"] == "2026-03-04T09:30:00.000Z"
    assert len(bundle["products"]) == 1
    assert len(bundle["orders"]) == 1


def test_export_all_csv_is_orders(backend):
    backend.insert("orders", {"total_amount": 12.0, "payment_method": "card"})

    filename, content, _ = export_all(backend, "csv", now=NOW)

    assert filename == "complete_database_2026-03-04.csv"
    assert "payment_method" in content.split("\n")[0]
    assert "card" in content


def test_json_export_matches_stored_records(backend):
    for i in range(4):
        backend.insert("products", product_fields(name=f"Strain {i}", price=10.0 + i))

    _, content, _ = export_table(backend, "products", "json", now=NOW)

    assert json.loads(content) == backend.list_all("products")
