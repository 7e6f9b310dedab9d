# Overview: Serializes whole collections to CSV or indented JSON for download.

"""
Export Service

Read-only: every export reads complete collections through the backend's
list_all() and never writes.

CSV rules:
- header row is the union of record field names, in first-seen order
- None, nested lists and nested mappings become empty strings
- fields containing the delimiter, the quote character or a newline are
  quoted, with internal quotes doubled
"""
from __future__ import annotations

import csv
import io
import json
from datetime import datetime
from typing import Optional

from ..time_utils import today_iso, to_utc_z, utcnow

EXPORT_TABLES = (
    "products",
    "orders",
    "order_items",
    "customers",
    "weedmaps_products",
    "inventory_transactions",
    "dispensaries",
)

# Tables bundled by export_all(); CSV falls back to orders alone.
COMPLETE_DUMP_TABLES = ("products", "orders", "order_items", "customers", "weedmaps_products")
COMPLETE_DUMP_CSV_TABLE = "orders"

FORMATS = {
    "csv": "text/csv; charset=utf-8",
    "json": "application/json; charset=utf-8",
}


class ExportError(ValueError):
    pass


def _header(records: list[dict]) -> list[str]:
    seen: dict[str, None] = {}
    for record in records:
        for key in record:
            seen.setdefault(key, None)
    return list(seen)


def _cell(value) -> str:
    if value is None or isinstance(value, (dict, list, tuple)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_csv(records: list[dict], *, delimiter: str = ",") -> str:
    if not records:
        return ""
    header = _header(records)
    buf = io.StringIO()
    writer = csv.writer(buf, delimiter=delimiter, quotechar='"', quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(header)
    for record in records:
        writer.writerow([_cell(record.get(field)) for field in header])
    return buf.getvalue().rstrip("\n")


def to_json(records) -> str:
    return json.dumps(records, indent=2)


def export_filename(name: str, fmt: str, today: Optional[str] = None) -> str:
    return f"{name}_{today or today_iso()}.{fmt}"


def _check_format(fmt: str) -> None:
    if fmt not in FORMATS:
        raise ExportError(f"format must be one of: {', '.join(FORMATS)}")


def export_table(backend, table: str, fmt: str, *, now: Optional[datetime] = None) -> tuple[str, str, str]:
    """
    Serialize one table.

    Returns:
        (filename, content, mimetype)
    """
    _check_format(fmt)
    if table not in EXPORT_TABLES:
        raise ExportError(f"table must be one of: {', '.join(EXPORT_TABLES)}")

    records = backend.list_all(table)
    content = to_csv(records) if fmt == "csv" else to_json(records)
    return export_filename(table, fmt, today_iso(now)), content, FORMATS[fmt]


def export_all(backend, fmt: str, *, now: Optional[datetime] = None) -> tuple[str, str, str]:
    """
    Complete dump.

    JSON: a one-element array holding every bundled table plus exported_at.
    CSV has no room for several tables in one file, so it carries the
    orders table only.
    """
    _check_format(fmt)
    now = now or utcnow()
    filename = export_filename("complete_database", fmt, today_iso(now))

    if fmt == "csv":
        return filename, to_csv(backend.list_all(COMPLETE_DUMP_CSV_TABLE)), FORMATS[fmt]

    bundle = {table: backend.list_all(table) for table in COMPLETE_DUMP_TABLES}
    bundle["exported_at"] = to_utc_z(now)
    return filename, to_json([bundle]), FORMATS[fmt]
