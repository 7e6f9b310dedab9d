from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

from sqlalchemy import Boolean, Float, Integer, String, Text

from .models import DISPENSARY_STATUSES


MAX_PRICE = 1_000_000
MAX_PERCENTAGE = 100.0

EMPLOYEE_ROLES = ("admin", "manager", "cashier", "budtender")


class ValidationError(ValueError):
    """400-level input problem."""


class ConflictError(ValueError):
    """409-level business rule conflict (e.g., duplicate email)."""


@dataclass(frozen=True)
class ModelValidationPolicy:
    """
    Central policy layer:
    - writable_fields: what clients are allowed to set (security boundary)
    - required_on_create: fields required for POST
    """
    writable_fields: frozenset[str]
    required_on_create: frozenset[str] = frozenset()


def _columns_by_key(model) -> dict[str, Any]:
    mapper = model.__mapper__
    return {c.key: c for c in mapper.columns}


def _coerce_value(col, value: Any):
    coltype = col.type

    if value is None:
        return None

    # Integers - strict validation to reject floats and scientific notation
    if isinstance(coltype, Integer):
        # Already an int (but not bool which is a subclass of int)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        if isinstance(value, str):
            stripped = value.strip()
            if not stripped:
                raise ValidationError(f"{col.key} must be an integer")
            if 'e' in stripped.lower():
                raise ValidationError(f"{col.key} must be a plain integer (scientific notation not allowed)")
            if '.' in stripped:
                raise ValidationError(f"{col.key} must be an integer (no decimals)")
            try:
                return int(stripped)
            except ValueError:
                raise ValidationError(f"{col.key} must be an integer")
        if isinstance(value, float):
            raise ValidationError(f"{col.key} must be an integer, not a decimal")
        raise ValidationError(f"{col.key} must be an integer")

    # Floats (prices, percentages) accept ints and numeric strings
    if isinstance(coltype, Float):
        if isinstance(value, bool):
            raise ValidationError(f"{col.key} must be a number")
        if not isinstance(value, (int, float, str)):
            raise ValidationError(f"{col.key} must be a number")
        try:
            number = float(value.strip() if isinstance(value, str) else value)
        except (ValueError, OverflowError):
            raise ValidationError(f"{col.key} must be a number")
        # json accepts bare NaN / Infinity
        if not math.isfinite(number):
            raise ValidationError(f"{col.key} must be a finite number")
        return number

    if isinstance(coltype, Boolean):
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ValidationError(f"{col.key} must be a boolean")

    # Strings / Text
    if isinstance(coltype, (String, Text)):
        return str(value).strip()

    return value


def validate_payload(
    *,
    model,
    payload: dict,
    policy: ModelValidationPolicy,
    partial: bool,
) -> dict:
    """
    Validates + normalizes incoming JSON against:
    - SQLAlchemy column metadata (nullable, type, String length)
    - a policy allowlist (writable_fields)
    - required_on_create (if partial=False)
    Returns a cleaned patch dict with only writable fields.

    partial=False: create semantics (enforce required_on_create)
    partial=True: patch semantics (validate only provided keys)
    """
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")

    if not partial:
        missing = sorted(f for f in policy.required_on_create if payload.get(f) in (None, ""))
        if missing:
            raise ValidationError(f"Missing required fields: {', '.join(missing)}")

    cols = _columns_by_key(model)

    # Reject unknown / non-writable fields
    for k in payload.keys():
        if k not in policy.writable_fields:
            raise ValidationError(f"Field not allowed: {k}")
        if k not in cols:
            raise ValidationError(f"Unknown field: {k}")

    patch: dict = {}

    for k, raw in payload.items():
        col = cols[k]

        if raw is None:
            if not col.nullable:
                raise ValidationError(f"{k} cannot be null")
            patch[k] = None
            continue

        val = _coerce_value(col, raw)

        # Blank string check for non-nullable text fields
        if isinstance(col.type, (String, Text)) and not col.nullable:
            if isinstance(val, str) and val == "":
                raise ValidationError(f"{k} cannot be blank")

        # Optional text fields: blank means "not provided"
        if isinstance(col.type, (String, Text)) and col.nullable and val == "":
            val = None

        # Max length check for String(n)
        if isinstance(col.type, String) and col.type.length and isinstance(val, str):
            if len(val) > col.type.length:
                raise ValidationError(f"{k} exceeds max length {col.type.length}")

        patch[k] = val

    return patch


def _require_non_negative(patch: dict, field: str) -> None:
    if field in patch and patch[field] is not None and patch[field] < 0:
        raise ValidationError(f"{field} must be >= 0")


def _require_percentage(patch: dict, field: str) -> None:
    _require_non_negative(patch, field)
    if field in patch and patch[field] is not None and patch[field] > MAX_PERCENTAGE:
        raise ValidationError(f"{field} cannot exceed {MAX_PERCENTAGE:g}")


def enforce_rules_product(patch: dict) -> None:
    """
    Business rules that are not captured by SQLAlchemy metadata alone.
    Keep these small and centralized.
    """
    _require_non_negative(patch, "price")
    if patch.get("price") is not None and patch["price"] > MAX_PRICE:
        raise ValidationError(f"price cannot exceed {MAX_PRICE:,}")
    _require_non_negative(patch, "stock_quantity")
    _require_percentage(patch, "thc_content")
    _require_percentage(patch, "cbd_content")


def enforce_rules_catalog_listing(patch: dict) -> None:
    _require_percentage(patch, "thc_percentage")
    _require_percentage(patch, "cbd_percentage")


def enforce_rules_dispensary(patch: dict) -> None:
    if "status" in patch and patch["status"] not in DISPENSARY_STATUSES:
        raise ValidationError(f"status must be one of: {', '.join(DISPENSARY_STATUSES)}")


def enforce_rules_employee(patch: dict) -> None:
    if "role" in patch:
        patch["role"] = patch["role"].lower()
        if patch["role"] not in EMPLOYEE_ROLES:
            raise ValidationError(f"role must be one of: {', '.join(EMPLOYEE_ROLES)}")
    if "email" in patch and "@" not in patch["email"]:
        raise ValidationError("email must be a valid address")


def enforce_rules_customer(patch: dict) -> None:
    if patch.get("email") is not None and "@" not in patch["email"]:
        raise ValidationError("email must be a valid address")


def enforce_rules_order(patch: dict) -> None:
    _require_non_negative(patch, "total_amount")


def enforce_rules_order_item(patch: dict) -> None:
    if "quantity" in patch and (patch["quantity"] is None or patch["quantity"] <= 0):
        raise ValidationError("quantity must be > 0")
    _require_non_negative(patch, "unit_price")
    _require_non_negative(patch, "total_price")


def enforce_rules_inventory_transaction(patch: dict) -> None:
    if "quantity_change" in patch and patch["quantity_change"] == 0:
        raise ValidationError("quantity_change must be non-zero")
    if patch.get("transaction_type") == "restock" and patch.get("quantity_change", 1) < 0:
        raise ValidationError("quantity_change must be > 0 for restock")
