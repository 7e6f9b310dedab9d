# Overview: Service-layer operations for employees; hashes passwords and hides hashes from callers.

"""
Employees Service

Passwords are hashed with bcrypt before they reach storage. Every function
that returns an employee strips password_hash; the hash never leaves this
module except through verify_password().
"""
from __future__ import annotations

import bcrypt

from ..validation import ConflictError

TABLE = "employees"

MIN_PASSWORD_LENGTH = 8


class PasswordValidationError(Exception):
    """Raised when password doesn't meet strength requirements."""
    pass


def validate_password_strength(password: str) -> None:
    if not isinstance(password, str) or len(password) < MIN_PASSWORD_LENGTH:
        raise PasswordValidationError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")


def hash_password(password: str) -> str:
    """Hash password with bcrypt (cost factor 12)."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        return False


def public_view(employee: dict | None) -> dict | None:
    if employee is None:
        return None
    return {k: v for k, v in employee.items() if k != "password_hash"}


def _find_by_email(backend, email: str) -> dict | None:
    wanted = email.casefold()
    for employee in backend.list_all(TABLE):
        if (employee.get("email") or "").casefold() == wanted:
            return employee
    return None


def list_employees(backend, *, search: str | None = None, role: str | None = None) -> list[dict]:
    """Employees ordered by first name, optionally filtered by a search term or role."""
    employees = backend.list_all(TABLE)
    if role:
        employees = [e for e in employees if e.get("role") == role]
    if search:
        term = search.casefold()
        employees = [
            e for e in employees
            if any(term in (e.get(f) or "").casefold() for f in ("first_name", "last_name", "email", "role"))
        ]
    return [public_view(e) for e in employees]


def get_employee(backend, employee_id: int) -> dict | None:
    return public_view(backend.get_by_id(TABLE, employee_id))


def create_employee(backend, *, patch: dict, password: str) -> dict:
    """
    Raises:
        PasswordValidationError: If the password is too weak
        ConflictError: If the email is already used by another employee
    """
    validate_password_strength(password)
    if _find_by_email(backend, patch["email"]) is not None:
        raise ConflictError("Email already registered to another employee.")

    fields = dict(patch)
    fields["password_hash"] = hash_password(password)
    result = backend.insert(TABLE, fields)
    return get_employee(backend, result.inserted_id)


def update_employee(backend, *, employee_id: int, patch: dict, password: str | None = None) -> dict | None:
    if "email" in patch:
        existing = _find_by_email(backend, patch["email"])
        if existing is not None and existing["id"] != employee_id:
            raise ConflictError("Email already registered to another employee.")

    fields = dict(patch)
    if password is not None:
        validate_password_strength(password)
        fields["password_hash"] = hash_password(password)

    if not backend.update(TABLE, employee_id, fields).changed:
        return None
    return get_employee(backend, employee_id)


def delete_employee(backend, *, employee_id: int) -> bool:
    return backend.delete(TABLE, employee_id).changed


def authenticate_employee(backend, email: str, password: str) -> dict | None:
    employee = _find_by_email(backend, email)
    if employee is None or not verify_password(password, employee.get("password_hash") or ""):
        return None
    return public_view(employee)


def role_counts(backend) -> dict:
    counts = {"admin": 0, "manager": 0, "staff": 0}
    for employee in backend.list_all(TABLE):
        role = employee.get("role")
        if role in ("admin", "manager"):
            counts[role] += 1
        elif role in ("cashier", "budtender"):
            counts["staff"] += 1
    return counts
