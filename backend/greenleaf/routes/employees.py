# backend/greenleaf/routes/employees.py
"""
Employee records.

Payloads carry a plain "password"; it is hashed by the service and never
echoed back. password_hash is not writable through the API.
"""
from flask import Blueprint, current_app, request

from ..extensions import get_backend
from ..models import Employee
from ..services import employees_service
from ..services.employees_service import PasswordValidationError
from ..validation import (
    ModelValidationPolicy,
    validate_payload,
    enforce_rules_employee,
    ValidationError,
    ConflictError,
)

EMPLOYEE_POLICY = ModelValidationPolicy(
    writable_fields=frozenset({"first_name", "last_name", "email", "role"}),
    required_on_create=frozenset({"first_name", "last_name", "email", "role"}),
)

employees_bp = Blueprint("employees", __name__, url_prefix="/api/employees")


@employees_bp.get("")
def list_employees():
    backend = get_backend()
    items = employees_service.list_employees(
        backend,
        search=request.args.get("q"),
        role=request.args.get("role"),
    )
    return {"items": items, "count": len(items), "roles": employees_service.role_counts(backend)}


@employees_bp.get("/<int:employee_id>")
def get_employee(employee_id: int):
    employee = employees_service.get_employee(get_backend(), employee_id)
    if employee is None:
        return {"error": "Employee not found"}, 404
    return employee


@employees_bp.post("")
def create_employee_route():
    payload = dict(request.get_json(silent=True) or {})
    password = payload.pop("password", None)
    if not password:
        return {"error": "Missing required fields: password"}, 400

    try:
        patch = validate_payload(model=Employee, payload=payload, policy=EMPLOYEE_POLICY, partial=False)
        enforce_rules_employee(patch)
        created = employees_service.create_employee(get_backend(), patch=patch, password=password)
    except (ValidationError, PasswordValidationError) as e:
        return {"error": str(e)}, 400
    except ConflictError as e:
        return {"error": str(e)}, 409
    except Exception:
        current_app.logger.exception("Failed to create employee")
        return {"error": "Failed to create employee"}, 500

    return created, 201


@employees_bp.put("/<int:employee_id>")
def update_employee_route(employee_id: int):
    payload = dict(request.get_json(silent=True) or {})
    password = payload.pop("password", None)

    try:
        patch = validate_payload(model=Employee, payload=payload, policy=EMPLOYEE_POLICY, partial=True)
        enforce_rules_employee(patch)
        updated = employees_service.update_employee(
            get_backend(), employee_id=employee_id, patch=patch, password=password
        )
    except (ValidationError, PasswordValidationError) as e:
        return {"error": str(e)}, 400
    except ConflictError as e:
        return {"error": str(e)}, 409

    if updated is None:
        return {"error": "Employee not found"}, 404
    return updated, 200


@employees_bp.delete("/<int:employee_id>")
def delete_employee_route(employee_id: int):
    try:
        deleted = employees_service.delete_employee(get_backend(), employee_id=employee_id)
    except ConflictError as e:
        return {"error": str(e)}, 409

    if not deleted:
        return {"error": "Employee not found"}, 404
    return {"ok": True}, 200
