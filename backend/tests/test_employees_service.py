import pytest

from greenleaf.services import employees_service
from greenleaf.services.employees_service import PasswordValidationError
from greenleaf.validation import ConflictError

PASSWORD = "Password123!"


def _patch(**overrides):
    patch = {"first_name": "Casey", "last_name": "Cashier", "email": "casey@greenleaf.local", "role": "cashier"}
    patch.update(overrides)
    return patch


def test_create_hashes_password_and_hides_hash(backend):
    employee = employees_service.create_employee(backend, patch=_patch(), password=PASSWORD)

    assert "password_hash" not in employee
    stored = backend.get_by_id("employees", employee["id"])
    assert stored["password_hash"] != PASSWORD
    assert employees_service.verify_password(PASSWORD, stored["password_hash"])


def test_authenticate(backend):
    employees_service.create_employee(backend, patch=_patch(), password=PASSWORD)

    assert employees_service.authenticate_employee(backend, "CASEY@greenleaf.local", PASSWORD)["first_name"] == "Casey"
    assert employees_service.authenticate_employee(backend, "casey@greenleaf.local", "wrong-password") is None
    assert employees_service.authenticate_employee(backend, "nobody@greenleaf.local", PASSWORD) is None


def test_duplicate_email_is_a_conflict(backend):
    employees_service.create_employee(backend, patch=_patch(), password=PASSWORD)

    with pytest.raises(ConflictError):
        employees_service.create_employee(backend, patch=_patch(first_name="Other"), password=PASSWORD)


def test_weak_password_rejected(backend):
    with pytest.raises(PasswordValidationError):
        employees_service.create_employee(backend, patch=_patch(), password="short")
    assert backend.count("employees") == 0


def test_list_search_and_role_counts(record_store):
    employees_service.create_employee(record_store, patch=_patch(), password=PASSWORD)
    employees_service.create_employee(
        record_store, patch=_patch(first_name="Alex", last_name="Admin", email="alex@greenleaf.local", role="admin"), password=PASSWORD
    )

    assert [e["first_name"] for e in employees_service.list_employees(record_store)] == ["Alex", "Casey"]
    assert [e["first_name"] for e in employees_service.list_employees(record_store, search="cash")] == ["Casey"]
    assert employees_service.role_counts(record_store) == {"admin": 1, "manager": 0, "staff": 1}


def test_verify_password_with_garbage_hash():
    assert employees_service.verify_password(PASSWORD, "not-a-bcrypt-hash") is False
