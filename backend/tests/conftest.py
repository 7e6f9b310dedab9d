"""
Pytest fixtures for Greenleaf backend tests.

Provides a controllable clock, a storage backend fixture parametrized over
both implementations, and Flask app/client fixtures.
"""
from datetime import datetime, timedelta

import pytest

from greenleaf import create_app
from greenleaf.extensions import BACKEND_EXTENSION_KEY, db
from greenleaf.storage import MemorySubstrate, RecordStore


class TickingClock:
    """Returns a strictly increasing UTC time, 5ms apart per call."""

    def __init__(self, start: datetime = datetime(2026, 1, 15, 12, 0, 0)):
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(milliseconds=5)
        return self.current


RELATIONAL_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test',
    'STORAGE_BACKEND': 'relational',
    'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
}

RECORDS_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test',
    'STORAGE_BACKEND': 'records',
    'RECORD_STORE_PATH': None,
}


@pytest.fixture
def clock():
    return TickingClock()


@pytest.fixture
def record_store(clock):
    """Record store over an in-memory substrate."""
    store = RecordStore(MemorySubstrate(), clock=clock)
    store.initialize()
    return store


@pytest.fixture
def relational_backend(clock):
    """Relational backend over in-memory SQLite, schema created fresh."""
    app = create_app(RELATIONAL_CONFIG)
    with app.app_context():
        db.create_all()
        backend = app.extensions[BACKEND_EXTENSION_KEY]
        backend.clock = clock
        yield backend
        db.session.remove()
        db.drop_all()


@pytest.fixture(params=["records", "relational"])
def backend(request):
    """Each test using this fixture runs once per storage backend."""
    if request.param == "records":
        return request.getfixturevalue("record_store")
    return request.getfixturevalue("relational_backend")


@pytest.fixture
def app():
    """Application on the in-memory record store."""
    app = create_app(RECORDS_CONFIG)
    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def app_backend(app):
    return app.extensions[BACKEND_EXTENSION_KEY]


def product_fields(**overrides) -> dict:
    fields = {
        "name": "Blue Dream",
        "description": "Balanced hybrid",
        "price": 35.0,
        "stock_quantity": 10,
        "category": "Flower",
        "strain_type": "hybrid",
        "thc_content": 21.5,
        "cbd_content": 0.1,
    }
    fields.update(overrides)
    return fields
