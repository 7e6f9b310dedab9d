# Overview: Flask extension instances for database and migrations, plus the storage backend accessor.

from flask import current_app
from flask_sqlalchemy import SQLAlchemy
from flask_migrate import Migrate
from sqlalchemy import event
from sqlalchemy.engine import Engine

db = SQLAlchemy()
migrate = Migrate()

BACKEND_EXTENSION_KEY = "greenleaf_backend"


@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    # SQLite ships with foreign key enforcement off
    module = type(dbapi_connection).__module__
    if not module.startswith("sqlite3"):
        return
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def get_backend():
    """Storage backend built by create_app() for the current application."""
    return current_app.extensions[BACKEND_EXTENSION_KEY]
