# backend/greenleaf/config.py
from __future__ import annotations
import os


class Config:
    # Optional "SECRET_KEY", with default dev key (signs the cart session cookie)
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # "records" (key-value record store) or "relational" (SQLAlchemy)
    STORAGE_BACKEND = os.environ.get("STORAGE_BACKEND", "records")

    # Directory for the file-backed record store; unset keeps records in memory
    RECORD_STORE_PATH = os.environ.get("RECORD_STORE_PATH") or None

    # SQLite DB stored in backend/instance/greenleaf.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///greenleaf.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOW_STOCK_THRESHOLD = int(os.environ.get("LOW_STOCK_THRESHOLD", "10"))
