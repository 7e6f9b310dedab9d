# backend/greenleaf/routes/system.py
"""System health endpoint."""

import time
from flask import Blueprint, current_app

from ..entities import TABLE_NAMES
from ..extensions import get_backend

system_bp = Blueprint("system", __name__)


def check_storage_health() -> dict:
    """Count every table through the configured backend."""
    start_time = time.time()
    backend = get_backend()
    try:
        counts = {table: backend.count(table) for table in TABLE_NAMES}
        elapsed_ms = (time.time() - start_time) * 1000
        return {
            "status": "healthy",
            "backend": backend.kind,
            "latency_ms": round(elapsed_ms, 2),
            "details": counts,
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Storage health check failed")
        return {
            "status": "unhealthy",
            "backend": backend.kind,
            "latency_ms": round(elapsed_ms, 2),
            "error": "Storage error",
        }


@system_bp.get("/health")
def health():
    storage = check_storage_health()
    status_code = 200 if storage["status"] == "healthy" else 503
    return {"status": storage["status"], "storage": storage}, status_code
