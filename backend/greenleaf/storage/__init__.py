"""
Storage backends.

Exactly one backend is built per application by build_backend() and handed
to every consumer; nothing in this package keeps module-level state.
"""
from __future__ import annotations

from .record_store import RecordStore
from .relational import RelationalBackend
from .results import WriteResult, NOT_CHANGED
from .substrates import DirectorySubstrate, MemorySubstrate, open_substrate

BACKEND_KINDS = ("records", "relational")


def build_backend(config) -> RecordStore | RelationalBackend:
    """Construct the backend named by config["STORAGE_BACKEND"]."""
    kind = config.get("STORAGE_BACKEND", "records")
    if kind == "records":
        return RecordStore(open_substrate(config.get("RECORD_STORE_PATH")))
    if kind == "relational":
        from ..extensions import db
        return RelationalBackend(db.session)
    raise ValueError(f"Unknown STORAGE_BACKEND {kind!r}; expected one of {', '.join(BACKEND_KINDS)}")


__all__ = [
    "RecordStore",
    "RelationalBackend",
    "WriteResult",
    "NOT_CHANGED",
    "DirectorySubstrate",
    "MemorySubstrate",
    "open_substrate",
    "build_backend",
    "BACKEND_KINDS",
]
