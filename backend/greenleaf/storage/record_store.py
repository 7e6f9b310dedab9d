# Overview: Collection-per-key record store with an autoincrement counter per table.

"""
Record Store

Every logical table lives under one key as a JSON array of records, plus a
"<table>_counter" key holding the last id handed out as a decimal string.

Every mutation reads the whole collection, changes it in memory and writes
the whole collection back. That is O(n) per call and is fine at the scale of
a single store's catalog. Nothing here is atomic across processes sharing a
substrate: the last writer wins.

Foreign keys are NOT checked here; an order may point at a customer that
no longer exists.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime
from typing import Callable, Optional

from ..entities import ENTITIES, TABLE_NAMES, get_entity
from ..time_utils import utcnow, to_utc_z
from .results import NOT_CHANGED, WriteResult, check_fields

logger = logging.getLogger(__name__)


def counter_key(table: str) -> str:
    return f"{table}_counter"


class RecordStore:
    """Whole-collection persistence over a key-value substrate."""

    kind = "records"

    def __init__(self, substrate, clock: Callable[[], datetime] = utcnow):
        self.substrate = substrate
        self.clock = clock

    def _timestamp(self) -> str:
        return to_utc_z(self.clock())

    # ------------------------------------------------------------------
    # primitives
    # ------------------------------------------------------------------

    def initialize(self) -> None:
        """Create an empty collection and a zero counter for every missing table."""
        created = []
        for table in TABLE_NAMES:
            if self.substrate.get(table) is None:
                self.substrate.set(table, "[]")
                created.append(table)
            if self.substrate.get(counter_key(table)) is None:
                self.substrate.set(counter_key(table), "0")
        if created:
            logger.info("Record store initialized tables: %s", ", ".join(created))

    def read_counter(self, table: str) -> int:
        return int(self.substrate.get(counter_key(table)) or "0")

    def next_id(self, table: str) -> int:
        next_value = self.read_counter(table) + 1
        self.substrate.set(counter_key(table), str(next_value))
        return next_value

    def read_collection(self, table: str) -> list[dict]:
        # Malformed content raises json.JSONDecodeError to the caller.
        return json.loads(self.substrate.get(table) or "[]")

    def write_collection(self, table: str, records: list[dict]) -> None:
        self.substrate.set(table, json.dumps(records))

    # ------------------------------------------------------------------
    # CRUD contract
    # ------------------------------------------------------------------

    def insert(self, table: str, fields: dict) -> WriteResult:
        spec = get_entity(table)
        check_fields(spec, fields)

        records = self.read_collection(table)
        record_id = self.next_id(table)
        record = {"id": record_id, **fields}
        timestamp = self._timestamp()
        if spec.has_created_at:
            record["created_at"] = timestamp
        if spec.has_updated_at:
            record["updated_at"] = timestamp

        records.append(record)
        self.write_collection(table, records)
        return WriteResult(changed=True, inserted_id=record_id)

    def list_all(self, table: str) -> list[dict]:
        spec = get_entity(table)
        records = self.read_collection(table)
        return spec.sort(records)

    def list_where(self, table: str, field: str, value) -> list[dict]:
        spec = get_entity(table)
        if field not in spec.columns:
            raise KeyError(f"Unknown column on {table}: {field}")
        return [r for r in self.list_all(table) if r.get(field) == value]

    def get_by_id(self, table: str, record_id: int) -> Optional[dict]:
        get_entity(table)
        for record in self.read_collection(table):
            if record.get("id") == record_id:
                return record
        return None

    def update(self, table: str, record_id: int, patch: dict) -> WriteResult:
        spec = get_entity(table)
        check_fields(spec, patch)

        records = self.read_collection(table)
        for index, record in enumerate(records):
            if record.get("id") == record_id:
                break
        else:
            return NOT_CHANGED

        merged = {**records[index], **patch}
        if spec.has_updated_at:
            merged["updated_at"] = self._timestamp()
        records[index] = merged
        self.write_collection(table, records)
        return WriteResult(changed=True)

    def delete(self, table: str, record_id: int) -> WriteResult:
        get_entity(table)
        records = self.read_collection(table)
        remaining = [r for r in records if r.get("id") != record_id]
        if len(remaining) == len(records):
            return NOT_CHANGED
        self.write_collection(table, remaining)
        return WriteResult(changed=True)

    def count(self, table: str) -> int:
        get_entity(table)
        return len(self.read_collection(table))

    def wipe(self) -> None:
        """Empty every collection. Counters are kept so ids are never reused."""
        for table in ENTITIES:
            self.write_collection(table, [])

