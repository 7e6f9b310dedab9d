# Overview: SQLAlchemy-backed implementation of the record CRUD contract.

"""
Relational Backend

Same contract as the record store, expressed as parameterized statements on
a single SQLAlchemy session. Tables declare NOT NULL, UNIQUE and foreign key
constraints; violations surface as ConflictError.

Each call commits on its own. A caller writing an order and then its items
makes separate commits, so a failure in between leaves an order without
items.
"""
from __future__ import annotations

from datetime import datetime
from typing import Callable, Optional

import sqlalchemy as sa
from sqlalchemy.exc import IntegrityError

from ..entities import ENTITIES, get_entity
from ..time_utils import utcnow
from ..validation import ConflictError, ValidationError
from .results import NOT_CHANGED, WriteResult, check_fields

NOT_NULL_MESSAGE = "A required field is missing."


class RelationalBackend:
    kind = "relational"

    def __init__(self, session, clock: Callable[[], datetime] = utcnow):
        self.session = session
        self.clock = clock

    def initialize(self) -> None:
        """Create any missing tables (migrations are the production path)."""
        from ..extensions import db
        db.metadata.create_all(bind=self.session.get_bind())

    def _commit(self, stmt=None):
        """Execute stmt (if any) and commit; constraint failures roll back."""
        try:
            result = self.session.execute(stmt) if stmt is not None else None
            self.session.commit()
            return result
        except IntegrityError as exc:
            self.session.rollback()
            message = _integrity_message(exc)
            if message == NOT_NULL_MESSAGE:
                raise ValidationError(message) from exc
            raise ConflictError(message) from exc

    def insert(self, table: str, fields: dict) -> WriteResult:
        spec = get_entity(table)
        check_fields(spec, fields)

        values = dict(fields)
        now = self.clock()
        if spec.has_created_at:
            values["created_at"] = now
        if spec.has_updated_at:
            values["updated_at"] = now

        obj = spec.model(**values)
        self.session.add(obj)
        self._commit()
        return WriteResult(changed=True, inserted_id=obj.id)

    def list_all(self, table: str) -> list[dict]:
        spec = get_entity(table)
        stmt = sa.select(spec.model).order_by(spec.model.id.asc())
        # Natural-key ordering is applied in Python; SQLite lower() only folds ASCII
        return spec.sort([obj.to_dict() for obj in self.session.scalars(stmt).all()])

    def list_where(self, table: str, field: str, value) -> list[dict]:
        spec = get_entity(table)
        if field not in spec.columns:
            raise KeyError(f"Unknown column on {table}: {field}")
        stmt = (
            sa.select(spec.model)
            .where(getattr(spec.model, field) == value)
            .order_by(spec.model.id.asc())
        )
        return spec.sort([obj.to_dict() for obj in self.session.scalars(stmt).all()])

    def get_by_id(self, table: str, record_id: int) -> Optional[dict]:
        spec = get_entity(table)
        obj = self.session.get(spec.model, record_id)
        return obj.to_dict() if obj is not None else None

    def update(self, table: str, record_id: int, patch: dict) -> WriteResult:
        spec = get_entity(table)
        check_fields(spec, patch)

        values = dict(patch)
        if spec.has_updated_at:
            values["updated_at"] = self.clock()
        if not values:
            exists = self.session.get(spec.model, record_id) is not None
            return WriteResult(changed=True) if exists else NOT_CHANGED

        # SET list is built from the patch keys, already restricted to mutable columns
        stmt = (
            sa.update(spec.model)
            .where(spec.model.id == record_id)
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        result = self._commit(stmt)
        if result.rowcount == 0:
            return NOT_CHANGED
        return WriteResult(changed=True)

    def delete(self, table: str, record_id: int) -> WriteResult:
        spec = get_entity(table)
        stmt = (
            sa.delete(spec.model)
            .where(spec.model.id == record_id)
            .execution_options(synchronize_session=False)
        )
        result = self._commit(stmt)
        if result.rowcount == 0:
            return NOT_CHANGED
        return WriteResult(changed=True)

    def count(self, table: str) -> int:
        spec = get_entity(table)
        return self.session.scalar(sa.select(sa.func.count()).select_from(spec.model))

    def wipe(self) -> None:
        """Delete every row, children first. sqlite_autoincrement keeps ids from being reused."""
        from ..extensions import db
        for table in reversed(db.metadata.sorted_tables):
            if table.name in ENTITIES:
                self.session.execute(table.delete())
        self._commit()


def _integrity_message(exc: IntegrityError) -> str:
    text = str(exc.orig).lower() if exc.orig is not None else str(exc).lower()
    if "unique" in text:
        return "A record with the same unique value already exists."
    if "foreign key" in text:
        return "Referenced record does not exist or is still referenced."
    if "not null" in text:
        return NOT_NULL_MESSAGE
    return "Write rejected by database constraint."
