from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..entities import EntitySpec
from ..validation import ValidationError


@dataclass(frozen=True)
class WriteResult:
    """
    Outcome of a mutating call.

    changed=False means no record matched the id; that is a normal result,
    not an error.
    """
    changed: bool
    inserted_id: Optional[int] = None


NOT_CHANGED = WriteResult(changed=False)


def check_fields(spec: EntitySpec, fields: dict) -> None:
    """Reject keys that are not mutable columns of the entity."""
    unknown = sorted(k for k in fields if k not in spec.mutable_fields)
    if unknown:
        raise ValidationError(f"Field not allowed on {spec.table}: {', '.join(unknown)}")
