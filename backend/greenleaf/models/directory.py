from __future__ import annotations

from ..extensions import db
from greenleaf.time_utils import to_utc_z

DISPENSARY_STATUSES = ("Active", "Pending", "Closed")


class Dispensary(db.Model):
    """Standalone directory entry for a licensed location."""
    __tablename__ = "dispensaries"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(255), nullable=False)
    address = db.Column(db.String(255), nullable=False)
    city = db.Column(db.String(128), nullable=False)
    phone = db.Column(db.String(32), nullable=False)
    hours = db.Column(db.String(128), nullable=False)
    license = db.Column(db.String(64), nullable=False)
    status = db.Column(db.String(16), nullable=False, default="Active", index=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "city": self.city,
            "phone": self.phone,
            "hours": self.hours,
            "license": self.license,
            "status": self.status,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
