from __future__ import annotations

from ..extensions import db
from greenleaf.time_utils import to_utc_z


class Customer(db.Model):
    """
    Customer master data.

    license_number and date_of_birth back the age check done at the counter.
    """
    __tablename__ = "customers"
    __table_args__ = (
        db.UniqueConstraint("email", name="uq_customers_email"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    first_name = db.Column(db.String(128), nullable=False)
    last_name = db.Column(db.String(128), nullable=False)
    email = db.Column(db.String(255), nullable=True)
    phone = db.Column(db.String(32), nullable=True)
    date_of_birth = db.Column(db.String(10), nullable=True)  # YYYY-MM-DD
    license_number = db.Column(db.String(64), nullable=True)
    address = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone": self.phone,
            "date_of_birth": self.date_of_birth,
            "license_number": self.license_number,
            "address": self.address,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
