from __future__ import annotations

from ..extensions import db
from greenleaf.time_utils import to_utc_z


class Product(db.Model):
    """
    Catalog product sold at the register.

    price and stock_quantity are non-negative; the validation layer checks
    that, the table does not.
    """
    __tablename__ = "products"
    __table_args__ = (
        db.Index("ix_products_name", "name"),
        {"sqlite_autoincrement": True},
    )

    id = db.Column(db.Integer, primary_key=True)

    name = db.Column(db.String(255), nullable=False)
    description = db.Column(db.Text, nullable=True)
    price = db.Column(db.Float, nullable=False)
    stock_quantity = db.Column(db.Integer, nullable=False, default=0)

    category = db.Column(db.String(64), nullable=True, index=True)
    strain_type = db.Column(db.String(32), nullable=True)  # indica, sativa, hybrid
    thc_content = db.Column(db.Float, nullable=True)
    cbd_content = db.Column(db.Float, nullable=True)
    image_url = db.Column(db.String(512), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    def __repr__(self) -> str:
        return f"<Product id={self.id} name={self.name!r} stock={self.stock_quantity}>"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "price": self.price,
            "stock_quantity": self.stock_quantity,
            "category": self.category,
            "strain_type": self.strain_type,
            "thc_content": self.thc_content,
            "cbd_content": self.cbd_content,
            "image_url": self.image_url,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }


class InventoryTransaction(db.Model):
    """
    Append-style stock movement record.

    quantity_change is positive for restocks and negative for shrink or
    manual corrections. Applying it to Product.stock_quantity is the
    service layer's job.
    """
    __tablename__ = "inventory_transactions"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False, index=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id"), nullable=True, index=True)

    # "restock" | "sale" | "adjustment"
    transaction_type = db.Column(db.String(32), nullable=False, index=True)
    quantity_change = db.Column(db.Integer, nullable=False)
    notes = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    product = db.relationship("Product")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "product_id": self.product_id,
            "employee_id": self.employee_id,
            "transaction_type": self.transaction_type,
            "quantity_change": self.quantity_change,
            "notes": self.notes,
            "created_at": to_utc_z(self.created_at),
        }
