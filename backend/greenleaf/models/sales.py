from __future__ import annotations

from ..extensions import db
from greenleaf.time_utils import to_utc_z


class Order(db.Model):
    """
    Completed register order.

    Orders and their items are written by separate statements; an order
    without items is possible if the second write never happens.
    """
    __tablename__ = "orders"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    customer_id = db.Column(db.Integer, db.ForeignKey("customers.id"), nullable=True, index=True)
    employee_id = db.Column(db.Integer, db.ForeignKey("employees.id"), nullable=True, index=True)

    total_amount = db.Column(db.Float, nullable=False)
    payment_method = db.Column(db.String(32), nullable=False)
    payment_status = db.Column(db.String(16), nullable=False, default="pending", index=True)  # pending, completed, failed
    stripe_payment_id = db.Column(db.String(128), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())

    customer = db.relationship("Customer")
    employee = db.relationship("Employee")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "employee_id": self.employee_id,
            "total_amount": self.total_amount,
            "payment_method": self.payment_method,
            "payment_status": self.payment_status,
            "stripe_payment_id": self.stripe_payment_id,
            "created_at": to_utc_z(self.created_at),
        }


class OrderItem(db.Model):
    """Individual line on an order. total_price is expected to be quantity * unit_price."""
    __tablename__ = "order_items"
    __table_args__ = {"sqlite_autoincrement": True}

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey("orders.id"), nullable=False, index=True)
    product_id = db.Column(db.Integer, db.ForeignKey("products.id"), nullable=False)

    quantity = db.Column(db.Integer, nullable=False)
    unit_price = db.Column(db.Float, nullable=False)
    total_price = db.Column(db.Float, nullable=False)

    order = db.relationship("Order", backref=db.backref("items", lazy=True))
    product = db.relationship("Product")

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "order_id": self.order_id,
            "product_id": self.product_id,
            "quantity": self.quantity,
            "unit_price": self.unit_price,
            "total_price": self.total_price,
        }
