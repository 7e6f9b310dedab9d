from .inventory import Product, InventoryTransaction
from .customers import Customer
from .auth import Employee
from .sales import Order, OrderItem
from .catalog import WeedmapsProduct
from .directory import Dispensary, DISPENSARY_STATUSES

__all__ = [
    'Product', 'InventoryTransaction',
    'Customer',
    'Employee',
    'Order', 'OrderItem',
    'WeedmapsProduct',
    'Dispensary', 'DISPENSARY_STATUSES',
]
