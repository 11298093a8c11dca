"""Models package - exports all SQLAlchemy models."""
from restock.models.dining_table import DiningTable, TableState
from restock.models.order import Order
from restock.models.order_item import OrderItem, compute_line_total, to_cents
from restock.models.sale import Sale
from restock.models.sale_line import SaleLine

__all__ = [
    'DiningTable', 'TableState',
    'Order', 'OrderItem', 'compute_line_total', 'to_cents',
    'Sale', 'SaleLine',
]
