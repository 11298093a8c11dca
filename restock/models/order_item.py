"""Order Item model."""
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey
from sqlalchemy.orm import relationship
from restock.database import Base


def to_cents(value) -> Decimal:
    """Round a money amount to the 2 decimals stored in Numeric(10, 2) columns."""
    return Decimal(str(value)).quantize(Decimal('0.01'))


def compute_line_total(unit_price, quantity) -> Decimal:
    """Cent-rounded unit_price * quantity, so the stored unit price times quantity is the stored total."""
    return (to_cents(unit_price) * Decimal(str(quantity))).quantize(Decimal('0.01'))


class OrderItem(Base):
    """Order line with a snapshot of catalog data taken when it was resolved."""

    __tablename__ = 'order_item'

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_id = Column(Integer, ForeignKey('customer_order.id'), nullable=False)
    product_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False)
    modifications = Column(Text, nullable=False, default='')

    # Catalog snapshot
    product_name = Column(String(200), nullable=False)
    price_per_unit = Column(Numeric(10, 2), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False)

    # Relationships
    order = relationship('Order', back_populates='items')

    def __repr__(self):
        return f"<OrderItem(id={self.id}, product_id={self.product_id}, qty={self.quantity})>"
