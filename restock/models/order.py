"""Order model."""
from decimal import Decimal
from sqlalchemy import Column, Integer, String, Numeric, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from restock.database import Base


class Order(Base):
    """Customer order (comanda) seated at a dining table."""

    __tablename__ = 'customer_order'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, nullable=False, index=True)
    table_id = Column(Integer, ForeignKey('dining_table.id'), nullable=True)
    email = Column(String(255), nullable=False)
    total_price = Column(Numeric(10, 2), nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    # Relationships
    table = relationship('DiningTable')
    items = relationship(
        'OrderItem',
        back_populates='order',
        cascade='all, delete-orphan',
        order_by='OrderItem.id'
    )

    @staticmethod
    def sum_line_totals(items) -> Decimal:
        """Order total for a set of line snapshots (anything with a total_price)."""
        total = sum((Decimal(str(item.total_price)) for item in items), Decimal('0.00'))
        return total.quantize(Decimal('0.01'))

    def __repr__(self):
        return f"<Order(id={self.id}, user_id={self.user_id}, total={self.total_price})>"
