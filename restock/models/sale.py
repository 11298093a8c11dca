"""Sale model."""
from sqlalchemy import Column, Integer, String, Numeric, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from restock.database import Base


class Sale(Base):
    """Sale (venta cerrada). Detached record: no link back to the order or the table."""

    __tablename__ = 'sale'

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_name = Column(String(200), nullable=False, index=True)
    table_name = Column(String(100), nullable=False)
    date = Column(String(50), nullable=False, index=True)
    tip = Column(Numeric(10, 2), nullable=False, default=0)
    total_price = Column(Numeric(10, 2), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    # Relationships
    lines = relationship('SaleLine', back_populates='sale', cascade='all, delete-orphan', order_by='SaleLine.id')

    def __repr__(self):
        return f"<Sale(id={self.id}, user_name='{self.user_name}', total={self.total_price})>"
