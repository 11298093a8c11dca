"""Dining table model."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from restock.database import Base
import enum


class TableState(str, enum.Enum):
    """Conventional occupancy states (the column itself accepts any string)."""
    AVAILABLE = 'available'
    OCCUPIED = 'occupied'
    RESERVED = 'reserved'


class DiningTable(Base):
    """Dining table (mesa)."""

    __tablename__ = 'dining_table'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True)
    quantity = Column(Integer, nullable=False)
    state = Column(String(30), nullable=False, default=TableState.AVAILABLE.value)

    # Order currently seated at this table; plain column, the table outlives its orders
    active_order_id = Column(Integer, nullable=True)

    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())

    def __repr__(self):
        return f"<DiningTable(id={self.id}, name='{self.name}', state='{self.state}')>"
