"""
SQLAlchemy OrderLine model

One row per (customer, plant, quantity) line item. Rows placed in the same
checkout share a checkout_id; rows written before checkout ids existed have
none and are grouped by time bucket instead.
"""
import enum

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, CheckConstraint, Index

from nursery.database import Base
from nursery.utils.timestamps import utc_now


class OrderStatus(str, enum.Enum):
    """Lifecycle of an order line"""
    PENDING = "Pending"
    CONFIRMED = "Confirmed"
    DELIVERED = "Delivered"


class OrderLine(Base):
    """Order line database model"""
    
    __tablename__ = "order_lines"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False)
    customer_phone = Column(String(50), nullable=False)
    shipping_address = Column(Text, nullable=False)
    plant_id = Column(Integer, nullable=False, index=True)
    plant_name = Column(String(255), nullable=False)  # Denormalized for history
    plant_price = Column(Float, nullable=False)  # Price at purchase time
    quantity = Column(Integer, nullable=False)
    total_amount = Column(Float, nullable=False)
    status = Column(String(20), nullable=False, default=OrderStatus.PENDING.value, index=True)
    checkout_id = Column(String(32), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), default=utc_now, nullable=False, index=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now, nullable=False)
    
    # Constraints
    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_quantity_positive'),
        CheckConstraint("status IN ('Pending', 'Confirmed', 'Delivered')", name='check_status_valid'),
        Index('ix_order_lines_customer', 'customer_email', 'customer_name'),
    )
    
    def __repr__(self):
        return f"<OrderLine(id={self.id}, plant_id={self.plant_id}, quantity={self.quantity}, status='{self.status}')>"
