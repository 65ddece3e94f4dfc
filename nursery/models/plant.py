"""
SQLAlchemy Plant model
"""
from sqlalchemy import Boolean, Column, Integer, String, Float, DateTime, Text, CheckConstraint
from sqlalchemy.sql import func
from nursery.database import Base


class Plant(Base):
    """Plant catalog database model"""
    
    __tablename__ = "plants"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=False, default="")
    care_info = Column(Text, nullable=False, default="")
    price = Column(Float, nullable=False)
    category = Column(String(100), nullable=False, index=True)
    stock = Column(Integer, nullable=False, default=0)
    image_url = Column(String(500), nullable=True)
    is_featured = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    # Constraints
    __table_args__ = (
        CheckConstraint('price > 0', name='check_price_positive'),
        CheckConstraint('stock >= 0', name='check_stock_non_negative'),
    )
    
    def __repr__(self):
        return f"<Plant(id={self.id}, name='{self.name}', price={self.price}, stock={self.stock})>"
