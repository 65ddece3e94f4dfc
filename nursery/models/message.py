"""
SQLAlchemy ContactMessage model
"""
from sqlalchemy import Boolean, Column, Integer, String, DateTime, Text
from sqlalchemy.sql import func
from nursery.database import Base


class ContactMessage(Base):
    """Contact form submission"""
    
    __tablename__ = "contact_messages"
    
    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), nullable=False)
    message = Column(Text, nullable=False)
    is_read = Column(Boolean, nullable=False, default=False, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<ContactMessage(id={self.id}, email='{self.email}', is_read={self.is_read})>"
