"""
Message Repository - Message Store data access
"""
from typing import List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session

from nursery.models.message import ContactMessage
from nursery.schemas.message import ContactMessageCreate


class MessageRepository:
    """Repository for ContactMessage operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self, is_read: Optional[bool] = None) -> List[ContactMessage]:
        """Get messages newest first, optionally by read flag"""
        query = self.db.query(ContactMessage)
        if is_read is not None:
            query = query.filter(ContactMessage.is_read.is_(is_read))
        return query.order_by(desc(ContactMessage.created_at), desc(ContactMessage.id)).all()
    
    def get_by_id(self, message_id: int) -> Optional[ContactMessage]:
        """Get message by ID"""
        return self.db.query(ContactMessage).filter(ContactMessage.id == message_id).first()
    
    def create(self, message_data: ContactMessageCreate) -> ContactMessage:
        """Store a contact form submission"""
        message = ContactMessage(**message_data.model_dump())
        self.db.add(message)
        self.db.commit()
        self.db.refresh(message)
        return message
    
    def mark_read(self, message_id: int) -> Optional[ContactMessage]:
        """Set the read flag"""
        message = self.get_by_id(message_id)
        if not message:
            return None
        
        message.is_read = True
        self.db.commit()
        self.db.refresh(message)
        return message
    
    def delete(self, message_id: int) -> bool:
        """Delete message"""
        message = self.get_by_id(message_id)
        if not message:
            return False
        
        self.db.delete(message)
        self.db.commit()
        return True
    
    def count_unread(self) -> int:
        """Get count of unread messages"""
        return self.db.query(ContactMessage).filter(ContactMessage.is_read.is_(False)).count()
