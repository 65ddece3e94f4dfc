"""
Message Service - contact form submissions
"""
from typing import Optional
from sqlalchemy.orm import Session

from nursery.repositories.message_repository import MessageRepository
from nursery.schemas.message import (
    ContactMessageCreate,
    ContactMessageResponse,
    MessageListResponse
)

READ_FILTERS = {"all": None, "unread": False, "read": True}


class MessageNotFoundError(Exception):
    """Message does not exist"""
    pass


class MessageService:
    """Service layer for contact messages"""
    
    def __init__(self, db: Session):
        self.repository = MessageRepository(db)
    
    def submit_message(self, message_data: ContactMessageCreate) -> ContactMessageResponse:
        """Store a contact form submission"""
        message = self.repository.create(message_data)
        return ContactMessageResponse.model_validate(message)
    
    def get_messages(self, read_filter: str = "all") -> MessageListResponse:
        """
        Get messages newest first
        
        Args:
            read_filter: One of all, unread, read
        """
        messages = self.repository.get_all(is_read=READ_FILTERS[read_filter])
        return MessageListResponse(
            messages=[ContactMessageResponse.model_validate(m) for m in messages],
            total=len(messages),
            unread=self.repository.count_unread()
        )
    
    def mark_as_read(self, message_id: int) -> ContactMessageResponse:
        """Mark message as read"""
        message = self.repository.mark_read(message_id)
        if not message:
            raise MessageNotFoundError(f"Message with id={message_id} not found")
        return ContactMessageResponse.model_validate(message)
    
    def delete_message(self, message_id: int) -> None:
        """Delete message"""
        if not self.repository.delete(message_id):
            raise MessageNotFoundError(f"Message with id={message_id} not found")
