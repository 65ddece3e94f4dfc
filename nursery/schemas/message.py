"""
Pydantic schemas for contact messages
"""
from pydantic import BaseModel, Field, EmailStr, ConfigDict
from datetime import datetime


class ContactMessageCreate(BaseModel):
    """Schema for submitting the contact form"""
    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    message: str = Field(..., min_length=1)
    
    model_config = ConfigDict(str_strip_whitespace=True)


class ContactMessageResponse(BaseModel):
    """Schema for contact message response"""
    id: int
    name: str
    email: str
    message: str
    is_read: bool
    created_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class MessageListResponse(BaseModel):
    """Schema for list of messages response"""
    messages: list[ContactMessageResponse]
    total: int
    unread: int
