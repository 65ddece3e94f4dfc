"""
Contact form endpoint
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from nursery.database import get_db
from nursery.services.message_service import MessageService
from nursery.schemas.message import ContactMessageCreate, ContactMessageResponse

router = APIRouter(prefix="/contact", tags=["contact"])


@router.post("", response_model=ContactMessageResponse, status_code=status.HTTP_201_CREATED, summary="Contact us")
def submit_message(
    message_data: ContactMessageCreate,
    db: Session = Depends(get_db)
):
    """
    Send a message to the nursery
    
    - **name**, **email**, **message**: required
    """
    return MessageService(db).submit_message(message_data)
