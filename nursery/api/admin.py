"""
Back-office API endpoints: dashboard, plant management, messages
"""
from typing import Literal

import structlog
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from nursery.api.deps import get_plant_service
from nursery.database import get_db
from nursery.services.dashboard_service import DashboardService
from nursery.services.message_service import MessageNotFoundError, MessageService
from nursery.services.plant_service import PlantService
from nursery.schemas.dashboard import DashboardStats
from nursery.schemas.message import ContactMessageResponse, MessageListResponse
from nursery.schemas.plant import PlantCreate, PlantUpdate, PlantResponse, PlantListResponse

router = APIRouter(prefix="/admin", tags=["admin"])

logger = structlog.get_logger(__name__)


def get_message_service(db: Session = Depends(get_db)) -> MessageService:
    """Dependency to get MessageService instance"""
    return MessageService(db)


@router.get("/dashboard", response_model=DashboardStats, summary="Dashboard counters")
def get_dashboard(db: Session = Depends(get_db)):
    """
    Counters for the admin dashboard
    
    - Order lines: total, pending, delivered
    - Plants with low stock
    - Unread messages
    """
    return DashboardService(db).get_stats()


@router.get("/plants", response_model=PlantListResponse, summary="Get all plants")
def get_plants(service: PlantService = Depends(get_plant_service)):
    return service.get_plants()


@router.post("/plants", response_model=PlantResponse, status_code=status.HTTP_201_CREATED, summary="Create plant")
def create_plant(
    plant_data: PlantCreate,
    service: PlantService = Depends(get_plant_service)
):
    """
    Create a new plant
    
    - **name**: Plant name (required)
    - **price**: Plant price (required, must be positive)
    - **category**: Plant category (required)
    - **stock**: Stock quantity (required, must be non-negative)
    - **description**, **care_info**, **image_url**, **is_featured**: optional
    """
    try:
        return service.create_plant(plant_data)
    except SQLAlchemyError as e:
        logger.error("plant_save_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save plant"
        )


@router.put("/plants/{plant_id}", response_model=PlantResponse, summary="Update plant")
def update_plant(
    plant_id: int,
    plant_data: PlantUpdate,
    service: PlantService = Depends(get_plant_service)
):
    """
    Update an existing plant
    
    All fields are optional. Only provided fields will be updated.
    """
    try:
        plant = service.update_plant(plant_id, plant_data)
    except SQLAlchemyError as e:
        logger.error("plant_save_failed", plant_id=plant_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to save plant"
        )
    if not plant:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Plant with id={plant_id} not found"
        )
    return plant


@router.delete("/plants/{plant_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete plant")
def delete_plant(
    plant_id: int,
    service: PlantService = Depends(get_plant_service)
):
    try:
        success = service.delete_plant(plant_id)
    except SQLAlchemyError as e:
        logger.error("plant_delete_failed", plant_id=plant_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete plant"
        )
    if not success:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Plant with id={plant_id} not found"
        )
    return None


@router.get("/messages", response_model=MessageListResponse, summary="Get messages")
def get_messages(
    read_filter: Literal["all", "unread", "read"] = Query("all", alias="filter"),
    service: MessageService = Depends(get_message_service)
):
    """
    Retrieve contact messages, newest first
    
    - **filter**: all, unread or read (default: all)
    """
    return service.get_messages(read_filter)


@router.patch("/messages/{message_id}/read", response_model=ContactMessageResponse, summary="Mark message read")
def mark_message_read(
    message_id: int,
    service: MessageService = Depends(get_message_service)
):
    try:
        return service.mark_as_read(message_id)
    except MessageNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))


@router.delete("/messages/{message_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete message")
def delete_message(
    message_id: int,
    service: MessageService = Depends(get_message_service)
):
    try:
        service.delete_message(message_id)
    except MessageNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SQLAlchemyError as e:
        logger.error("message_delete_failed", message_id=message_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete message"
        )
    return None
