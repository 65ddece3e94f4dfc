"""
Pydantic schemas for the session cart
"""
from pydantic import BaseModel, Field

from nursery.schemas.plant import PlantResponse


class CartItemAdd(BaseModel):
    """Schema for adding a plant to the cart"""
    plant_id: int = Field(..., gt=0, description="Plant ID")
    quantity: int = Field(1, gt=0, description="Quantity to add")


class CartItemUpdate(BaseModel):
    """Schema for setting a cart line quantity (0 or less removes the line)"""
    quantity: int = Field(..., description="New quantity")


class CartItemResponse(BaseModel):
    """Schema for one cart line"""
    plant: PlantResponse
    quantity: int
    subtotal: float


class CartResponse(BaseModel):
    """Schema for cart contents"""
    items: list[CartItemResponse]
    total_items: int
    total_price: float
