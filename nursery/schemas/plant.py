"""
Pydantic schemas for plant request/response validation
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime


class PlantBase(BaseModel):
    """Base Plant schema with common fields"""
    name: str = Field(..., min_length=1, max_length=255, description="Plant name")
    description: str = Field("", description="Plant description")
    care_info: str = Field("", description="Care instructions")
    price: float = Field(..., gt=0, description="Plant price (must be positive)")
    category: str = Field(..., min_length=1, max_length=100, description="Plant category")
    stock: int = Field(..., ge=0, description="Stock quantity (must be non-negative)")
    image_url: Optional[str] = Field(None, max_length=500, description="Plant image URL")
    is_featured: bool = Field(False, description="Show on the home page")


class PlantCreate(PlantBase):
    """Schema for creating a new plant"""
    pass


class PlantUpdate(BaseModel):
    """Schema for updating a plant (all fields optional)"""
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    care_info: Optional[str] = None
    price: Optional[float] = Field(None, gt=0)
    category: Optional[str] = Field(None, min_length=1, max_length=100)
    stock: Optional[int] = Field(None, ge=0)
    image_url: Optional[str] = Field(None, max_length=500)
    is_featured: Optional[bool] = None


class PlantResponse(PlantBase):
    """Schema for plant response"""
    id: int
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class PlantListResponse(BaseModel):
    """Schema for list of plants response"""
    plants: list[PlantResponse]
    total: int
