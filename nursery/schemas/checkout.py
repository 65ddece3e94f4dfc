"""
Pydantic schemas for checkout requests
"""
from pydantic import BaseModel, Field, EmailStr, ConfigDict

from nursery.schemas.order import OrderLineResponse


class CustomerDetails(BaseModel):
    """Delivery details, all required"""
    customer_name: str = Field(..., min_length=1, max_length=255, description="Full name")
    customer_email: EmailStr = Field(..., description="Customer email address")
    customer_phone: str = Field(..., min_length=1, max_length=50, description="Phone number")
    shipping_address: str = Field(..., min_length=1, description="Delivery address")
    
    model_config = ConfigDict(str_strip_whitespace=True)


class CheckoutRequest(CustomerDetails):
    """Schema for checking out the session cart"""
    pass


class DirectCheckoutRequest(CustomerDetails):
    """Schema for buying a single plant directly"""
    quantity: int = Field(1, gt=0, description="Quantity to buy")


class CheckoutLine(BaseModel):
    """A plant and quantity to be written as one order line"""
    plant_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0)


class CheckoutResponse(BaseModel):
    """Schema for a placed checkout"""
    checkout_id: str
    lines: list[OrderLineResponse]
    total_amount: float


class OrderPlacedEvent(BaseModel):
    """Schema for OrderPlaced event payload"""
    event_type: str = "OrderPlaced"
    event_id: str
    event_version: str = "1.0"
    timestamp: str
    source: str = "nursery-service"
    data: dict
