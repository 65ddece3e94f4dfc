"""
Pydantic schemas for order lines and logical orders
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import Optional
from datetime import datetime

from nursery.models.order import OrderStatus


class OrderLineResponse(BaseModel):
    """Schema for a single persisted order line"""
    id: int
    customer_name: str
    customer_email: str
    customer_phone: str
    shipping_address: str
    plant_id: int
    plant_name: str
    plant_price: float
    quantity: int
    total_amount: float
    status: OrderStatus
    checkout_id: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    
    model_config = ConfigDict(from_attributes=True)


class OrderItem(BaseModel):
    """One line of a logical order"""
    line_id: int
    plant_id: int
    plant_name: str
    plant_price: float
    quantity: int
    subtotal: float


class LogicalOrder(BaseModel):
    """Order lines placed together, presented as one order"""
    id: int = Field(..., description="Identifier of the first line seen for this order")
    checkout_id: Optional[str] = None
    customer_name: str
    customer_email: str
    customer_phone: str
    shipping_address: str
    items: list[OrderItem]
    total_amount: float
    status: OrderStatus
    created_at: datetime
    updated_at: datetime


class OrderListResponse(BaseModel):
    """Schema for list of logical orders response"""
    orders: list[LogicalOrder]
    total: int


class OrderStatusUpdate(BaseModel):
    """Schema for updating order status"""
    status: OrderStatus = Field(..., description="Order status")


class OrderDeleteResponse(BaseModel):
    """Schema for order deletion result"""
    order_id: int
    deleted_lines: int


class BackfillResponse(BaseModel):
    """Schema for checkout id backfill result"""
    orders_assigned: int
