"""
Pydantic schemas for the order email notification endpoint
"""
from pydantic import BaseModel


class OrderEmailRequest(BaseModel):
    """Order notification payload, camelCase on the wire"""
    customerEmail: str
    customerName: str
    plantName: str
    quantity: int
    totalAmount: float


class OrderEmailResponse(BaseModel):
    """Echo of a logged notification"""
    success: bool = True
    message: str = "Email notification logged successfully"
    orderDetails: OrderEmailRequest
    note: str = "Email functionality requires SMTP configuration. This is a placeholder response."
