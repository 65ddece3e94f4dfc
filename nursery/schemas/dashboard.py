"""
Pydantic schemas for the admin dashboard
"""
from pydantic import BaseModel


class DashboardStats(BaseModel):
    """Back-office counters"""
    total_orders: int
    logical_orders: int
    pending_orders: int
    delivered_orders: int
    low_stock_plants: int
    unread_messages: int
