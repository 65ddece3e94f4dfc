"""
Models package
"""
from nursery.models.plant import Plant
from nursery.models.order import OrderLine, OrderStatus
from nursery.models.message import ContactMessage

__all__ = ["Plant", "OrderLine", "OrderStatus", "ContactMessage"]
