"""
Services package
"""
from nursery.services.cart import Cart, CartItem, CartRegistry
from nursery.services.checkout_service import CheckoutService
from nursery.services.dashboard_service import DashboardService
from nursery.services.message_service import MessageService
from nursery.services.order_aggregator import OrderAggregator, group_order_lines
from nursery.services.plant_service import PlantService

__all__ = [
    "Cart",
    "CartItem",
    "CartRegistry",
    "CheckoutService",
    "DashboardService",
    "MessageService",
    "OrderAggregator",
    "group_order_lines",
    "PlantService"
]
