"""
Schemas package
"""
from nursery.schemas.plant import (
    PlantBase,
    PlantCreate,
    PlantUpdate,
    PlantResponse,
    PlantListResponse
)
from nursery.schemas.order import (
    OrderLineResponse,
    OrderItem,
    LogicalOrder,
    OrderListResponse,
    OrderStatusUpdate,
    OrderDeleteResponse,
    BackfillResponse
)
from nursery.schemas.cart import CartItemAdd, CartItemUpdate, CartItemResponse, CartResponse
from nursery.schemas.checkout import (
    CustomerDetails,
    CheckoutRequest,
    DirectCheckoutRequest,
    CheckoutLine,
    CheckoutResponse,
    OrderPlacedEvent
)
from nursery.schemas.message import ContactMessageCreate, ContactMessageResponse, MessageListResponse
from nursery.schemas.dashboard import DashboardStats
from nursery.schemas.notification import OrderEmailRequest, OrderEmailResponse

__all__ = [
    "PlantBase",
    "PlantCreate",
    "PlantUpdate",
    "PlantResponse",
    "PlantListResponse",
    "OrderLineResponse",
    "OrderItem",
    "LogicalOrder",
    "OrderListResponse",
    "OrderStatusUpdate",
    "OrderDeleteResponse",
    "BackfillResponse",
    "CartItemAdd",
    "CartItemUpdate",
    "CartItemResponse",
    "CartResponse",
    "CustomerDetails",
    "CheckoutRequest",
    "DirectCheckoutRequest",
    "CheckoutLine",
    "CheckoutResponse",
    "OrderPlacedEvent",
    "ContactMessageCreate",
    "ContactMessageResponse",
    "MessageListResponse",
    "DashboardStats",
    "OrderEmailRequest",
    "OrderEmailResponse"
]
