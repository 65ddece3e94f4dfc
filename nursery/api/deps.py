"""
Shared FastAPI dependencies
"""
from typing import Optional

from fastapi import Depends, Request, Response
from sqlalchemy.orm import Session

from nursery.database import get_db
from nursery.publishers.event_publisher import EventPublisher
from nursery.services.cart import Cart, CartRegistry
from nursery.services.checkout_service import CheckoutService
from nursery.services.plant_service import PlantService

CART_COOKIE = "cart_session"


def get_plant_service(db: Session = Depends(get_db)) -> PlantService:
    """Dependency to get PlantService instance"""
    return PlantService(db)


def get_event_publisher() -> EventPublisher:
    """Dependency to get EventPublisher instance"""
    return EventPublisher()


def get_checkout_service(
    db: Session = Depends(get_db),
    publisher: EventPublisher = Depends(get_event_publisher)
) -> CheckoutService:
    """Dependency to get CheckoutService instance"""
    return CheckoutService(db, publisher)


def get_cart_registry(request: Request) -> CartRegistry:
    """Carts live on the application state"""
    return request.app.state.carts


def get_session_id(request: Request) -> Optional[str]:
    return request.cookies.get(CART_COOKIE)


def get_cart(
    session_id: Optional[str] = Depends(get_session_id),
    registry: CartRegistry = Depends(get_cart_registry)
) -> Cart:
    """Cart for the caller's live session; an empty, unstored cart otherwise"""
    cart = registry.get(session_id) if session_id else None
    return cart if cart is not None else Cart()


def start_cart(response: Response, session_id: Optional[str], registry: CartRegistry) -> Cart:
    """Cart for the caller's live session; starts a new session otherwise"""
    cart = registry.get(session_id) if session_id else None
    if cart is not None:
        return cart
    session_id = registry.new_session()
    response.set_cookie(CART_COOKIE, session_id, httponly=True, samesite="lax")
    return registry.get(session_id)
