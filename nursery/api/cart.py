"""
Session cart API endpoints
"""
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status

from nursery.api.deps import (
    CART_COOKIE,
    get_cart,
    get_cart_registry,
    get_plant_service,
    get_session_id,
    start_cart
)
from nursery.services.cart import Cart, CartRegistry
from nursery.services.plant_service import PlantNotFoundError, PlantService
from nursery.schemas.cart import CartItemAdd, CartItemUpdate, CartItemResponse, CartResponse

router = APIRouter(prefix="/cart", tags=["cart"])


def cart_response(cart: Cart) -> CartResponse:
    return CartResponse(
        items=[
            CartItemResponse(plant=item.plant, quantity=item.quantity, subtotal=round(item.subtotal, 2))
            for item in cart.items
        ],
        total_items=cart.total_items(),
        total_price=round(cart.total_price(), 2)
    )


@router.get("", response_model=CartResponse, summary="Get cart")
def get_cart_contents(cart: Cart = Depends(get_cart)):
    return cart_response(cart)


@router.post("/items", response_model=CartResponse, summary="Add plant to cart")
def add_to_cart(
    item: CartItemAdd,
    response: Response,
    session_id: Optional[str] = Depends(get_session_id),
    registry: CartRegistry = Depends(get_cart_registry),
    service: PlantService = Depends(get_plant_service)
):
    """
    Add a plant to the cart
    
    Adding a plant already in the cart increases its quantity. The first add
    starts the cart session.
    
    - **plant_id**: Plant ID (required)
    - **quantity**: Quantity to add (default: 1)
    """
    try:
        plant = service.require_plant(item.plant_id)
    except PlantNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    
    if plant.stock == 0:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=f"{plant.name} is out of stock"
        )
    
    cart = start_cart(response, session_id, registry)
    cart.add(plant, item.quantity)
    return cart_response(cart)


@router.put("/items/{plant_id}", response_model=CartResponse, summary="Set cart line quantity")
def update_cart_item(
    plant_id: int,
    update: CartItemUpdate,
    cart: Cart = Depends(get_cart)
):
    """
    Set the quantity of a cart line
    
    A quantity of 0 or less removes the line.
    """
    cart.set_quantity(plant_id, update.quantity)
    return cart_response(cart)


@router.delete("/items/{plant_id}", response_model=CartResponse, summary="Remove plant from cart")
def remove_from_cart(plant_id: int, cart: Cart = Depends(get_cart)):
    cart.remove(plant_id)
    return cart_response(cart)


@router.delete("", response_model=CartResponse, summary="Empty cart")
def clear_cart(cart: Cart = Depends(get_cart)):
    cart.clear()
    return cart_response(cart)


@router.delete("/session", status_code=status.HTTP_204_NO_CONTENT, summary="End cart session")
def end_session(
    response: Response,
    session_id: Optional[str] = Depends(get_session_id),
    registry: CartRegistry = Depends(get_cart_registry)
):
    """Discard the session cart, as on logout"""
    if session_id:
        registry.end_session(session_id)
    response.delete_cookie(CART_COOKIE)
    return None
