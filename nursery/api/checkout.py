"""
Checkout API endpoints
"""
from fastapi import APIRouter, Depends, HTTPException, status

from nursery.api.deps import get_cart, get_checkout_service
from nursery.services.cart import Cart
from nursery.services.checkout_service import (
    CheckoutError,
    CheckoutService,
    EmptyCheckoutError,
    InsufficientStockError
)
from nursery.services.plant_service import PlantNotFoundError
from nursery.schemas.checkout import CheckoutRequest, CheckoutResponse, DirectCheckoutRequest

router = APIRouter(prefix="/checkout", tags=["checkout"])


def _place(place_order):
    """Run a checkout call and map its failures to HTTP errors"""
    try:
        return place_order()
    except EmptyCheckoutError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except PlantNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except InsufficientStockError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e))
    except CheckoutError as e:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=str(e))


@router.post("", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED, summary="Check out cart")
def checkout_cart(
    customer: CheckoutRequest,
    cart: Cart = Depends(get_cart),
    service: CheckoutService = Depends(get_checkout_service)
):
    """
    Place an order for everything in the cart
    
    Payment is taken on delivery. The cart is emptied once the order is placed.
    
    - **customer_name**, **customer_email**, **customer_phone**, **shipping_address**: required
    """
    return _place(lambda: service.checkout_cart(cart, customer))


@router.post("/{plant_id}", response_model=CheckoutResponse, status_code=status.HTTP_201_CREATED, summary="Buy one plant")
def checkout_single(
    plant_id: int,
    request: DirectCheckoutRequest,
    service: CheckoutService = Depends(get_checkout_service)
):
    """
    Buy a single plant without touching the cart
    
    - **plant_id**: Plant ID
    - **quantity**: Quantity to buy (default: 1)
    """
    return _place(lambda: service.checkout_single(plant_id, request.quantity, request))
