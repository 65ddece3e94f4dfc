"""
Checkout Service - writes order lines and takes stock
"""
import uuid
from typing import List, Optional

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from nursery.models.order import OrderStatus
from nursery.publishers.event_publisher import EventPublisher
from nursery.repositories.order_repository import OrderRepository
from nursery.repositories.plant_repository import PlantRepository
from nursery.schemas.checkout import CheckoutLine, CheckoutResponse, CustomerDetails
from nursery.schemas.order import OrderLineResponse
from nursery.services.cart import Cart
from nursery.services.plant_service import PlantNotFoundError
from nursery.utils.timestamps import utc_now

logger = structlog.get_logger(__name__)


class CheckoutError(Exception):
    """Base exception for checkout failures"""
    pass


class EmptyCheckoutError(CheckoutError):
    """Nothing to check out"""
    pass


class InsufficientStockError(CheckoutError):
    """Requested quantity exceeds current stock"""
    pass


class CheckoutService:
    """Turns a cart or a direct purchase into order lines"""
    
    def __init__(self, db: Session, event_publisher: Optional[EventPublisher] = None):
        self.db = db
        self.order_repository = OrderRepository(db)
        self.plant_repository = PlantRepository(db)
        self.event_publisher = event_publisher or EventPublisher()
    
    def checkout_cart(self, cart: Cart, customer: CustomerDetails) -> CheckoutResponse:
        """Place every cart line as one checkout and empty the cart on success"""
        lines = [
            CheckoutLine(plant_id=item.plant.id, quantity=item.quantity)
            for item in cart.items
        ]
        response = self.place_order(lines, customer)
        cart.clear()
        return response
    
    def checkout_single(self, plant_id: int, quantity: int, customer: CustomerDetails) -> CheckoutResponse:
        """Buy one plant directly, bypassing the cart"""
        return self.place_order([CheckoutLine(plant_id=plant_id, quantity=quantity)], customer)
    
    def place_order(self, lines: List[CheckoutLine], customer: CustomerDetails) -> CheckoutResponse:
        """
        Write one order line per checkout line
        
        Steps, per line and in sequence:
        1. Read the plant (price is snapshotted here)
        2. Take the stock with a conditional decrement
        3. Insert a Pending order line
        
        All lines share one checkout_id and timestamp and are committed
        together; any failure rolls back the whole checkout.
        
        Raises:
            EmptyCheckoutError: If there are no lines
            PlantNotFoundError: If a plant does not exist
            InsufficientStockError: If a plant has less stock than requested
            CheckoutError: If storage fails
        """
        if not lines:
            raise EmptyCheckoutError("Your cart is empty")
        
        checkout_id = uuid.uuid4().hex
        placed_at = utc_now()
        
        try:
            created = []
            for line in lines:
                plant = self.plant_repository.get_by_id(line.plant_id)
                if not plant:
                    raise PlantNotFoundError(f"Plant with id={line.plant_id} not found")
                
                unit_price = plant.price
                plant_name = plant.name
                available = plant.stock
                
                if not self.plant_repository.decrement_stock_if_available(plant.id, line.quantity):
                    raise InsufficientStockError(
                        f"Insufficient stock for {plant_name}. "
                        f"Requested: {line.quantity}, Available: {available}"
                    )
                
                order_line = self.order_repository.create({
                    'customer_name': customer.customer_name,
                    'customer_email': customer.customer_email,
                    'customer_phone': customer.customer_phone,
                    'shipping_address': customer.shipping_address,
                    'plant_id': plant.id,
                    'plant_name': plant_name,
                    'plant_price': unit_price,
                    'quantity': line.quantity,
                    'total_amount': unit_price * line.quantity,
                    'status': OrderStatus.PENDING.value,
                    'checkout_id': checkout_id,
                    'created_at': placed_at,
                    'updated_at': placed_at
                }, commit=False)
                created.append(order_line)
            
            self.db.commit()
        except (PlantNotFoundError, InsufficientStockError):
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error("checkout_failed", checkout_id=checkout_id, error=str(e))
            raise CheckoutError("Failed to place order. Please try again.") from e
        
        for order_line in created:
            self.db.refresh(order_line)
        
        response = CheckoutResponse(
            checkout_id=checkout_id,
            lines=[OrderLineResponse.model_validate(l) for l in created],
            total_amount=round(sum(l.total_amount for l in created), 2)
        )
        
        logger.info(
            "checkout_placed",
            checkout_id=checkout_id,
            lines=len(created),
            total_amount=response.total_amount
        )
        
        # Publishing never fails the checkout
        try:
            self.event_publisher.publish_order_placed({
                'checkout_id': checkout_id,
                'customer_name': customer.customer_name,
                'customer_email': customer.customer_email,
                'total_amount': response.total_amount,
                'lines': [
                    {
                        'line_id': l.id,
                        'plant_name': l.plant_name,
                        'quantity': l.quantity,
                        'total_amount': l.total_amount
                    }
                    for l in response.lines
                ]
            })
        except Exception as e:
            logger.warning("order_placed_publish_failed", checkout_id=checkout_id, error=str(e))
        
        return response
