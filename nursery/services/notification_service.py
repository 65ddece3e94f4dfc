"""
Notification Service - order email stub

No mail is sent. Each request is logged and echoed back so the storefront
can confirm the notification was received.
"""
import structlog

from nursery.config import settings
from nursery.schemas.notification import OrderEmailRequest, OrderEmailResponse

logger = structlog.get_logger(__name__)


class NotificationService:
    """Service for order notifications"""
    
    def __init__(self):
        self.service_name = settings.SERVICE_NAME
    
    def log_order_email(self, request: OrderEmailRequest) -> OrderEmailResponse:
        """
        Log an order email in place of sending it
        
        Args:
            request: Order notification payload
        
        Returns:
            Echo of the logged payload
        """
        subject = f"Your {request.plantName} order"
        logger.info(
            "order_email_logged",
            to=request.customerEmail,
            customer=request.customerName,
            subject=subject,
            quantity=request.quantity,
            total_amount=f"{request.totalAmount:.2f}"
        )
        return OrderEmailResponse(orderDetails=request)
