"""
HTTP client for the order email endpoint with retry logic
"""
from typing import Dict

import httpx
import structlog
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from nursery.config import settings
from nursery.schemas.notification import OrderEmailRequest

logger = structlog.get_logger(__name__)


class NotificationError(Exception):
    """Base exception for notification endpoint errors"""
    pass


class NotificationUnavailableError(NotificationError):
    """Notification endpoint is unreachable"""
    pass


class NotificationClient:
    """Client for posting order emails to the notification endpoint"""
    
    def __init__(self, url: str = None, transport: httpx.BaseTransport = None):
        self.url = url or settings.NOTIFICATION_URL
        self.timeout = 5.0  # 5 seconds timeout
        self.transport = transport
    
    @retry(
        stop=stop_after_attempt(settings.MAX_RETRIES),
        wait=wait_exponential(multiplier=settings.RETRY_DELAY, min=1, max=10),
        retry=retry_if_exception_type(NotificationUnavailableError),
        reraise=True
    )
    def send_order_email(self, payload: OrderEmailRequest) -> Dict:
        """
        Post one order email request
        
        Args:
            payload: Order notification payload
        
        Returns:
            Endpoint response body
        
        Raises:
            NotificationUnavailableError: If the endpoint cannot be reached
            NotificationError: If the endpoint rejects the payload
        """
        try:
            with httpx.Client(timeout=self.timeout, transport=self.transport) as client:
                response = client.post(self.url, json=payload.model_dump())
        except (httpx.TimeoutException, httpx.ConnectError) as e:
            logger.warning("notification_endpoint_unreachable", url=self.url, error=str(e))
            raise NotificationUnavailableError(f"Notification endpoint unavailable: {e}")
        except httpx.HTTPError as e:
            raise NotificationError(f"Notification request failed: {e}")

        if response.status_code == 200:
            return response.json()
        raise NotificationError(f"Unexpected status code: {response.status_code}")
    
    def notify_order_placed(self, order_data: Dict) -> int:
        """
        Send one email request per line of a placed order
        
        Returns:
            Number of lines notified
        """
        sent = 0
        for line in order_data.get("lines", []):
            self.send_order_email(OrderEmailRequest(
                customerEmail=order_data["customer_email"],
                customerName=order_data["customer_name"],
                plantName=line["plant_name"],
                quantity=line["quantity"],
                totalAmount=line["total_amount"]
            ))
            sent += 1
        return sent
