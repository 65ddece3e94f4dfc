"""
RabbitMQ Event Publisher
"""
import json
import uuid
from datetime import datetime, timezone
from typing import Dict

import pika
import structlog

from nursery.config import settings
from nursery.schemas.checkout import OrderPlacedEvent

logger = structlog.get_logger(__name__)


class EventPublisher:
    """Publisher for sending order events to RabbitMQ"""
    
    def __init__(self):
        self.rabbitmq_url = settings.RABBITMQ_URL
        self.exchange = settings.RABBITMQ_EXCHANGE
        self.routing_key = settings.RABBITMQ_ROUTING_KEY
        self.enabled = settings.EVENTS_ENABLED
    
    def build_event(self, event_type: str, data: Dict) -> Dict:
        """Wrap data in the event envelope"""
        return OrderPlacedEvent(
            event_type=event_type,
            event_id=str(uuid.uuid4()),
            timestamp=datetime.now(timezone.utc).isoformat(),
            source=settings.SERVICE_NAME,
            data=data
        ).model_dump()
    
    def publish_order_placed(self, order_data: Dict) -> bool:
        """
        Publish OrderPlaced event to RabbitMQ
        
        Args:
            order_data: Checkout data to publish
        
        Returns:
            True if published successfully, False otherwise
        """
        if not self.enabled:
            logger.debug("event_publishing_disabled", event_type="OrderPlaced")
            return False
        
        event = self.build_event("OrderPlaced", order_data)
        
        try:
            connection = pika.BlockingConnection(
                pika.URLParameters(self.rabbitmq_url)
            )
            channel = connection.channel()
            
            channel.exchange_declare(
                exchange=self.exchange,
                exchange_type='topic',
                durable=True
            )
            
            # Enable publisher confirms
            channel.confirm_delivery()
            
            channel.basic_publish(
                exchange=self.exchange,
                routing_key=self.routing_key,
                body=json.dumps(event),
                properties=pika.BasicProperties(
                    delivery_mode=2,  # Persistent message
                    content_type='application/json',
                    correlation_id=event["event_id"]
                ),
                mandatory=True
            )
            
            connection.close()
            
            logger.info("event_published", event_type="OrderPlaced", event_id=event["event_id"])
            return True
            
        except pika.exceptions.UnroutableError:
            logger.warning("event_unroutable", event_type="OrderPlaced", event_id=event["event_id"])
            return False
        except pika.exceptions.AMQPError as e:
            logger.error("event_publish_failed", event_type="OrderPlaced", error=str(e))
            return False
