"""
RabbitMQ Consumer for OrderPlaced events
"""
import json
import sys

import pika
import structlog
from pydantic import ValidationError

from nursery.config import settings
from nursery.services.notification_client import NotificationClient, NotificationError
from nursery.utils.logging import configure_logging

logger = structlog.get_logger(__name__)


def handle_event(event, client: NotificationClient = None) -> bool:
    """
    Turn one order event into order email requests
    
    Returns:
        True if the event was handled, False if it should be dropped
    """
    if not isinstance(event, dict):
        logger.warning("malformed_event", body_type=type(event).__name__)
        return False
    
    event_type = event.get("event_type")
    if event_type != "OrderPlaced":
        logger.warning("unknown_event_type", event_type=event_type)
        return False
    
    client = client or NotificationClient()
    try:
        sent = client.notify_order_placed(event.get("data", {}))
    except (NotificationError, KeyError, TypeError, AttributeError, ValidationError) as e:
        logger.error("order_notification_failed", event_id=event.get("event_id"), error=str(e))
        return False
    
    logger.info("order_notification_sent", event_id=event.get("event_id"), lines=sent)
    return True


def callback(ch, method, properties, body):
    """
    Callback function to process order events
    
    Args:
        ch: Channel
        method: Method
        properties: Properties
        body: Message body (JSON string)
    """
    try:
        event = json.loads(body)
        
        if handle_event(event):
            ch.basic_ack(delivery_tag=method.delivery_tag)
        else:
            # Reject and don't requeue
            ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
    
    except json.JSONDecodeError as e:
        logger.error("invalid_event_json", error=str(e))
        ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
    except Exception as e:
        logger.exception("event_processing_failed", error=str(e))
        ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)


def start_consumer():
    """
    Start RabbitMQ consumer
    
    Connects to RabbitMQ and starts consuming OrderPlaced events
    """
    configure_logging(settings.LOG_LEVEL)
    connection = None
    try:
        logger.info("consumer_connecting", url=settings.RABBITMQ_URL)
        connection = pika.BlockingConnection(
            pika.URLParameters(settings.RABBITMQ_URL)
        )
        channel = connection.channel()
        
        channel.exchange_declare(
            exchange=settings.RABBITMQ_EXCHANGE,
            exchange_type='topic',
            durable=True
        )
        channel.queue_declare(
            queue=settings.RABBITMQ_QUEUE,
            durable=True
        )
        channel.queue_bind(
            exchange=settings.RABBITMQ_EXCHANGE,
            queue=settings.RABBITMQ_QUEUE,
            routing_key=settings.RABBITMQ_ROUTING_KEY
        )
        
        # Set prefetch count (QoS)
        channel.basic_qos(prefetch_count=5)
        
        channel.basic_consume(
            queue=settings.RABBITMQ_QUEUE,
            on_message_callback=callback,
            auto_ack=False  # Manual acknowledgement
        )
        
        logger.info("consumer_started", queue=settings.RABBITMQ_QUEUE)
        channel.start_consuming()
        
    except KeyboardInterrupt:
        logger.info("consumer_stopped")
        if connection and connection.is_open:
            connection.close()
        sys.exit(0)
    except pika.exceptions.AMQPError as e:
        logger.error("consumer_failed", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    start_consumer()
