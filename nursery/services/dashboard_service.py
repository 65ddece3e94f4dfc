"""
Dashboard Service - back-office counters
"""
from sqlalchemy.orm import Session

from nursery.config import settings
from nursery.models.order import OrderStatus
from nursery.repositories.message_repository import MessageRepository
from nursery.repositories.order_repository import OrderRepository
from nursery.repositories.plant_repository import PlantRepository
from nursery.schemas.dashboard import DashboardStats
from nursery.services.order_aggregator import OrderAggregator


class DashboardService:
    
    def __init__(self, db: Session):
        self.orders = OrderRepository(db)
        self.plants = PlantRepository(db)
        self.messages = MessageRepository(db)
        self.aggregator = OrderAggregator(db)
    
    def get_stats(self) -> DashboardStats:
        """Order counts are per line; logical_orders counts grouped orders"""
        return DashboardStats(
            total_orders=self.orders.count(),
            logical_orders=len(self.aggregator.list_orders()),
            pending_orders=self.orders.count_by_status(OrderStatus.PENDING.value),
            delivered_orders=self.orders.count_by_status(OrderStatus.DELIVERED.value),
            low_stock_plants=self.plants.count_low_stock(settings.LOW_STOCK_THRESHOLD),
            unread_messages=self.messages.count_unread()
        )
