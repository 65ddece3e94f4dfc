"""
Repositories package
"""
from nursery.repositories.plant_repository import PlantRepository
from nursery.repositories.order_repository import OrderRepository
from nursery.repositories.message_repository import MessageRepository

__all__ = ["PlantRepository", "OrderRepository", "MessageRepository"]
