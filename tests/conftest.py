import os
from datetime import datetime, timezone

# Settings are read at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["EVENTS_ENABLED"] = "false"

import pytest
from fastapi.testclient import TestClient

from nursery import models  # noqa: F401
from nursery.api.deps import get_event_publisher
from nursery.database import Base, SessionLocal, engine
from nursery.models.order import OrderLine, OrderStatus
from nursery.repositories.plant_repository import PlantRepository
from nursery.schemas.plant import PlantCreate
from nursery.services.cart import CartRegistry

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class RecordingPublisher:
    """Stands in for the RabbitMQ publisher"""

    def __init__(self):
        self.events = []

    def publish_order_placed(self, order_data):
        self.events.append(order_data)
        return True


@pytest.fixture
def db_session():
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture
def publisher():
    return RecordingPublisher()


@pytest.fixture
def client(db_session, publisher):
    from nursery.main import app

    app.state.carts = CartRegistry()
    app.dependency_overrides[get_event_publisher] = lambda: publisher
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def make_plant(db_session):
    def _make_plant(**overrides):
        data = {
            "name": "Monstera Deliciosa",
            "description": "Split-leaf philodendron",
            "care_info": "Bright indirect light",
            "price": 10.0,
            "category": "Indoor",
            "stock": 5,
        }
        data.update(overrides)
        return PlantRepository(db_session).create(PlantCreate(**data))

    return _make_plant


@pytest.fixture
def make_line(db_session):
    def _make_line(created_at=BASE_TIME, **overrides):
        data = {
            "customer_name": "Alice",
            "customer_email": "alice@example.com",
            "customer_phone": "555-0100",
            "shipping_address": "1 Fern Lane",
            "plant_id": 1,
            "plant_name": "Monstera Deliciosa",
            "plant_price": 10.0,
            "quantity": 1,
            "status": OrderStatus.PENDING.value,
            "created_at": created_at,
            "updated_at": created_at,
        }
        data.update(overrides)
        data.setdefault("total_amount", data["plant_price"] * data["quantity"])
        line = OrderLine(**data)
        db_session.add(line)
        db_session.commit()
        db_session.refresh(line)
        return line

    return _make_line
