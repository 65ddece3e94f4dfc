"""
Session cart

A Cart only lives for one browsing session and is never persisted. The
CartRegistry owns one Cart per session id and is held on the application
state. Carts are created when a session first adds a plant and dropped on
logout or after sitting idle.
"""
import time
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from nursery.config import settings
from nursery.schemas.plant import PlantResponse


@dataclass
class CartItem:
    plant: PlantResponse
    quantity: int

    @property
    def subtotal(self) -> float:
        return self.plant.price * self.quantity


@dataclass
class Cart:
    """Plants and quantities selected before checkout"""
    items: List[CartItem] = field(default_factory=list)

    def _find(self, plant_id: int) -> Optional[CartItem]:
        for item in self.items:
            if item.plant.id == plant_id:
                return item
        return None

    def add(self, plant: PlantResponse, quantity: int) -> None:
        """Add quantity of a plant; an existing line is incremented, not clamped to stock."""
        existing = self._find(plant.id)
        if existing:
            existing.quantity += quantity
            return
        self.items.append(CartItem(plant=plant, quantity=quantity))

    def remove(self, plant_id: int) -> None:
        self.items = [item for item in self.items if item.plant.id != plant_id]

    def set_quantity(self, plant_id: int, quantity: int) -> None:
        """Replace a line's quantity; zero or less removes the line."""
        if quantity <= 0:
            self.remove(plant_id)
            return
        existing = self._find(plant_id)
        if existing:
            existing.quantity = quantity

    def clear(self) -> None:
        self.items = []

    def total_items(self) -> int:
        return sum(item.quantity for item in self.items)

    def total_price(self) -> float:
        return sum(item.subtotal for item in self.items)

    def is_empty(self) -> bool:
        return not self.items


class CartRegistry:
    """
    In-memory carts keyed by session id

    A cart not touched for idle_timeout seconds is dropped. Expired carts are
    swept whenever the registry is accessed.
    """

    def __init__(self, idle_timeout: Optional[float] = None, clock: Callable[[], float] = time.monotonic):
        self.idle_timeout = idle_timeout if idle_timeout is not None else settings.CART_IDLE_TIMEOUT_SECONDS
        self._clock = clock
        self._carts: Dict[str, Cart] = {}
        self._last_access: Dict[str, float] = {}

    def _sweep(self, now: float) -> None:
        expired = [sid for sid, seen in self._last_access.items() if now - seen > self.idle_timeout]
        for session_id in expired:
            self._carts.pop(session_id, None)
            self._last_access.pop(session_id, None)

    def new_session(self) -> str:
        now = self._clock()
        self._sweep(now)
        session_id = uuid.uuid4().hex
        self._carts[session_id] = Cart()
        self._last_access[session_id] = now
        return session_id

    def get(self, session_id: str) -> Optional[Cart]:
        """Cart for a live session, or None; never creates one."""
        now = self._clock()
        self._sweep(now)
        cart = self._carts.get(session_id)
        if cart is not None:
            self._last_access[session_id] = now
        return cart

    def end_session(self, session_id: str) -> bool:
        self._last_access.pop(session_id, None)
        return self._carts.pop(session_id, None) is not None

    def __len__(self) -> int:
        return len(self._carts)
