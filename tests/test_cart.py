"""Tests for the session cart."""

from datetime import datetime, timezone

from nursery.schemas.plant import PlantResponse
from nursery.services.cart import Cart, CartRegistry

NOW = datetime(2024, 5, 1, tzinfo=timezone.utc)


def _plant(plant_id=1, price=10.0, stock=5, name="Fern"):
    return PlantResponse(
        id=plant_id,
        name=name,
        price=price,
        category="Indoor",
        stock=stock,
        created_at=NOW,
        updated_at=NOW,
    )


class TestCartAdd:
    def test_add_new_plant(self):
        cart = Cart()
        cart.add(_plant(), 2)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 2

    def test_add_same_plant_twice_sums_quantities(self):
        cart = Cart()
        plant = _plant(price=7.5)
        cart.add(plant, 2)
        cart.add(plant, 3)
        assert len(cart.items) == 1
        assert cart.items[0].quantity == 5
        assert cart.total_price() == 7.5 * 5

    def test_add_does_not_clamp_to_stock(self):
        cart = Cart()
        cart.add(_plant(stock=2), 10)
        assert cart.items[0].quantity == 10


class TestCartQuantities:
    def test_set_quantity(self):
        cart = Cart()
        cart.add(_plant(), 1)
        cart.set_quantity(1, 4)
        assert cart.items[0].quantity == 4

    def test_set_quantity_zero_removes(self):
        cart = Cart()
        cart.add(_plant(), 1)
        cart.set_quantity(1, 0)
        assert cart.is_empty()

    def test_set_negative_quantity_removes(self):
        cart = Cart()
        cart.add(_plant(), 3)
        cart.set_quantity(1, -1)
        assert cart.is_empty()

    def test_set_quantity_for_missing_plant_is_noop(self):
        cart = Cart()
        cart.add(_plant(), 3)
        cart.set_quantity(99, 2)
        assert cart.total_items() == 3

    def test_remove(self):
        cart = Cart()
        cart.add(_plant(1), 1)
        cart.add(_plant(2, name="Cactus"), 1)
        cart.remove(1)
        assert [item.plant.id for item in cart.items] == [2]

    def test_totals(self):
        cart = Cart()
        cart.add(_plant(1, price=10.0), 2)
        cart.add(_plant(2, price=5.0, name="Cactus"), 1)
        assert cart.total_items() == 3
        assert cart.total_price() == 25.0

    def test_clear(self):
        cart = Cart()
        cart.add(_plant(), 2)
        cart.clear()
        assert cart.total_items() == 0
        assert cart.total_price() == 0


class TestCartRegistry:
    def test_sessions_have_separate_carts(self):
        registry = CartRegistry()
        first = registry.new_session()
        second = registry.new_session()
        registry.get(first).add(_plant(), 1)
        assert registry.get(second).is_empty()

    def test_end_session_discards_cart(self):
        registry = CartRegistry()
        session_id = registry.new_session()
        assert registry.end_session(session_id) is True
        assert registry.get(session_id) is None
        assert registry.end_session(session_id) is False

    def test_get_never_creates(self):
        registry = CartRegistry()
        assert registry.get("made-up") is None
        assert len(registry) == 0

    def test_idle_cart_expires(self):
        now = [0.0]
        registry = CartRegistry(idle_timeout=60, clock=lambda: now[0])
        stale = registry.new_session()

        now[0] = 61.0
        fresh = registry.new_session()

        assert registry.get(stale) is None
        assert registry.get(fresh) is not None
        assert len(registry) == 1

    def test_access_keeps_cart_alive(self):
        now = [0.0]
        registry = CartRegistry(idle_timeout=60, clock=lambda: now[0])
        session_id = registry.new_session()

        for tick in (50.0, 100.0, 150.0):
            now[0] = tick
            assert registry.get(session_id) is not None
