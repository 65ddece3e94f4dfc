"""Tests for coalescing order lines into logical orders."""

from datetime import timedelta

from nursery.models.order import OrderLine, OrderStatus
from nursery.services.order_aggregator import bucket_key, group_order_lines

from tests.conftest import BASE_TIME

WINDOW_MS = 60000


def _line(line_id, created_at=BASE_TIME, **overrides):
    data = {
        "id": line_id,
        "customer_name": "Alice",
        "customer_email": "alice@example.com",
        "customer_phone": "555-0100",
        "shipping_address": "1 Fern Lane",
        "plant_id": line_id,
        "plant_name": f"Plant {line_id}",
        "plant_price": 10.0,
        "quantity": 1,
        "status": OrderStatus.PENDING.value,
        "checkout_id": None,
        "created_at": created_at,
        "updated_at": created_at,
    }
    data.update(overrides)
    data.setdefault("total_amount", data["plant_price"] * data["quantity"])
    return OrderLine(**data)


class TestBucketing:
    def test_same_bucket_single_order(self):
        lines = [
            _line(3, BASE_TIME + timedelta(seconds=59), plant_price=4.5, quantity=2),
            _line(2, BASE_TIME + timedelta(seconds=30)),
            _line(1, BASE_TIME),
        ]
        orders = group_order_lines(lines, WINDOW_MS)
        assert len(orders) == 1
        assert orders[0].total_amount == 4.5 * 2 + 10.0 + 10.0
        assert [item.line_id for item in orders[0].items] == [3, 2, 1]

    def test_one_millisecond_across_boundary_splits(self):
        before = BASE_TIME - timedelta(milliseconds=1)
        lines = [_line(2, BASE_TIME), _line(1, before)]
        assert bucket_key(lines[0], WINDOW_MS) == bucket_key(lines[1], WINDOW_MS) + 1

        orders = group_order_lines(lines, WINDOW_MS)
        assert len(orders) == 2
        assert [o.id for o in orders] == [2, 1]

    def test_different_buckets_split(self):
        lines = [_line(2, BASE_TIME + timedelta(minutes=5)), _line(1, BASE_TIME)]
        assert len(group_order_lines(lines, WINDOW_MS)) == 2

    def test_different_customers_split(self):
        lines = [
            _line(2, customer_email="bob@example.com", customer_name="Bob"),
            _line(1),
        ]
        assert len(group_order_lines(lines, WINDOW_MS)) == 2

    def test_same_email_different_name_splits(self):
        lines = [_line(2, customer_name="Alice B."), _line(1)]
        assert len(group_order_lines(lines, WINDOW_MS)) == 2

    def test_naive_timestamps_read_as_utc(self):
        lines = [
            _line(2, BASE_TIME.replace(tzinfo=None) + timedelta(seconds=10)),
            _line(1, BASE_TIME),
        ]
        assert len(group_order_lines(lines, WINDOW_MS)) == 1


class TestGroupedOrder:
    def test_cart_checkout_example_totals_25(self):
        lines = [
            _line(2, plant_name="Plant Y", plant_price=5.0, quantity=1),
            _line(1, plant_name="Plant X", plant_price=10.0, quantity=2),
        ]
        orders = group_order_lines(lines, WINDOW_MS)
        assert len(orders) == 1
        assert orders[0].total_amount == 25.00
        assert {item.plant_name: item.subtotal for item in orders[0].items} == {
            "Plant X": 20.0,
            "Plant Y": 5.0,
        }

    def test_seeded_from_first_seen_line(self):
        lines = [
            _line(5, status=OrderStatus.CONFIRMED.value, shipping_address="2 Oak Road"),
            _line(4),
        ]
        order = group_order_lines(lines, WINDOW_MS)[0]
        assert order.id == 5
        assert order.status == OrderStatus.CONFIRMED
        assert order.shipping_address == "2 Oak Road"

    def test_output_in_first_seen_order(self):
        lines = [
            _line(4, BASE_TIME + timedelta(minutes=2)),
            _line(3, BASE_TIME + timedelta(minutes=1), customer_email="bob@example.com"),
            _line(2, BASE_TIME + timedelta(minutes=1, seconds=1)),
            _line(1, BASE_TIME + timedelta(minutes=2, seconds=1)),
        ]
        orders = group_order_lines(lines, WINDOW_MS)
        assert [o.id for o in orders] == [4, 3, 2]
        assert [item.line_id for item in orders[0].items] == [4, 1]

    def test_grouping_is_idempotent(self):
        lines = [_line(2), _line(1, BASE_TIME + timedelta(minutes=3))]
        first = group_order_lines(lines, WINDOW_MS)
        second = group_order_lines(lines, WINDOW_MS)
        assert first == second

    def test_empty_input(self):
        assert group_order_lines([], WINDOW_MS) == []


class TestCheckoutIdGrouping:
    def test_shared_checkout_id_groups_across_buckets(self):
        lines = [
            _line(2, BASE_TIME, checkout_id="c1"),
            _line(1, BASE_TIME - timedelta(milliseconds=1), checkout_id="c1"),
        ]
        orders = group_order_lines(lines, WINDOW_MS)
        assert len(orders) == 1
        assert orders[0].checkout_id == "c1"

    def test_distinct_checkout_ids_split_within_bucket(self):
        lines = [_line(2, checkout_id="c2"), _line(1, checkout_id="c1")]
        assert len(group_order_lines(lines, WINDOW_MS)) == 2

    def test_checkout_line_does_not_join_legacy_group(self):
        lines = [_line(2, checkout_id="c1"), _line(1)]
        orders = group_order_lines(lines, WINDOW_MS)
        assert len(orders) == 2
        assert orders[1].checkout_id is None
