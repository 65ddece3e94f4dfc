"""Tests for status and deletion propagation across order lines."""

from datetime import timedelta

import pytest

from nursery.models.order import OrderLine, OrderStatus
from nursery.services.order_aggregator import OrderAggregator, OrderNotFoundError

from tests.conftest import BASE_TIME


def _statuses(db_session):
    db_session.expire_all()
    return {line.id: line.status for line in db_session.query(OrderLine).all()}


class TestListOrders:
    def test_groups_stored_lines(self, db_session, make_line):
        make_line(BASE_TIME, plant_price=10.0, quantity=2)
        make_line(BASE_TIME + timedelta(seconds=5), plant_price=5.0, quantity=1)
        make_line(BASE_TIME + timedelta(minutes=10), customer_name="Bob", customer_email="bob@example.com")

        orders = OrderAggregator(db_session).list_orders()

        assert len(orders) == 2
        assert orders[0].customer_name == "Bob"
        assert orders[1].total_amount == 25.0

    def test_filter_by_status(self, db_session, make_line):
        make_line(BASE_TIME)
        make_line(BASE_TIME + timedelta(minutes=10), status=OrderStatus.DELIVERED.value)

        aggregator = OrderAggregator(db_session)

        assert [o.status for o in aggregator.list_orders(status="Delivered")] == [OrderStatus.DELIVERED]
        assert len(aggregator.list_orders(status="Pending")) == 1
        assert len(aggregator.list_orders(status="All")) == 2

    def test_get_order_for_any_line(self, db_session, make_line):
        first = make_line(BASE_TIME)
        second = make_line(BASE_TIME + timedelta(seconds=20))

        aggregator = OrderAggregator(db_session)

        assert aggregator.get_order(first.id).id == second.id
        assert len(aggregator.get_order(second.id).items) == 2
        assert aggregator.get_order(999) is None


class TestStatusPropagation:
    def test_updates_every_line_in_bucket(self, db_session, make_line):
        lines = [make_line(BASE_TIME + timedelta(seconds=s)) for s in (0, 10, 20)]

        order = OrderAggregator(db_session).update_status(lines[1].id, OrderStatus.DELIVERED)

        assert order.status == OrderStatus.DELIVERED
        assert len(order.items) == 3
        assert set(_statuses(db_session).values()) == {"Delivered"}

    def test_leaves_other_customers_alone(self, db_session, make_line):
        mine = make_line(BASE_TIME)
        other = make_line(BASE_TIME, customer_name="Bob", customer_email="bob@example.com")

        OrderAggregator(db_session).update_status(mine.id, OrderStatus.CONFIRMED)

        statuses = _statuses(db_session)
        assert statuses[mine.id] == "Confirmed"
        assert statuses[other.id] == "Pending"

    def test_leaves_lines_outside_window_alone(self, db_session, make_line):
        seed = make_line(BASE_TIME)
        later = make_line(BASE_TIME + timedelta(minutes=5))

        OrderAggregator(db_session).update_status(seed.id, OrderStatus.CONFIRMED)

        assert _statuses(db_session)[later.id] == "Pending"

    def test_window_reaches_across_bucket_edge(self, db_session, make_line):
        # The re-query window is +/-60s around the seed while grouping uses
        # truncated minutes, so a line in the previous bucket still changes.
        seed = make_line(BASE_TIME)
        previous_bucket = make_line(BASE_TIME - timedelta(milliseconds=1))

        order = OrderAggregator(db_session).update_status(seed.id, OrderStatus.DELIVERED)

        assert _statuses(db_session)[previous_bucket.id] == "Delivered"
        assert [item.line_id for item in order.items] == [seed.id]

    def test_checkout_id_siblings(self, db_session, make_line):
        seed = make_line(BASE_TIME, checkout_id="c1")
        sibling = make_line(BASE_TIME + timedelta(minutes=3), checkout_id="c1")
        same_bucket_other_checkout = make_line(BASE_TIME, checkout_id="c2")

        OrderAggregator(db_session).update_status(seed.id, OrderStatus.CONFIRMED)

        statuses = _statuses(db_session)
        assert statuses[sibling.id] == "Confirmed"
        assert statuses[same_bucket_other_checkout.id] == "Pending"

    def test_legacy_line_leaves_nearby_checkout_alone(self, db_session, make_line):
        legacy = make_line(BASE_TIME)
        checkout_lines = [
            make_line(BASE_TIME + timedelta(seconds=30), checkout_id="c1") for _ in range(2)
        ]

        order = OrderAggregator(db_session).update_status(legacy.id, OrderStatus.DELIVERED)

        statuses = _statuses(db_session)
        assert [item.line_id for item in order.items] == [legacy.id]
        assert statuses[legacy.id] == "Delivered"
        assert all(statuses[line.id] == "Pending" for line in checkout_lines)

    def test_stamps_updated_at(self, db_session, make_line):
        seed = make_line(BASE_TIME)

        order = OrderAggregator(db_session).update_status(seed.id, OrderStatus.CONFIRMED)

        assert order.updated_at.replace(tzinfo=None) > BASE_TIME.replace(tzinfo=None)

    def test_unknown_line(self, db_session):
        with pytest.raises(OrderNotFoundError):
            OrderAggregator(db_session).update_status(42, OrderStatus.CONFIRMED)


class TestDeletionPropagation:
    def test_deletes_every_line_in_bucket(self, db_session, make_line):
        first = make_line(BASE_TIME)
        make_line(BASE_TIME + timedelta(seconds=30))

        deleted = OrderAggregator(db_session).delete_order(first.id)

        assert deleted == 2
        db_session.expire_all()
        assert db_session.query(OrderLine).filter(
            OrderLine.customer_email == "alice@example.com"
        ).count() == 0

    def test_single_line_order(self, db_session, make_line):
        only = make_line(BASE_TIME)
        other = make_line(BASE_TIME + timedelta(hours=1))

        assert OrderAggregator(db_session).delete_order(only.id) == 1
        assert list(_statuses(db_session)) == [other.id]

    def test_checkout_id_siblings(self, db_session, make_line):
        seed = make_line(BASE_TIME, checkout_id="c1")
        make_line(BASE_TIME + timedelta(minutes=2), checkout_id="c1")
        keep = make_line(BASE_TIME, checkout_id="c2")

        assert OrderAggregator(db_session).delete_order(seed.id) == 2
        assert list(_statuses(db_session)) == [keep.id]

    def test_legacy_line_leaves_nearby_checkout_alone(self, db_session, make_line):
        legacy = make_line(BASE_TIME)
        checkout_lines = [
            make_line(BASE_TIME + timedelta(seconds=30), checkout_id="c1") for _ in range(2)
        ]

        aggregator = OrderAggregator(db_session)
        assert len(aggregator.list_orders()) == 2
        assert aggregator.delete_order(legacy.id) == 1
        assert sorted(_statuses(db_session)) == sorted(line.id for line in checkout_lines)

    def test_unknown_line(self, db_session):
        with pytest.raises(OrderNotFoundError):
            OrderAggregator(db_session).delete_order(42)


class TestBackfill:
    def test_assigns_one_checkout_id_per_group(self, db_session, make_line):
        a1 = make_line(BASE_TIME)
        a2 = make_line(BASE_TIME + timedelta(seconds=10))
        b = make_line(BASE_TIME + timedelta(minutes=7))
        already = make_line(BASE_TIME, checkout_id="existing")

        aggregator = OrderAggregator(db_session)
        before = [[i.line_id for i in o.items] for o in aggregator.list_orders()]

        assert aggregator.backfill_checkout_ids() == 2

        db_session.expire_all()
        ids = {line.id: line.checkout_id for line in db_session.query(OrderLine).all()}
        assert ids[a1.id] == ids[a2.id]
        assert ids[b.id] not in (None, ids[a1.id])
        assert ids[already.id] == "existing"

        after = [[i.line_id for i in o.items] for o in aggregator.list_orders()]
        assert sorted(map(sorted, after)) == sorted(map(sorted, before))

    def test_nothing_to_backfill(self, db_session, make_line):
        make_line(BASE_TIME, checkout_id="existing")
        assert OrderAggregator(db_session).backfill_checkout_ids() == 0
