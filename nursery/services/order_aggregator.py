"""
Order Aggregator - presents flat order lines as logical orders

Lines written by one checkout carry a shared checkout_id and are grouped on
it. Older lines have no checkout_id; those are grouped on customer email,
customer name and the creation time truncated to a fixed window. Status
changes and deletions fan out from one line to every sibling line.
"""
import uuid
from datetime import timedelta
from typing import Dict, Hashable, Iterable, List, Optional, Tuple

import structlog
from sqlalchemy.orm import Session

from nursery.config import settings
from nursery.models.order import OrderLine, OrderStatus
from nursery.repositories.order_repository import OrderRepository
from nursery.schemas.order import LogicalOrder, OrderItem
from nursery.utils.timestamps import to_epoch_ms

logger = structlog.get_logger(__name__)


class OrderNotFoundError(Exception):
    """No order line with the given identifier"""
    pass


def bucket_key(line: OrderLine, window_ms: int) -> int:
    return to_epoch_ms(line.created_at) // window_ms


def group_key(line: OrderLine, window_ms: int) -> Tuple[Hashable, ...]:
    if line.checkout_id:
        return ("checkout", line.checkout_id)
    return (line.customer_email, line.customer_name, bucket_key(line, window_ms))


def _item_from_line(line: OrderLine) -> OrderItem:
    return OrderItem(
        line_id=line.id,
        plant_id=line.plant_id,
        plant_name=line.plant_name,
        plant_price=line.plant_price,
        quantity=line.quantity,
        subtotal=round(line.plant_price * line.quantity, 2)
    )


def group_order_lines(lines: Iterable[OrderLine], window_ms: int) -> List[LogicalOrder]:
    """
    Coalesce order lines into logical orders

    Args:
        lines: Order lines, newest first as storage returns them
        window_ms: Width of the time bucket for lines without a checkout id

    Returns:
        Logical orders in the order their first line was seen
    """
    grouped: Dict[Tuple[Hashable, ...], LogicalOrder] = {}

    for line in lines:
        key = group_key(line, window_ms)
        order = grouped.get(key)
        if order is None:
            grouped[key] = LogicalOrder(
                id=line.id,
                checkout_id=line.checkout_id,
                customer_name=line.customer_name,
                customer_email=line.customer_email,
                customer_phone=line.customer_phone,
                shipping_address=line.shipping_address,
                items=[_item_from_line(line)],
                total_amount=line.total_amount,
                status=OrderStatus(line.status),
                created_at=line.created_at,
                updated_at=line.updated_at
            )
        else:
            order.items.append(_item_from_line(line))
            order.total_amount += line.total_amount

    for order in grouped.values():
        order.total_amount = round(order.total_amount, 2)

    return list(grouped.values())


class OrderAggregator:
    """Reads and mutates logical orders on top of the Order Store"""

    def __init__(self, db: Session, window_ms: Optional[int] = None):
        self.repository = OrderRepository(db)
        self.window_ms = window_ms or settings.ORDER_GROUPING_WINDOW_MS

    def list_orders(self, status: Optional[str] = None) -> List[LogicalOrder]:
        """Get all logical orders, optionally only those in one status"""
        orders = group_order_lines(self.repository.get_all(), self.window_ms)
        if status and status != "All":
            orders = [o for o in orders if o.status.value == status]
        return orders

    def find_siblings(self, seed: OrderLine) -> List[OrderLine]:
        """
        Re-discover the lines that belong with seed

        Legacy lines are matched on email, name and a +/- window around the
        seed's timestamp, and only against other lines without a checkout id.
        That window does not line up with the buckets used by grouping, so a
        line near a bucket edge can be a sibling here and still show up in a
        separate group.
        """
        if seed.checkout_id:
            return self.repository.get_by_checkout_id(seed.checkout_id)

        window = timedelta(milliseconds=self.window_ms)
        return self.repository.get_by_customer_between(
            seed.customer_email,
            seed.customer_name,
            seed.created_at - window,
            seed.created_at + window
        )

    def get_order(self, line_id: int) -> Optional[LogicalOrder]:
        """Get the logical order containing the given line"""
        seed = self.repository.get_by_id(line_id)
        if not seed:
            return None

        for order in group_order_lines(self.find_siblings(seed), self.window_ms):
            if any(item.line_id == line_id for item in order.items):
                return order
        return None

    def update_status(self, line_id: int, new_status: OrderStatus) -> LogicalOrder:
        """
        Set the status of a line and of every sibling line

        Args:
            line_id: Any line of the logical order
            new_status: Target status

        Returns:
            The logical order as re-read from storage

        Raises:
            OrderNotFoundError: If the line does not exist
        """
        seed = self.repository.update_status(line_id, new_status.value)
        if not seed:
            raise OrderNotFoundError(f"Order line {line_id} not found")

        siblings = [line for line in self.find_siblings(seed) if line.id != seed.id]
        for sibling in siblings:
            self.repository.update_status(sibling.id, new_status.value)

        logger.info(
            "order_status_updated",
            line_id=line_id,
            status=new_status.value,
            lines=len(siblings) + 1
        )

        return self.get_order(line_id)

    def delete_order(self, line_id: int) -> int:
        """
        Delete a line and every sibling line

        Each line is deleted on its own; a failure part way leaves the
        earlier deletes committed.

        Returns:
            Number of deleted lines

        Raises:
            OrderNotFoundError: If the line does not exist
        """
        seed = self.repository.get_by_id(line_id)
        if not seed:
            raise OrderNotFoundError(f"Order line {line_id} not found")

        sibling_ids = [line.id for line in self.find_siblings(seed) if line.id != seed.id]

        deleted = 0
        for target_id in [seed.id] + sibling_ids:
            if self.repository.delete(target_id):
                deleted += 1

        logger.info("order_deleted", line_id=line_id, lines=deleted)
        return deleted

    def backfill_checkout_ids(self) -> int:
        """
        Give every legacy group of lines its own checkout id

        Groups are formed with the time-bucket rule, so the result matches
        what list_orders showed before the migration.

        Returns:
            Number of logical orders that received a checkout id
        """
        legacy_orders = group_order_lines(self.repository.get_without_checkout_id(), self.window_ms)

        for order in legacy_orders:
            checkout_id = uuid.uuid4().hex
            self.repository.assign_checkout_id([item.line_id for item in order.items], checkout_id)

        logger.info("checkout_ids_backfilled", orders=len(legacy_orders))
        return len(legacy_orders)
