"""
Order management API endpoints
"""
from typing import Literal, Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, status, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from nursery.database import get_db
from nursery.services.order_aggregator import OrderAggregator, OrderNotFoundError
from nursery.schemas.order import (
    BackfillResponse,
    LogicalOrder,
    OrderDeleteResponse,
    OrderListResponse,
    OrderStatusUpdate
)

router = APIRouter(prefix="/admin/orders", tags=["admin"])

logger = structlog.get_logger(__name__)


def get_order_aggregator(db: Session = Depends(get_db)) -> OrderAggregator:
    """Dependency to get OrderAggregator instance"""
    return OrderAggregator(db)


@router.get("", response_model=OrderListResponse, summary="Get all orders")
def get_orders(
    status_filter: Optional[Literal["All", "Pending", "Confirmed", "Delivered"]] = Query(
        None, alias="status", description="Only orders in this status"
    ),
    aggregator: OrderAggregator = Depends(get_order_aggregator)
):
    """
    Retrieve orders, newest first, with order lines placed together grouped into one order
    
    - **status**: All, Pending, Confirmed or Delivered (default: all)
    """
    try:
        orders = aggregator.list_orders(status=status_filter)
    except SQLAlchemyError as e:
        logger.error("orders_load_failed", error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load orders"
        )
    return OrderListResponse(orders=orders, total=len(orders))


@router.post("/backfill-checkout-ids", response_model=BackfillResponse, summary="Assign checkout ids to old orders")
def backfill_checkout_ids(aggregator: OrderAggregator = Depends(get_order_aggregator)):
    """
    Give order lines without a checkout id an explicit one
    
    Lines are grouped with the one-minute time window first, so each
    order keeps the lines it showed before.
    """
    return BackfillResponse(orders_assigned=aggregator.backfill_checkout_ids())


@router.get("/{line_id}", response_model=LogicalOrder, summary="Get order")
def get_order(
    line_id: int,
    aggregator: OrderAggregator = Depends(get_order_aggregator)
):
    """
    Retrieve the order containing a line
    
    - **line_id**: Any order line of the order
    """
    order = aggregator.get_order(line_id)
    if not order:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Order with id={line_id} not found"
        )
    return order


@router.patch("/{line_id}/status", response_model=LogicalOrder, summary="Update order status")
def update_order_status(
    line_id: int,
    status_data: OrderStatusUpdate,
    aggregator: OrderAggregator = Depends(get_order_aggregator)
):
    """
    Update the status of every line in an order
    
    - **line_id**: Any order line of the order
    - **status**: Pending, Confirmed or Delivered
    """
    try:
        return aggregator.update_status(line_id, status_data.status)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SQLAlchemyError as e:
        logger.error("order_status_update_failed", line_id=line_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update order status"
        )


@router.delete("/{line_id}", response_model=OrderDeleteResponse, summary="Delete order")
def delete_order(
    line_id: int,
    aggregator: OrderAggregator = Depends(get_order_aggregator)
):
    """
    Delete every line in an order
    
    - **line_id**: Any order line of the order
    """
    try:
        deleted = aggregator.delete_order(line_id)
    except OrderNotFoundError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except SQLAlchemyError as e:
        logger.error("order_delete_failed", line_id=line_id, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete order"
        )
    return OrderDeleteResponse(order_id=line_id, deleted_lines=deleted)
