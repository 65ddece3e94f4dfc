"""
Order Repository - Order Store data access
"""
from datetime import datetime
from typing import Iterable, List, Optional
from sqlalchemy import desc
from sqlalchemy.orm import Session

from nursery.models.order import OrderLine
from nursery.utils.timestamps import utc_now


class OrderRepository:
    """Repository for OrderLine CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def _newest_first(self, query):
        return query.order_by(desc(OrderLine.created_at), desc(OrderLine.id))
    
    def get_all(self) -> List[OrderLine]:
        """Get all order lines, newest first"""
        return self._newest_first(self.db.query(OrderLine)).all()
    
    def get_by_id(self, line_id: int) -> Optional[OrderLine]:
        """Get order line by ID"""
        return self.db.query(OrderLine).filter(OrderLine.id == line_id).first()
    
    def get_by_checkout_id(self, checkout_id: str) -> List[OrderLine]:
        """Get all lines written by one checkout"""
        return self._newest_first(
            self.db.query(OrderLine).filter(OrderLine.checkout_id == checkout_id)
        ).all()
    
    def get_by_customer_between(
        self,
        email: str,
        name: str,
        start: datetime,
        end: datetime
    ) -> List[OrderLine]:
        """Get a customer's lines without a checkout id created within [start, end]"""
        return self._newest_first(
            self.db.query(OrderLine).filter(
                OrderLine.customer_email == email,
                OrderLine.customer_name == name,
                OrderLine.created_at >= start,
                OrderLine.created_at <= end,
                OrderLine.checkout_id.is_(None)
            )
        ).all()
    
    def get_without_checkout_id(self) -> List[OrderLine]:
        """Get lines written before checkout ids were assigned"""
        return self._newest_first(
            self.db.query(OrderLine).filter(OrderLine.checkout_id.is_(None))
        ).all()
    
    def create(self, order_data: dict, commit: bool = True) -> OrderLine:
        """
        Create new order line
        
        Args:
            order_data: Dictionary with order line fields
            commit: Commit immediately; pass False to stay inside the caller's transaction
        
        Returns:
            Created order line
        """
        line = OrderLine(**order_data)
        self.db.add(line)
        if commit:
            self.db.commit()
            self.db.refresh(line)
        else:
            self.db.flush()
        return line
    
    def update_status(self, line_id: int, new_status: str) -> Optional[OrderLine]:
        """Update order line status"""
        line = self.get_by_id(line_id)
        if not line:
            return None
        
        line.status = new_status
        line.updated_at = utc_now()
        self.db.commit()
        self.db.refresh(line)
        return line
    
    def assign_checkout_id(self, line_ids: Iterable[int], checkout_id: str) -> int:
        """Stamp a checkout id on the given lines"""
        updated = self.db.query(OrderLine).filter(
            OrderLine.id.in_(list(line_ids))
        ).update({OrderLine.checkout_id: checkout_id}, synchronize_session=False)
        self.db.commit()
        return updated
    
    def delete(self, line_id: int) -> bool:
        """Delete order line"""
        line = self.get_by_id(line_id)
        if not line:
            return False
        
        self.db.delete(line)
        self.db.commit()
        return True
    
    def count(self) -> int:
        """Get total count of order lines"""
        return self.db.query(OrderLine).count()
    
    def count_by_status(self, status: str) -> int:
        """Get count of order lines by status"""
        return self.db.query(OrderLine).filter(OrderLine.status == status).count()
