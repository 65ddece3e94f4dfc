"""
Plant Repository - Catalog Store data access
"""
from typing import List, Optional
from sqlalchemy import or_, update
from sqlalchemy.orm import Session

from nursery.models.plant import Plant
from nursery.schemas.plant import PlantCreate, PlantUpdate


class PlantRepository:
    """Repository for Plant CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_all(self, category: Optional[str] = None, search: Optional[str] = None) -> List[Plant]:
        """Get plants newest first, optionally filtered by category and search term"""
        query = self.db.query(Plant)
        if category:
            query = query.filter(Plant.category == category)
        if search:
            pattern = f"%{search.lower()}%"
            query = query.filter(or_(
                Plant.name.ilike(pattern),
                Plant.description.ilike(pattern)
            ))
        return query.order_by(Plant.created_at.desc(), Plant.id.desc()).all()
    
    def get_featured(self, limit: int) -> List[Plant]:
        """Get featured plants"""
        return self.db.query(Plant).filter(
            Plant.is_featured.is_(True)
        ).order_by(Plant.created_at.desc(), Plant.id.desc()).limit(limit).all()
    
    def get_categories(self) -> List[str]:
        """Get distinct categories in alphabetical order"""
        rows = self.db.query(Plant.category).distinct().order_by(Plant.category).all()
        return [row[0] for row in rows]
    
    def get_by_id(self, plant_id: int) -> Optional[Plant]:
        """Get plant by ID"""
        return self.db.query(Plant).filter(Plant.id == plant_id).first()
    
    def create(self, plant_data: PlantCreate) -> Plant:
        """Create new plant"""
        plant = Plant(**plant_data.model_dump())
        self.db.add(plant)
        self.db.commit()
        self.db.refresh(plant)
        return plant
    
    def update(self, plant_id: int, plant_data: PlantUpdate) -> Optional[Plant]:
        """Update existing plant"""
        plant = self.get_by_id(plant_id)
        if not plant:
            return None
        
        # Update only provided fields
        update_data = plant_data.model_dump(exclude_unset=True)
        for field, value in update_data.items():
            setattr(plant, field, value)
        
        self.db.commit()
        self.db.refresh(plant)
        return plant
    
    def delete(self, plant_id: int) -> bool:
        """Delete plant"""
        plant = self.get_by_id(plant_id)
        if not plant:
            return False
        
        self.db.delete(plant)
        self.db.commit()
        return True
    
    def decrement_stock_if_available(self, plant_id: int, quantity: int) -> bool:
        """
        Subtract quantity from stock only if at least that much is left
        
        The check and the write are a single UPDATE, so two sessions can
        never both take the last unit. Does not commit; the caller owns the
        transaction. Plants already loaded in the session keep their old
        stock until expired.
        
        Returns:
            True if stock was decremented, False if the plant is missing or short
        """
        result = self.db.execute(
            update(Plant)
            .where(Plant.id == plant_id, Plant.stock >= quantity)
            .values(stock=Plant.stock - quantity)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount == 1
    
    def count(self) -> int:
        """Get total count of plants"""
        return self.db.query(Plant).count()
    
    def count_low_stock(self, threshold: int) -> int:
        """Get count of plants with stock below threshold"""
        return self.db.query(Plant).filter(Plant.stock < threshold).count()
