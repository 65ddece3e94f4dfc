"""
Plant Service - Catalog business logic
"""
from typing import List, Optional
from sqlalchemy.orm import Session

from nursery.config import settings
from nursery.repositories.plant_repository import PlantRepository
from nursery.schemas.plant import (
    PlantCreate,
    PlantUpdate,
    PlantResponse,
    PlantListResponse
)


class PlantNotFoundError(Exception):
    """Plant does not exist"""
    pass


class PlantService:
    """Service layer for catalog browsing and plant management"""
    
    def __init__(self, db: Session):
        self.repository = PlantRepository(db)
    
    def get_plants(self, category: Optional[str] = None, search: Optional[str] = None) -> PlantListResponse:
        """Get plants newest first; 'All' or no category means every category"""
        if category == "All":
            category = None
        plants = self.repository.get_all(category=category, search=search)
        
        return PlantListResponse(
            plants=[PlantResponse.model_validate(p) for p in plants],
            total=len(plants)
        )
    
    def get_featured_plants(self) -> List[PlantResponse]:
        """Get plants flagged for the home page"""
        plants = self.repository.get_featured(settings.FEATURED_PLANTS_LIMIT)
        return [PlantResponse.model_validate(p) for p in plants]
    
    def get_categories(self) -> List[str]:
        """Get distinct plant categories"""
        return self.repository.get_categories()
    
    def get_plant_by_id(self, plant_id: int) -> Optional[PlantResponse]:
        """Get plant by ID"""
        plant = self.repository.get_by_id(plant_id)
        if not plant:
            return None
        return PlantResponse.model_validate(plant)
    
    def require_plant(self, plant_id: int) -> PlantResponse:
        """Get plant by ID or raise PlantNotFoundError"""
        plant = self.get_plant_by_id(plant_id)
        if not plant:
            raise PlantNotFoundError(f"Plant with id={plant_id} not found")
        return plant
    
    def create_plant(self, plant_data: PlantCreate) -> PlantResponse:
        """Create new plant"""
        plant = self.repository.create(plant_data)
        return PlantResponse.model_validate(plant)
    
    def update_plant(self, plant_id: int, plant_data: PlantUpdate) -> Optional[PlantResponse]:
        """Update existing plant"""
        plant = self.repository.update(plant_id, plant_data)
        if not plant:
            return None
        return PlantResponse.model_validate(plant)
    
    def delete_plant(self, plant_id: int) -> bool:
        """Delete plant"""
        return self.repository.delete(plant_id)
