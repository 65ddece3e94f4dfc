"""
Catalog API endpoints
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, status, Query

from nursery.api.deps import get_plant_service
from nursery.services.plant_service import PlantService
from nursery.schemas.plant import PlantResponse, PlantListResponse

router = APIRouter(prefix="/plants", tags=["catalog"])


@router.get("", response_model=PlantListResponse, summary="Browse plants")
def get_plants(
    category: Optional[str] = Query(None, description="Category to show, or All"),
    search: Optional[str] = Query(None, description="Match against name and description"),
    service: PlantService = Depends(get_plant_service)
):
    """
    Retrieve plants, newest first
    
    - **category**: Exact category match (default: all categories)
    - **search**: Case-insensitive text in name or description
    """
    return service.get_plants(category=category, search=search)


@router.get("/featured", response_model=List[PlantResponse], summary="Featured plants")
def get_featured_plants(service: PlantService = Depends(get_plant_service)):
    """Plants shown on the home page"""
    return service.get_featured_plants()


@router.get("/categories", response_model=List[str], summary="Plant categories")
def get_categories(service: PlantService = Depends(get_plant_service)):
    return service.get_categories()


@router.get("/{plant_id}", response_model=PlantResponse, summary="Get plant by ID")
def get_plant(
    plant_id: int,
    service: PlantService = Depends(get_plant_service)
):
    """
    Retrieve a specific plant by ID
    
    - **plant_id**: Plant ID
    """
    plant = service.get_plant_by_id(plant_id)
    if not plant:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Plant with id={plant_id} not found"
        )
    return plant
