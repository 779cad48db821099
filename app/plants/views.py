"""Plants API routes."""

from typing import List
from fastapi import APIRouter, status

from app.plants.models import PlantCreate, PlantResponse, PlantDeleteResponse
from app.plants.service import PlantService


router = APIRouter(prefix="/plants", tags=["Plants"])


@router.get("", response_model=List[PlantResponse])
async def list_plants():
    """Get every plant in the catalog, newest first."""
    return await PlantService.list_plants()


@router.get("/{plant_id}", response_model=PlantResponse)
async def get_plant(plant_id: str):
    """Get a plant with its category and derived stock level."""
    return await PlantService.get_plant_by_id(plant_id)


@router.post("", response_model=PlantResponse, status_code=status.HTTP_201_CREATED)
async def create_plant(plant: PlantCreate):
    """
    Add a plant to the catalog.

    - **category** must be the id of an existing category
    - **price** and **availability** must not be negative
    """
    return await PlantService.create_plant(plant)


@router.delete("/{plant_id}", response_model=PlantDeleteResponse)
async def delete_plant(plant_id: str):
    """Remove a plant from the catalog."""
    await PlantService.delete_plant(plant_id)
    return PlantDeleteResponse(message="Plant deleted")
