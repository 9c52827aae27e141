# app/routers/species.py
from fastapi import APIRouter, Body, Depends, Request, status
from typing import Optional, List, Dict, Any
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..db import get_db
from ..middleware.rate_limit import write_limit
from ..schemas.common import DeleteResultOut, UpdateResultOut
from ..schemas.species import SpeciesCreate, SpeciesOut
from ..services.species import SpeciesService

router = APIRouter()

def get_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> SpeciesService:
    return SpeciesService(db)

# GET /species?sort_by=species_name&order=asc&page=1&limit=10  (por defecto descendente)
@router.get("", response_model=List[SpeciesOut])
async def list_species(
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: SpeciesService = Depends(get_service),
):
    return await service.list_all(service.options(sort_by, order, page, limit))

@router.get("/name/{species_name}", response_model=SpeciesOut)
async def get_species_by_name(species_name: str, service: SpeciesService = Depends(get_service)):
    return await service.get_by_name(species_name)

@router.get("/{species_id}", response_model=SpeciesOut)
async def get_species(species_id: str, service: SpeciesService = Depends(get_service)):
    return await service.get_by_id(species_id)

@router.post("", response_model=SpeciesOut, status_code=status.HTTP_201_CREATED)
@write_limit
async def create_species(
    request: Request,
    payload: SpeciesCreate,
    service: SpeciesService = Depends(get_service),
):
    return await service.create(payload)

@router.put("/{species_id}", response_model=UpdateResultOut)
@write_limit
async def update_species(
    request: Request,
    species_id: str,
    payload: Dict[str, Any] = Body(...),
    service: SpeciesService = Depends(get_service),
):
    return await service.update_by_id(species_id, payload)

@router.delete("/{species_id}", response_model=DeleteResultOut)
@write_limit
async def delete_species(
    request: Request,
    species_id: str,
    service: SpeciesService = Depends(get_service),
):
    return await service.delete_by_id(species_id)
