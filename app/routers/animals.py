# app/routers/animals.py
from fastapi import APIRouter, Body, Depends, Request, status
from typing import Optional, List, Dict, Any
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..db import get_db
from ..middleware.rate_limit import write_limit
from ..schemas.animal import AnimalCreate, AnimalOut
from ..schemas.common import DeleteResultOut, UpdateResultOut
from ..services.animals import AnimalService

router = APIRouter()

def get_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> AnimalService:
    return AnimalService(db)

# GET /animals?sort_by=animal_name&order=desc&page=1&limit=10  (por defecto ascendente)
# Devuelve documentos con la especie y su categoría embebidas
@router.get("", response_model=List[Dict[str, Any]])
async def list_animals(
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: AnimalService = Depends(get_service),
):
    return await service.list_all(service.options(sort_by, order, page, limit))

@router.get("/{animal_id}", response_model=AnimalOut)
async def get_animal(animal_id: str, service: AnimalService = Depends(get_service)):
    return await service.get_by_id(animal_id)

@router.post("", response_model=AnimalOut, status_code=status.HTTP_201_CREATED)
@write_limit
async def create_animal(
    request: Request,
    payload: AnimalCreate,
    service: AnimalService = Depends(get_service),
):
    return await service.create(payload)

@router.put("/{animal_id}", response_model=UpdateResultOut)
@write_limit
async def update_animal(
    request: Request,
    animal_id: str,
    payload: Dict[str, Any] = Body(...),
    service: AnimalService = Depends(get_service),
):
    return await service.update_by_id(animal_id, payload)

@router.delete("/{animal_id}", response_model=DeleteResultOut)
@write_limit
async def delete_animal(
    request: Request,
    animal_id: str,
    service: AnimalService = Depends(get_service),
):
    return await service.delete_by_id(animal_id)
