# app/routers/categories.py
from fastapi import APIRouter, Body, Depends, Request, status
from typing import Optional, List, Dict, Any
from motor.motor_asyncio import AsyncIOMotorDatabase

from ..db import get_db
from ..middleware.rate_limit import write_limit
from ..schemas.category import CategoryCreate, CategoryOut
from ..schemas.common import DeleteResultOut, UpdateResultOut
from ..services.categories import CategoryService

router = APIRouter()

def get_service(db: AsyncIOMotorDatabase = Depends(get_db)) -> CategoryService:
    return CategoryService(db)

# GET /categories?sort_by=...&order=asc&page=1&limit=10
@router.get("", response_model=List[CategoryOut])
async def list_categories(
    sort_by: Optional[str] = None,
    order: Optional[str] = None,
    page: Optional[str] = None,
    limit: Optional[str] = None,
    service: CategoryService = Depends(get_service),
):
    return await service.list_all(service.options(sort_by, order, page, limit))

@router.get("/{category_id}", response_model=CategoryOut)
async def get_category(category_id: str, service: CategoryService = Depends(get_service)):
    return await service.get_by_id(category_id)

@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
@write_limit
async def create_category(
    request: Request,
    payload: CategoryCreate,
    service: CategoryService = Depends(get_service),
):
    return await service.create(payload)

@router.put("/{category_id}", response_model=UpdateResultOut)
@write_limit
async def update_category(
    request: Request,
    category_id: str,
    payload: Dict[str, Any] = Body(...),
    service: CategoryService = Depends(get_service),
):
    return await service.update_by_id(category_id, payload)

@router.delete("/{category_id}", response_model=DeleteResultOut)
@write_limit
async def delete_category(
    request: Request,
    category_id: str,
    service: CategoryService = Depends(get_service),
):
    return await service.delete_by_id(category_id)
