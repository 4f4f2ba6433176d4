from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from typing import List, Optional

from ..db import get_db
from ..schemas.assets import (
    AssetCategory,
    AssetCreate,
    AssetResponse,
    AssetSearchFilters,
    AssetSearchResponse,
    AssetStatus,
    AssetUpdate,
)
from ..services import assets as asset_service


router = APIRouter(prefix="/assets", tags=["assets"])


@router.post("", response_model=AssetResponse)
def create_asset(payload: AssetCreate, db: Session = Depends(get_db)):
    return asset_service.create_asset(db, payload)


@router.get("", response_model=List[AssetResponse])
def list_assets(db: Session = Depends(get_db)):
    return asset_service.list_assets(db)


# Declared before /{asset_id} so "search" is not parsed as an id
@router.get("/search", response_model=AssetSearchResponse)
def search_assets(
    search_term: Optional[str] = None,
    category: Optional[AssetCategory] = None,
    status: Optional[AssetStatus] = None,
    user_unit: Optional[str] = None,
    user_location: Optional[str] = None,
    equipment_brand: Optional[str] = None,
    page: int = 1,
    limit: int = asset_service.DEFAULT_SEARCH_LIMIT,
    db: Session = Depends(get_db),
):
    filters = AssetSearchFilters(
        search_term=search_term,
        category=category,
        status=status,
        user_unit=user_unit,
        user_location=user_location,
        equipment_brand=equipment_brand,
    )
    return asset_service.search_assets(db, filters, page=page, limit=limit)


@router.get("/{asset_id}", response_model=Optional[AssetResponse])
def get_asset(asset_id: int, db: Session = Depends(get_db)):
    return asset_service.get_asset(db, asset_id)


@router.patch("/{asset_id}", response_model=AssetResponse)
def update_asset(asset_id: int, payload: AssetUpdate, db: Session = Depends(get_db)):
    return asset_service.update_asset(db, asset_id, payload)


@router.delete("/{asset_id}")
def delete_asset(asset_id: int, db: Session = Depends(get_db)):
    """Delete the asset together with every notification that references it."""
    asset_service.delete_asset(db, asset_id)
    return {"success": True, "id": asset_id}
