"""
Asset API routes.
Every operation is scoped to the authenticated owner.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.database import get_db
from app.modules.assets.schemas import AssetCreate, AssetOut, AssetUpdate
from app.modules.assets.services import AssetRepository
from app.modules.users.models import User
from app.shared.schemas import supplied_fields

router = APIRouter()


@router.get("", response_model=List[AssetOut])
async def list_assets(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """List the caller's assets, newest first."""
    return AssetRepository(db).list(user.id)


@router.post("", response_model=AssetOut, status_code=status.HTTP_201_CREATED)
async def create_asset(
    payload: AssetCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Register a new asset."""
    return AssetRepository(db).create(user.id, payload)


@router.get("/{asset_id}", response_model=AssetOut)
async def get_asset(asset_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return AssetRepository(db).get(user.id, asset_id)


@router.put("/{asset_id}", response_model=AssetOut)
async def update_asset(
    asset_id: int,
    payload: AssetUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update the supplied fields of an asset."""
    return AssetRepository(db).update(user.id, asset_id, supplied_fields(payload))


@router.delete("/{asset_id}")
async def delete_asset(asset_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    AssetRepository(db).delete(user.id, asset_id)
    return {"success": True, "id": asset_id}
