"""
Nominee API routes.
Every operation is scoped to the authenticated owner.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.database import get_db
from app.modules.nominees.schemas import AllocationSummary, NomineeCreate, NomineeOut, NomineeUpdate
from app.modules.nominees.services import NomineeRepository
from app.modules.users.models import User
from app.shared.schemas import supplied_fields

router = APIRouter()


@router.get("", response_model=List[NomineeOut])
async def list_nominees(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """List the caller's nominees, newest first."""
    return NomineeRepository(db).list(user.id)


@router.post("", response_model=NomineeOut, status_code=status.HTTP_201_CREATED)
async def create_nominee(
    payload: NomineeCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Add a nominee. Rejected if total allocation would exceed 100%."""
    return NomineeRepository(db).create(user.id, payload)


@router.get("/allocation", response_model=AllocationSummary)
async def get_allocation(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """How much of the estate is allocated across nominees."""
    return NomineeRepository(db).allocation_summary(user.id)


@router.get("/{nominee_id}", response_model=NomineeOut)
async def get_nominee(nominee_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return NomineeRepository(db).get(user.id, nominee_id)


@router.put("/{nominee_id}", response_model=NomineeOut)
async def update_nominee(
    nominee_id: int,
    payload: NomineeUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return NomineeRepository(db).update(user.id, nominee_id, supplied_fields(payload))


@router.delete("/{nominee_id}")
async def delete_nominee(nominee_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    NomineeRepository(db).delete(user.id, nominee_id)
    return {"success": True, "id": nominee_id}
