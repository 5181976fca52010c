"""
Vault request API routes.

Nominees submit claims and follow their progress; admins review them.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_user, optional_user
from app.core.database import get_db
from app.modules.users.models import User
from app.modules.vault import services
from app.modules.vault.schemas import VaultRequestCreate, VaultRequestOut, VaultStatusUpdate

router = APIRouter()


@router.get("/requests", response_model=List[VaultRequestOut])
async def list_vault_requests(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Nominees get their own requests; admins get all of them."""
    return services.list_requests(db, user.role, user.id)


@router.post("/requests", response_model=VaultRequestOut, status_code=status.HTTP_201_CREATED)
async def submit_vault_request(
    payload: VaultRequestCreate,
    user: Optional[User] = Depends(optional_user),
    db: Session = Depends(get_db),
):
    """
    Submit a claim on a deceased owner's vault.
    Upload the death certificate via /api/upload first and pass its URL.
    """
    return services.submit_request(db, payload, submitter=user)


@router.get("/requests/{request_id}", response_model=VaultRequestOut)
async def get_vault_request(request_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return services.get_request(db, request_id, user.role, user.id)


@router.put("/requests/{request_id}", response_model=VaultRequestOut)
async def update_vault_request(
    request_id: int,
    payload: VaultStatusUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Admin review. Status must be one of:
    - under_review: an admin is looking at the claim
    - verified: claim approved, vault opened
    - rejected: claim refused (adminNotes required)
    """
    return services.update_status(db, request_id, payload.status, user, payload.admin_notes)
