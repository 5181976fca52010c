"""
Admin API routes.
User management and the audit trail.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.auth import require_roles
from app.core.database import get_db
from app.core.timezone import ApiDateTime
from app.modules.users import services as user_services
from app.modules.users.models import ADMIN_ROLES, User, UserRole
from app.modules.users.schemas import AdminCreateUserRequest, UserOut
from app.shared.models.audit import AuditAction, AuditResource
from app.shared.schemas import CamelModel
from app.shared.services.audit import list_audit_logs

router = APIRouter()


class AuditLogOut(CamelModel):
    id: int
    user_id: Optional[int] = None
    action: AuditAction
    resource: AuditResource
    resource_id: Optional[int] = None
    description: Optional[str] = None
    details: Optional[Dict[str, Any]] = None
    created_at: ApiDateTime


class AuditLogPage(CamelModel):
    logs: List[AuditLogOut]
    total: int
    limit: int
    offset: int


@router.post("/users", response_model=UserOut, status_code=status.HTTP_201_CREATED)
async def create_user(
    request: AdminCreateUserRequest,
    admin: User = Depends(require_roles(UserRole.SUPER_ADMIN)),
    db: Session = Depends(get_db),
):
    """Create an admin, owner or nominee account (super-admin only)."""
    return user_services.create_user(
        db,
        name=request.name,
        phone=request.phone,
        email=request.email,
        pin=request.pin,
        role=request.role,
        address=request.address,
        created_by=admin.id,
    )


@router.put("/users/{user_id}/deactivate", response_model=UserOut)
async def deactivate_user(
    user_id: int,
    admin: User = Depends(require_roles(*ADMIN_ROLES)),
    db: Session = Depends(get_db),
):
    """Deactivate an account. Its tokens stop working immediately."""
    return user_services.deactivate_user(db, user_id, acting_user=admin)


@router.get("/audit-logs", response_model=AuditLogPage)
async def get_audit_logs(
    admin: User = Depends(require_roles(*ADMIN_ROLES)),
    db: Session = Depends(get_db),
    user_id: Optional[int] = Query(default=None, alias="userId"),
    resource: Optional[AuditResource] = None,
    action: Optional[AuditAction] = None,
    limit: int = Query(default=100, ge=1, le=500),
    offset: int = Query(default=0, ge=0),
):
    """Newest-first audit trail with optional filters."""
    logs, total = list_audit_logs(db, user_id=user_id, resource=resource, action=action, limit=limit, offset=offset)
    return {"logs": logs, "total": total, "limit": limit, "offset": offset}
