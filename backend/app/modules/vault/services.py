"""
Vault request workflow.

Submission creates a pending request. Only admins (admin/super-admin) move
it on:

    start_review : pending | under_review -> under_review
    approve      : any -> verified   (stamps reviewed_at/by, vault_opened_at)
    reject       : any -> rejected   (admin_notes required)

Approving or rejecting an already-reviewed request overwrites the review
fields. The role check runs before the lookup, so a non-admin gets
ForbiddenError whatever the request's state (or existence).
"""

import logging
from typing import Any, List, Optional

from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, NotFoundError, ValidationError
from app.core.timezone import utcnow
from app.modules.users.models import ADMIN_ROLES, User, UserRole
from app.modules.vault.models import VaultRequest, VaultRequestStatus
from app.modules.vault.schemas import VaultRequestCreate
from app.shared.models.audit import AuditAction, AuditResource
from app.shared.repository import commit_or_raise
from app.shared.schemas import parse_fields
from app.shared.services.audit import record_audit

logger = logging.getLogger(__name__)


def _require_admin(user: User, action: str) -> None:
    if user.role not in ADMIN_ROLES:
        logger.warning(f"User {user.id} ({user.role.value}) may not {action} vault requests")
        raise ForbiddenError(f"Only admins can {action} vault requests")


def _get(db: Session, request_id: int) -> VaultRequest:
    vault_request = db.query(VaultRequest).filter(VaultRequest.id == request_id).first()
    if vault_request is None:
        raise NotFoundError("Vault request not found")
    return vault_request


def submit_request(db: Session, fields: Any, submitter: Optional[User] = None) -> VaultRequest:
    """
    Create a pending vault request.

    A nominee submitting while logged in is always recorded as the
    request's nominee, whatever nomineeId the body carries.
    """
    data = parse_fields(VaultRequestCreate, fields).model_dump()
    if submitter is not None and submitter.role == UserRole.NOMINEE:
        data["nominee_id"] = submitter.id
    elif data.get("nominee_id") is not None:
        role = db.query(User.role).filter(User.id == data["nominee_id"]).scalar()
        if role != UserRole.NOMINEE:
            raise ValidationError.for_field("nomineeId", "must reference an existing nominee")

    vault_request = VaultRequest(status=VaultRequestStatus.PENDING, **data)
    db.add(vault_request)
    db.flush()
    record_audit(
        db, AuditAction.VAULT_REQUEST, AuditResource.VAULT_REQUEST,
        user_id=submitter.id if submitter else None,
        resource_id=vault_request.id,
        description="Submitted vault request",
        details={"has_death_certificate": bool(vault_request.death_certificate_url)},
    )
    commit_or_raise(db, "vault request")
    db.refresh(vault_request)

    logger.info(f"Vault request {vault_request.id} submitted for nominee {vault_request.nominee_id}")
    return vault_request


def start_review(db: Session, request_id: int, admin: User, admin_notes: Optional[str] = None) -> VaultRequest:
    """Mark a request as being looked at by an admin."""
    _require_admin(admin, "review")
    vault_request = _get(db, request_id)
    if vault_request.is_terminal:
        raise ValidationError.for_field("status", f"request is already {vault_request.status.value}")

    vault_request.status = VaultRequestStatus.UNDER_REVIEW
    vault_request.reviewed_by = admin.id
    if admin_notes is not None:
        vault_request.admin_notes = admin_notes

    record_audit(
        db, AuditAction.VAULT_REVIEW, AuditResource.VAULT_REQUEST,
        user_id=admin.id, resource_id=vault_request.id,
        description="Started review of vault request",
    )
    commit_or_raise(db, "vault request")
    db.refresh(vault_request)

    logger.info(f"Vault request {vault_request.id} under review by admin {admin.id}")
    return vault_request


def approve_request(db: Session, request_id: int, admin: User, admin_notes: Optional[str] = None) -> VaultRequest:
    """Verify the claim and open the vault."""
    _require_admin(admin, "approve")
    vault_request = _get(db, request_id)

    now = utcnow()
    vault_request.status = VaultRequestStatus.VERIFIED
    vault_request.admin_notes = admin_notes
    vault_request.reviewed_at = now
    vault_request.reviewed_by = admin.id
    vault_request.vault_opened_at = now

    record_audit(
        db, AuditAction.VAULT_APPROVE, AuditResource.VAULT_REQUEST,
        user_id=admin.id, resource_id=vault_request.id,
        description="Approved vault request",
    )
    commit_or_raise(db, "vault request")
    db.refresh(vault_request)

    logger.info(f"Vault request {vault_request.id} verified by admin {admin.id}")
    return vault_request


def reject_request(db: Session, request_id: int, admin: User, admin_notes: Optional[str]) -> VaultRequest:
    """Reject the claim. A reason is mandatory."""
    _require_admin(admin, "reject")
    if admin_notes is None or not admin_notes.strip():
        raise ValidationError.for_field("adminNotes", "a rejection reason is required")

    vault_request = _get(db, request_id)
    vault_request.status = VaultRequestStatus.REJECTED
    vault_request.admin_notes = admin_notes.strip()
    vault_request.reviewed_at = utcnow()
    vault_request.reviewed_by = admin.id

    record_audit(
        db, AuditAction.VAULT_REJECT, AuditResource.VAULT_REQUEST,
        user_id=admin.id, resource_id=vault_request.id,
        description="Rejected vault request",
    )
    commit_or_raise(db, "vault request")
    db.refresh(vault_request)

    logger.info(f"Vault request {vault_request.id} rejected by admin {admin.id}")
    return vault_request


def update_status(
    db: Session,
    request_id: int,
    status: VaultRequestStatus,
    admin: User,
    admin_notes: Optional[str] = None,
) -> VaultRequest:
    """Dispatch an admin's status change to the matching transition."""
    if status == VaultRequestStatus.VERIFIED:
        return approve_request(db, request_id, admin, admin_notes)
    if status == VaultRequestStatus.REJECTED:
        return reject_request(db, request_id, admin, admin_notes)
    if status == VaultRequestStatus.UNDER_REVIEW:
        return start_review(db, request_id, admin, admin_notes)
    raise ValidationError.for_field("status", "requests cannot be moved back to pending")


def list_requests(db: Session, caller_role: UserRole, caller_id: int) -> List[VaultRequest]:
    """Nominees see their own requests, admins see everything."""
    query = db.query(VaultRequest)
    if caller_role == UserRole.NOMINEE:
        query = query.filter(VaultRequest.nominee_id == caller_id)
    elif caller_role not in ADMIN_ROLES:
        raise ForbiddenError("Only nominees and admins can view vault requests")

    return query.order_by(VaultRequest.created_at.desc(), VaultRequest.id.desc()).all()


def get_request(db: Session, request_id: int, caller_role: UserRole, caller_id: int) -> VaultRequest:
    """Single request, with the same visibility rules as list_requests."""
    if caller_role not in ADMIN_ROLES and caller_role != UserRole.NOMINEE:
        raise ForbiddenError("Only nominees and admins can view vault requests")

    vault_request = _get(db, request_id)
    if caller_role == UserRole.NOMINEE and vault_request.nominee_id != caller_id:
        raise NotFoundError("Vault request not found")
    return vault_request
