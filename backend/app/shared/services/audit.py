"""
Audit trail service.

Audit rows are added to the caller's session and committed together with
the change they describe.
"""

from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session

from app.shared.models.audit import AuditLog, AuditAction, AuditResource


def record_audit(
    db: Session,
    action: AuditAction,
    resource: AuditResource,
    user_id: Optional[int] = None,
    resource_id: Optional[int] = None,
    description: Optional[str] = None,
    details: Optional[Dict[str, Any]] = None,
    ip_address: Optional[str] = None,
    user_agent: Optional[str] = None,
) -> AuditLog:
    """Stage an audit entry in the current session (no commit)."""
    entry = AuditLog(
        action=action,
        resource=resource,
        user_id=user_id,
        resource_id=resource_id,
        description=description,
        details=details,
        ip_address=ip_address,
        user_agent=user_agent,
    )
    db.add(entry)
    return entry


def list_audit_logs(
    db: Session,
    user_id: Optional[int] = None,
    resource: Optional[AuditResource] = None,
    action: Optional[AuditAction] = None,
    limit: int = 100,
    offset: int = 0,
) -> Tuple[List[AuditLog], int]:
    """Newest-first audit entries plus the total matching count."""
    query = db.query(AuditLog)

    if user_id is not None:
        query = query.filter(AuditLog.user_id == user_id)
    if resource is not None:
        query = query.filter(AuditLog.resource == resource)
    if action is not None:
        query = query.filter(AuditLog.action == action)

    total = query.count()
    logs = query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).offset(offset).limit(limit).all()
    return logs, total
