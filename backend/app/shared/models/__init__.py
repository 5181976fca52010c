"""Shared database models."""

from app.shared.models.base import BaseModel, TimestampMixin
from app.shared.models.audit import AuditLog, AuditAction, AuditResource

__all__ = [
    "BaseModel",
    "TimestampMixin",
    "AuditLog",
    "AuditAction",
    "AuditResource",
]
