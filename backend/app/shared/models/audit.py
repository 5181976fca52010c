"""
Audit trail models.
"""

import enum

from sqlalchemy import Column, Integer, String, Text, JSON, ForeignKey, Index

from app.shared.models.base import BaseModel, enum_type


class AuditAction(str, enum.Enum):
    CREATE = "CREATE"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    LOGIN = "LOGIN"
    OTP_SEND = "OTP_SEND"
    OTP_VERIFY = "OTP_VERIFY"
    PIN_VERIFY = "PIN_VERIFY"
    VAULT_REQUEST = "VAULT_REQUEST"
    VAULT_REVIEW = "VAULT_REVIEW"
    VAULT_APPROVE = "VAULT_APPROVE"
    VAULT_REJECT = "VAULT_REJECT"
    FILE_UPLOAD = "FILE_UPLOAD"
    USER_DEACTIVATE = "USER_DEACTIVATE"


class AuditResource(str, enum.Enum):
    USER = "USER"
    ASSET = "ASSET"
    NOMINEE = "NOMINEE"
    TRADING_ACCOUNT = "TRADING_ACCOUNT"
    VAULT_REQUEST = "VAULT_REQUEST"
    DOCUMENT = "DOCUMENT"
    AUTH = "AUTH"


class AuditLog(BaseModel):
    """Append-only record of security-relevant actions."""

    __tablename__ = "audit_logs"

    # Nullable: anonymous vault submissions and failed logins have no actor
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    action = Column(enum_type(AuditAction), nullable=False)
    resource = Column(enum_type(AuditResource), nullable=False)
    resource_id = Column(Integer, nullable=True)

    description = Column(Text, nullable=True)
    details = Column(JSON, nullable=True)

    ip_address = Column(String(45), nullable=True)
    user_agent = Column(Text, nullable=True)

    __table_args__ = (
        Index('idx_audit_user', 'user_id'),
        Index('idx_audit_resource', 'resource', 'resource_id'),
    )
