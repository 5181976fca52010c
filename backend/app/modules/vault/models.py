"""
Vault request models.

A vault request is a nominee's claim on a deceased owner's vault. Admins
move it through: pending -> under_review -> verified | rejected
(pending may also go straight to verified or rejected).
"""

import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index

from app.shared.models.base import BaseModel, enum_type


class VaultRequestStatus(str, enum.Enum):
    PENDING = "pending"
    UNDER_REVIEW = "under_review"
    VERIFIED = "verified"
    REJECTED = "rejected"


TERMINAL_STATUSES = (VaultRequestStatus.VERIFIED, VaultRequestStatus.REJECTED)


class VaultRequest(BaseModel):
    """A nominee's claim, reviewed by an admin against the death certificate."""

    __tablename__ = "vault_requests"

    # Weak reference to the submitting nominee's user account
    nominee_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    nominee_name = Column(String(100), nullable=False)
    relation_to_deceased = Column(String(50), nullable=False)
    phone_number = Column(String(20), nullable=False)
    email = Column(String(255), nullable=False)

    death_certificate_url = Column(Text, nullable=True)

    status = Column(
        enum_type(VaultRequestStatus, length=20), nullable=False, default=VaultRequestStatus.PENDING
    )

    # Review
    admin_notes = Column(Text, nullable=True)
    reviewed_at = Column(DateTime, nullable=True)
    reviewed_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    vault_opened_at = Column(DateTime, nullable=True)  # Set only on verification

    __table_args__ = (
        Index('idx_vault_request_nominee', 'nominee_id'),
        Index('idx_vault_request_status', 'status'),
    )

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_STATUSES
