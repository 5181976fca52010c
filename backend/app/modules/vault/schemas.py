"""
Request/response schemas for vault requests.
"""

from typing import Optional

from pydantic import AliasChoices, Field, field_validator

from app.core.timezone import ApiDateTime
from app.modules.vault.models import VaultRequestStatus
from app.shared.schemas import CamelModel, Email, Phone, RequiredStr


class VaultRequestCreate(CamelModel):
    nominee_name: RequiredStr = Field(max_length=100)
    relation_to_deceased: RequiredStr = Field(max_length=50)
    phone_number: Phone
    email: Email
    # The upload form posts this as 'deathCertificate'
    death_certificate_url: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("deathCertificateUrl", "deathCertificate", "death_certificate_url"),
    )
    nominee_id: Optional[int] = None


class VaultStatusUpdate(CamelModel):
    status: VaultRequestStatus
    admin_notes: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("adminNotes", "admin_notes", "notes"),
    )

    @field_validator("status")
    @classmethod
    def not_pending(cls, value: VaultRequestStatus) -> VaultRequestStatus:
        if value == VaultRequestStatus.PENDING:
            raise ValueError("must be one of 'under_review', 'verified', 'rejected'")
        return value


class VaultRequestOut(CamelModel):
    id: int
    nominee_id: Optional[int] = None
    nominee_name: str
    relation_to_deceased: str
    phone_number: str
    email: str
    death_certificate_url: Optional[str] = None
    status: VaultRequestStatus
    admin_notes: Optional[str] = None
    reviewed_at: Optional[ApiDateTime] = None
    reviewed_by: Optional[int] = None
    vault_opened_at: Optional[ApiDateTime] = None
    created_at: ApiDateTime
    updated_at: ApiDateTime
