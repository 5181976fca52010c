"""
Request/response schemas for the nominee registry.
"""

from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.core.timezone import ApiDateTime
from app.modules.nominees.models import NomineeRelation
from app.shared.schemas import ApiDecimal, CamelModel, Email, Phone, RequiredStr


class NomineeCreate(CamelModel):
    name: RequiredStr = Field(max_length=100)
    relation: NomineeRelation
    phone: Phone
    email: Email
    allocation_percentage: Decimal = Field(ge=0, le=100, decimal_places=2)
    is_executor: bool = False
    is_backup: bool = False
    address: Optional[str] = None
    id_proof_type: Optional[str] = Field(default=None, max_length=100)
    id_proof_number: Optional[str] = Field(default=None, max_length=100)


class NomineeUpdate(CamelModel):
    name: Optional[RequiredStr] = Field(default=None, max_length=100)
    relation: Optional[NomineeRelation] = None
    phone: Optional[Phone] = None
    email: Optional[Email] = None
    allocation_percentage: Optional[Decimal] = Field(default=None, ge=0, le=100, decimal_places=2)
    is_executor: Optional[bool] = None
    is_backup: Optional[bool] = None
    address: Optional[str] = None
    id_proof_type: Optional[str] = Field(default=None, max_length=100)
    id_proof_number: Optional[str] = Field(default=None, max_length=100)


class NomineeOut(CamelModel):
    id: int
    user_id: int
    name: str
    relation: NomineeRelation
    phone: str
    email: str
    allocation_percentage: ApiDecimal
    is_executor: bool
    is_backup: bool
    address: Optional[str] = None
    id_proof_type: Optional[str] = None
    created_at: ApiDateTime
    updated_at: ApiDateTime


class AllocationSummary(CamelModel):
    allocated: ApiDecimal
    unallocated: ApiDecimal
    nominee_count: int
