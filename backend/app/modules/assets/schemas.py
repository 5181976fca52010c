"""
Request/response schemas for the asset ledger.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.core.timezone import ApiDateTime
from app.modules.assets.models import AssetCategory, AssetStatus
from app.shared.schemas import ApiDecimal, CamelModel, RequiredStr


class AssetCreate(CamelModel):
    category: AssetCategory
    institution: RequiredStr = Field(max_length=200)
    account_number: RequiredStr = Field(max_length=100)
    current_value: Decimal = Field(ge=0, max_digits=15, decimal_places=2)
    status: AssetStatus = AssetStatus.ACTIVE
    notes: Optional[str] = None
    documents: List[str] = Field(default_factory=list)
    maturity_date: Optional[date] = None
    nominee: Optional[str] = Field(default=None, max_length=100)


class AssetUpdate(CamelModel):
    category: Optional[AssetCategory] = None
    institution: Optional[RequiredStr] = Field(default=None, max_length=200)
    account_number: Optional[RequiredStr] = Field(default=None, max_length=100)
    current_value: Optional[Decimal] = Field(default=None, ge=0, max_digits=15, decimal_places=2)
    status: Optional[AssetStatus] = None
    notes: Optional[str] = None
    documents: Optional[List[str]] = None
    maturity_date: Optional[date] = None
    nominee: Optional[str] = Field(default=None, max_length=100)


class AssetOut(CamelModel):
    id: int
    user_id: int
    category: AssetCategory
    institution: str
    account_number: str
    current_value: ApiDecimal
    status: AssetStatus
    notes: Optional[str] = None
    documents: List[str] = Field(default_factory=list)
    maturity_date: Optional[date] = None
    nominee: Optional[str] = None
    created_at: ApiDateTime
    updated_at: ApiDateTime
