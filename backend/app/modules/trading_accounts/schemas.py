"""
Request/response schemas for the trading-account ledger.
"""

from datetime import date
from decimal import Decimal
from typing import List, Optional

from pydantic import Field

from app.core.timezone import ApiDateTime
from app.modules.trading_accounts.models import TradingAccountStatus
from app.shared.schemas import ApiDecimal, CamelModel, RequiredStr


class TradingAccountCreate(CamelModel):
    broker_name: RequiredStr = Field(max_length=200)
    client_id: RequiredStr = Field(max_length=100)
    demat_number: RequiredStr = Field(max_length=100)
    nominee_id: Optional[int] = None
    current_value: Decimal = Field(ge=0, max_digits=15, decimal_places=2)
    status: TradingAccountStatus = TradingAccountStatus.ACTIVE
    notes: Optional[str] = None
    documents: List[str] = Field(default_factory=list)
    opened_date: Optional[date] = None


class TradingAccountUpdate(CamelModel):
    broker_name: Optional[RequiredStr] = Field(default=None, max_length=200)
    client_id: Optional[RequiredStr] = Field(default=None, max_length=100)
    demat_number: Optional[RequiredStr] = Field(default=None, max_length=100)
    nominee_id: Optional[int] = None
    current_value: Optional[Decimal] = Field(default=None, ge=0, max_digits=15, decimal_places=2)
    status: Optional[TradingAccountStatus] = None
    notes: Optional[str] = None
    documents: Optional[List[str]] = None
    opened_date: Optional[date] = None


class TradingAccountOut(CamelModel):
    id: int
    user_id: int
    broker_name: str
    client_id: str
    demat_number: str
    nominee_id: Optional[int] = None
    current_value: ApiDecimal
    status: TradingAccountStatus
    notes: Optional[str] = None
    documents: List[str] = Field(default_factory=list)
    opened_date: Optional[date] = None
    created_at: ApiDateTime
    updated_at: ApiDateTime
