"""
Trading-account ledger models.

Brokerage accounts are kept apart from other assets because they carry
broker-specific identifiers (client ID, demat number) and may name one of
the owner's nominees directly.
"""

import enum

from sqlalchemy import Column, Integer, String, Numeric, Date, Text, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.shared.models.base import BaseModel, enum_type


class TradingAccountStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    SUSPENDED = "Suspended"
    CLOSED = "Closed"


class TradingAccount(BaseModel):
    """A brokerage/demat account registered by its owner."""

    __tablename__ = "trading_accounts"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    broker_name = Column(String(200), nullable=False)  # 'Zerodha', 'Upstox', 'ICICI Direct'
    client_id = Column(String(100), nullable=False)
    demat_number = Column(String(100), nullable=False)

    # Weak reference: the account doesn't own the nominee
    nominee_id = Column(Integer, ForeignKey("nominees.id", ondelete="SET NULL"), nullable=True)

    current_value = Column(Numeric(15, 2), nullable=False, default=0)
    status = Column(
        enum_type(TradingAccountStatus, length=20), nullable=False, default=TradingAccountStatus.ACTIVE
    )

    notes = Column(Text, nullable=True)
    documents = Column(JSON, nullable=False, default=list)
    opened_date = Column(Date, nullable=True)

    # Relationships
    user = relationship("User", back_populates="trading_accounts")

    __table_args__ = (
        Index('idx_trading_account_user', 'user_id'),
    )
