"""
Asset ledger models.

Tracks an owner's financial holdings:
- Bank accounts and fixed deposits
- LIC policies and provident funds
- Property, stocks and crypto holdings
"""

import enum

from sqlalchemy import Column, Integer, String, Numeric, Date, Text, JSON, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.shared.models.base import BaseModel, enum_type


class AssetCategory(str, enum.Enum):
    BANK = "Bank"
    LIC = "LIC"
    PF = "PF"
    PROPERTY = "Property"
    STOCKS = "Stocks"
    CRYPTO = "Crypto"


class AssetStatus(str, enum.Enum):
    ACTIVE = "Active"
    INACTIVE = "Inactive"
    MATURED = "Matured"
    CLOSED = "Closed"


class Asset(BaseModel):
    """A financial holding registered by its owner."""

    __tablename__ = "assets"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    category = Column(enum_type(AssetCategory, length=20), nullable=False)
    institution = Column(String(200), nullable=False)  # 'SBI', 'LIC of India', 'EPFO'
    account_number = Column(String(100), nullable=False)  # Policy/folio/account number

    current_value = Column(Numeric(15, 2), nullable=False, default=0)
    status = Column(enum_type(AssetStatus, length=20), nullable=False, default=AssetStatus.ACTIVE)

    notes = Column(Text, nullable=True)
    documents = Column(JSON, nullable=False, default=list)  # Ordered list of document URLs

    maturity_date = Column(Date, nullable=True)
    nominee = Column(String(100), nullable=True)  # Free-text nominee named on the holding itself

    # Relationships
    user = relationship("User", back_populates="assets")

    __table_args__ = (
        Index('idx_asset_user', 'user_id'),
        Index('idx_asset_user_status', 'user_id', 'status'),
    )
