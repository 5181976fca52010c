"""
User account models.
"""

import enum

from sqlalchemy import Column, String, Text, Boolean
from sqlalchemy.orm import relationship

from app.shared.models.base import BaseModel, enum_type


class UserRole(str, enum.Enum):
    OWNER = "owner"
    NOMINEE = "nominee"
    ADMIN = "admin"
    SUPER_ADMIN = "super-admin"


ADMIN_ROLES = (UserRole.ADMIN, UserRole.SUPER_ADMIN)


class User(BaseModel):
    """A LifeVault account: asset owner, nominee or admin."""

    __tablename__ = "users"

    name = Column(String(100), nullable=False)
    phone = Column(String(20), nullable=False, unique=True)  # Normalized, e.g. '+919876543210'
    email = Column(String(255), nullable=False, unique=True)
    address = Column(Text, nullable=True)

    pin_hash = Column(String(64), nullable=False)

    role = Column(enum_type(UserRole, length=20), nullable=False, default=UserRole.OWNER)
    is_active = Column(Boolean, nullable=False, default=True)

    # Relationships
    assets = relationship("Asset", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    nominees = relationship("Nominee", back_populates="user", cascade="all, delete-orphan", passive_deletes=True)
    trading_accounts = relationship(
        "TradingAccount", back_populates="user", cascade="all, delete-orphan", passive_deletes=True
    )

    @property
    def is_admin(self) -> bool:
        return self.role in ADMIN_ROLES
