"""
Nominee registry models.
"""

import enum

from sqlalchemy import Column, Integer, String, Numeric, Text, Boolean, ForeignKey, Index
from sqlalchemy.orm import relationship

from app.shared.models.base import BaseModel, enum_type


class NomineeRelation(str, enum.Enum):
    SPOUSE = "Spouse"
    CHILD = "Child"
    PARENT = "Parent"
    SIBLING = "Sibling"
    OTHER = "Other"


class Nominee(BaseModel):
    """A beneficiary designated by an owner, with their share of the estate."""

    __tablename__ = "nominees"

    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    name = Column(String(100), nullable=False)
    relation = Column(enum_type(NomineeRelation, length=20), nullable=False)

    phone = Column(String(20), nullable=False)
    email = Column(String(255), nullable=False)

    allocation_percentage = Column(Numeric(5, 2), nullable=False, default=0)  # 0.00 - 100.00

    is_executor = Column(Boolean, nullable=False, default=False)
    is_backup = Column(Boolean, nullable=False, default=False)  # Contingent nominee

    address = Column(Text, nullable=True)
    id_proof_type = Column(String(100), nullable=True)  # 'Aadhaar', 'PAN', 'Passport'
    id_proof_number = Column(String(100), nullable=True)

    # Relationships
    user = relationship("User", back_populates="nominees")

    __table_args__ = (
        Index('idx_nominee_user', 'user_id'),
    )
