"""
Base model classes and mixins for all database models.
"""

import enum
from typing import Type

from sqlalchemy import Column, Integer, DateTime, Enum
from sqlalchemy.orm import declared_attr

from app.core.database import Base
from app.core.timezone import utcnow


def enum_type(enum_cls: Type[enum.Enum], length: int = 30) -> Enum:
    """String-backed enum column that stores member values ('Bank', 'super-admin')."""
    return Enum(
        enum_cls,
        native_enum=False,
        length=length,
        values_callable=lambda members: [m.value for m in members],
        validate_strings=True,
    )


class TimestampMixin:
    """Mixin that adds created_at and updated_at columns."""

    created_at = Column(DateTime, default=utcnow, nullable=False)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow, nullable=False)


class BaseModel(Base, TimestampMixin):
    """Base model with common fields for all entities."""

    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)

    @declared_attr
    def __tablename__(cls) -> str:
        """Auto-generate table name from class name."""
        # Convert CamelCase to snake_case
        name = cls.__name__
        return ''.join(['_' + c.lower() if c.isupper() else c for c in name]).lstrip('_')
