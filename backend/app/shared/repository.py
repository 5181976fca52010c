"""
Owner-scoped repository contract and its SQLAlchemy implementation.

Assets, nominees and trading accounts share the same four-operation
contract, always scoped by the owning user:

    create(owner_id, fields) -> record
    list(owner_id)           -> records, newest first
    update(owner_id, id, partial_fields) -> record
    delete(owner_id, id)

Module repositories subclass SqlAlchemyOwnedRepository and declare their
model, schemas and audit resource; cross-row rules go in check_fields().
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Generic, List, Optional, Sequence, Type, TypeVar

from pydantic import BaseModel as Schema
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.errors import InternalError, NotFoundError, ValidationError
from app.core.timezone import utcnow
from app.shared.models.audit import AuditAction, AuditResource
from app.shared.models.base import BaseModel
from app.shared.schemas import parse_fields
from app.shared.services.audit import record_audit

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class OwnedRepository(ABC, Generic[ModelT]):
    """Contract every owner-scoped ledger implements."""

    @abstractmethod
    def create(self, owner_id: int, fields: Any) -> ModelT:
        """Validate and insert a record owned by owner_id."""

    @abstractmethod
    def list(self, owner_id: int) -> List[ModelT]:
        """All records owned by owner_id, newest first."""

    @abstractmethod
    def get(self, owner_id: int, record_id: int) -> ModelT:
        """A single record; NotFoundError unless (record_id, owner_id) matches."""

    @abstractmethod
    def update(self, owner_id: int, record_id: int, fields: Any) -> ModelT:
        """Validate supplied fields and merge them into the record."""

    @abstractmethod
    def delete(self, owner_id: int, record_id: int) -> None:
        """Remove the record; NotFoundError if it does not exist."""


class SqlAlchemyOwnedRepository(OwnedRepository[ModelT]):
    """Relational implementation of OwnedRepository."""

    model: Type[ModelT]
    create_schema: Type[Schema]
    update_schema: Type[Schema]
    resource: AuditResource
    label: str = "record"
    # Columns that may be omitted on update but never set to null
    required_fields: Sequence[str] = ()

    def __init__(self, db: Session):
        self.db = db

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def check_fields(self, owner_id: int, data: Dict[str, Any], existing: Optional[ModelT] = None) -> None:
        """Cross-row validation; raise ValidationError to reject the write."""

    # ------------------------------------------------------------------
    # Contract
    # ------------------------------------------------------------------

    def create(self, owner_id: int, fields: Any) -> ModelT:
        data = parse_fields(self.create_schema, fields).model_dump()
        self.check_fields(owner_id, data)

        record = self.model(user_id=owner_id, **data)
        self.db.add(record)
        self._flush()
        record_audit(
            self.db, AuditAction.CREATE, self.resource,
            user_id=owner_id, resource_id=record.id,
            description=f"Created {self.label}",
        )
        self._commit()
        self.db.refresh(record)

        logger.info(f"Created {self.label} {record.id} for user {owner_id}")
        return record

    def list(self, owner_id: int) -> List[ModelT]:
        return (
            self.db.query(self.model)
            .filter(self.model.user_id == owner_id)
            .order_by(self.model.created_at.desc(), self.model.id.desc())
            .all()
        )

    def count(self, owner_id: int) -> int:
        return self.db.query(self.model).filter(self.model.user_id == owner_id).count()

    def get(self, owner_id: int, record_id: int) -> ModelT:
        record = (
            self.db.query(self.model)
            .filter(self.model.id == record_id, self.model.user_id == owner_id)
            .first()
        )
        if record is None:
            raise NotFoundError(f"{self.label.capitalize()} not found")
        return record

    def update(self, owner_id: int, record_id: int, fields: Any) -> ModelT:
        data = parse_fields(self.update_schema, fields).model_dump(exclude_unset=True)
        nulls = [name for name in self.required_fields if name in data and data[name] is None]
        if nulls:
            raise ValidationError(
                f"{', '.join(nulls)}: is required",
                errors=[{"field": name, "message": "is required"} for name in nulls],
            )

        record = self.get(owner_id, record_id)
        self.check_fields(owner_id, data, existing=record)

        for name, value in data.items():
            setattr(record, name, value)
        record.updated_at = utcnow()

        record_audit(
            self.db, AuditAction.UPDATE, self.resource,
            user_id=owner_id, resource_id=record.id,
            description=f"Updated {self.label}",
            details={"fields": sorted(data)},
        )
        self._commit()
        self.db.refresh(record)

        logger.info(f"Updated {self.label} {record.id} for user {owner_id}")
        return record

    def delete(self, owner_id: int, record_id: int) -> None:
        record = self.get(owner_id, record_id)
        self.db.delete(record)
        record_audit(
            self.db, AuditAction.DELETE, self.resource,
            user_id=owner_id, resource_id=record_id,
            description=f"Deleted {self.label}",
        )
        self._commit()
        logger.info(f"Deleted {self.label} {record_id} for user {owner_id}")

    # ------------------------------------------------------------------
    # Session helpers
    # ------------------------------------------------------------------

    def _flush(self) -> None:
        try:
            self.db.flush()
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.error(f"Failed to write {self.label}: {e}", exc_info=True)
            raise InternalError()

    def _commit(self) -> None:
        commit_or_raise(self.db, self.label)


def commit_or_raise(db: Session, what: str) -> None:
    """Commit the session; roll back and raise InternalError on datastore failure."""
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.error(f"Failed to commit {what}: {e}", exc_info=True)
        raise InternalError()
