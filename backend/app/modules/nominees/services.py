"""
Nominee registry services.

An owner's nominee allocations are capped at 100% in total (configurable
with ENFORCE_ALLOCATION_CAP). The check runs on every create and on any
update that touches allocation_percentage.
"""

import logging
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import func

from app.core.config import settings
from app.core.errors import ValidationError
from app.modules.nominees.models import Nominee
from app.modules.nominees.schemas import NomineeCreate, NomineeUpdate
from app.modules.users.models import User
from app.shared.models.audit import AuditResource
from app.shared.repository import SqlAlchemyOwnedRepository

logger = logging.getLogger(__name__)

FULL_ALLOCATION = Decimal("100")


class NomineeRepository(SqlAlchemyOwnedRepository[Nominee]):
    model = Nominee
    create_schema = NomineeCreate
    update_schema = NomineeUpdate
    resource = AuditResource.NOMINEE
    label = "nominee"
    required_fields = (
        "name", "relation", "phone", "email", "allocation_percentage", "is_executor", "is_backup",
    )

    def total_allocation(self, owner_id: int, exclude_id: Optional[int] = None) -> Decimal:
        """Sum of allocation_percentage across the owner's nominees."""
        query = self.db.query(func.coalesce(func.sum(Nominee.allocation_percentage), 0)).filter(
            Nominee.user_id == owner_id
        )
        if exclude_id is not None:
            query = query.filter(Nominee.id != exclude_id)
        return Decimal(str(query.scalar() or 0))

    def allocation_summary(self, owner_id: int) -> Dict[str, Any]:
        allocated = self.total_allocation(owner_id)
        return {
            "allocated": allocated,
            "unallocated": max(FULL_ALLOCATION - allocated, Decimal("0")),
            "nominee_count": self.count(owner_id),
        }

    def lock_owner(self, owner_id: int) -> None:
        """Row-lock the owner so concurrent nominee writes check the cap one at a time."""
        self.db.query(User.id).filter(User.id == owner_id).with_for_update().first()

    def check_fields(self, owner_id: int, data: Dict[str, Any], existing: Optional[Nominee] = None) -> None:
        if not settings.ENFORCE_ALLOCATION_CAP or data.get("allocation_percentage") is None:
            return

        self.lock_owner(owner_id)
        others = self.total_allocation(owner_id, exclude_id=existing.id if existing else None)
        requested = Decimal(str(data["allocation_percentage"]))
        if others + requested > FULL_ALLOCATION:
            available = max(FULL_ALLOCATION - others, Decimal("0"))
            logger.warning(
                f"Allocation cap exceeded for user {owner_id}: {others} allocated, {requested} requested"
            )
            raise ValidationError.for_field(
                "allocationPercentage",
                f"total allocation would exceed 100% (only {available}% is unallocated)",
            )
