"""
Trading-account ledger services.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import func

from app.core.errors import ValidationError
from app.modules.nominees.models import Nominee
from app.modules.trading_accounts.models import TradingAccount, TradingAccountStatus
from app.modules.trading_accounts.schemas import TradingAccountCreate, TradingAccountUpdate
from app.shared.models.audit import AuditResource
from app.shared.repository import SqlAlchemyOwnedRepository


class TradingAccountRepository(SqlAlchemyOwnedRepository[TradingAccount]):
    model = TradingAccount
    create_schema = TradingAccountCreate
    update_schema = TradingAccountUpdate
    resource = AuditResource.TRADING_ACCOUNT
    label = "trading account"
    required_fields = ("broker_name", "client_id", "demat_number", "current_value", "status", "documents")

    def check_fields(self, owner_id: int, data: Dict[str, Any], existing: Optional[TradingAccount] = None) -> None:
        nominee_id = data.get("nominee_id")
        if nominee_id is None:
            return

        owned = self.db.query(Nominee.id).filter(Nominee.id == nominee_id, Nominee.user_id == owner_id).first()
        if owned is None:
            raise ValidationError.for_field("nomineeId", "must reference one of your nominees")

    def active_value(self, owner_id: int) -> Decimal:
        """Sum of current_value over the owner's active trading accounts."""
        total = self.db.query(func.coalesce(func.sum(TradingAccount.current_value), 0)).filter(
            TradingAccount.user_id == owner_id,
            TradingAccount.status == TradingAccountStatus.ACTIVE,
        ).scalar()
        return Decimal(str(total or 0))
