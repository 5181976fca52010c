"""
Trading account API routes.
Every operation is scoped to the authenticated owner.
"""

from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.database import get_db
from app.modules.trading_accounts.schemas import (
    TradingAccountCreate,
    TradingAccountOut,
    TradingAccountUpdate,
)
from app.modules.trading_accounts.services import TradingAccountRepository
from app.modules.users.models import User
from app.shared.schemas import supplied_fields

router = APIRouter()


@router.get("", response_model=List[TradingAccountOut])
async def list_trading_accounts(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """List the caller's brokerage accounts, newest first."""
    return TradingAccountRepository(db).list(user.id)


@router.post("", response_model=TradingAccountOut, status_code=status.HTTP_201_CREATED)
async def create_trading_account(
    payload: TradingAccountCreate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TradingAccountRepository(db).create(user.id, payload)


@router.get("/{account_id}", response_model=TradingAccountOut)
async def get_trading_account(account_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    return TradingAccountRepository(db).get(user.id, account_id)


@router.put("/{account_id}", response_model=TradingAccountOut)
async def update_trading_account(
    account_id: int,
    payload: TradingAccountUpdate,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return TradingAccountRepository(db).update(user.id, account_id, supplied_fields(payload))


@router.delete("/{account_id}")
async def delete_trading_account(account_id: int, user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    TradingAccountRepository(db).delete(user.id, account_id)
    return {"success": True, "id": account_id}
