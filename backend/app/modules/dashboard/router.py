"""
Dashboard API routes.
Provides net worth, allocation and ledger counts for the owner dashboard.
All data is retrieved from the database - no hardcoded values.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.auth import get_current_user
from app.core.database import get_db
from app.modules.dashboard import services
from app.modules.dashboard.schemas import DashboardBatch, DashboardStats
from app.modules.users.models import User

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
async def get_dashboard_stats(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """
    Get dashboard statistics.

    Returns:
    - totalAssets / netWorth over Active assets
    - totalNominees, totalTradingAccounts
    - assetAllocation: one slice per active asset with its share of net worth
    """
    return services.compute_stats(db, user.id)


@router.get("/batch", response_model=DashboardBatch)
async def get_dashboard_batch(user: User = Depends(get_current_user), db: Session = Depends(get_db)):
    """Stats plus assets, nominees and trading accounts in one response."""
    return services.get_batch(db, user.id)
