"""
Dashboard aggregation service.

Read-only rollup over an owner's ledgers, recomputed on every call:
- Net worth = exact sum of current_value over ACTIVE assets
- Asset allocation = one chart slice per active asset, as % of net worth
- Counts of nominees and trading accounts
"""

from decimal import Decimal
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.modules.assets.models import Asset
from app.modules.assets.services import AssetRepository
from app.modules.nominees.services import NomineeRepository
from app.modules.trading_accounts.services import TradingAccountRepository

# Chart palette, assigned by slice index
ALLOCATION_COLORS = ['#1E3A8A', '#3B82F6', '#60A5FA', '#93C5FD', '#DBEAFE', '#EFF6FF']

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def build_asset_allocation(assets: List[Asset], net_worth: Decimal) -> List[Dict[str, Any]]:
    """One slice per asset: {name, amount, percentage, color}."""
    allocation = []
    for index, asset in enumerate(assets):
        amount = Decimal(asset.current_value or 0)
        percentage = amount / net_worth * HUNDRED if net_worth else ZERO
        allocation.append({
            "name": asset.category.value,
            "amount": amount,
            "percentage": percentage,
            "color": ALLOCATION_COLORS[index % len(ALLOCATION_COLORS)],
        })
    return allocation


def compute_stats(db: Session, owner_id: int) -> Dict[str, Any]:
    """Headline numbers for the owner dashboard."""
    assets = AssetRepository(db).list_active(owner_id)
    net_worth = sum((Decimal(a.current_value or 0) for a in assets), ZERO)

    nominees = NomineeRepository(db)
    trading_accounts = TradingAccountRepository(db)

    return {
        "total_assets": len(assets),
        "total_nominees": nominees.count(owner_id),
        "total_trading_accounts": trading_accounts.count(owner_id),
        "net_worth": net_worth,
        "trading_accounts_value": trading_accounts.active_value(owner_id),
        "allocated_percentage": nominees.total_allocation(owner_id),
        "asset_allocation": build_asset_allocation(assets, net_worth),
    }


def get_batch(db: Session, owner_id: int) -> Dict[str, Any]:
    """Stats plus every ledger, so the dashboard loads in one round trip."""
    stats = compute_stats(db, owner_id)
    stats.update({
        "assets": AssetRepository(db).list(owner_id),
        "nominees": NomineeRepository(db).list(owner_id),
        "trading_accounts": TradingAccountRepository(db).list(owner_id),
    })
    return stats
