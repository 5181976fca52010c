"""
Response schemas for the dashboard.
"""

from typing import List

from app.modules.assets.schemas import AssetOut
from app.modules.nominees.schemas import NomineeOut
from app.modules.trading_accounts.schemas import TradingAccountOut
from app.shared.schemas import ApiDecimal, CamelModel


class AllocationSlice(CamelModel):
    name: str
    amount: ApiDecimal
    percentage: ApiDecimal
    color: str


class DashboardStats(CamelModel):
    total_assets: int
    total_nominees: int
    total_trading_accounts: int
    net_worth: ApiDecimal
    trading_accounts_value: ApiDecimal
    allocated_percentage: ApiDecimal
    asset_allocation: List[AllocationSlice]


class DashboardBatch(DashboardStats):
    assets: List[AssetOut]
    nominees: List[NomineeOut]
    trading_accounts: List[TradingAccountOut]
