"""统计Schema"""
from typing import Dict

from pydantic import Field

from bizdash.schemas.common import CamelModel


class PriceListStats(CamelModel):
    """价目表统计"""
    total: int = 0
    category_count: int = 0
    average_unit_price: float = 0.0
    average_bulk_price: float = 0.0


class DashboardStats(CamelModel):
    """首页看板"""
    total_sales: float = 0.0
    total_customers: int = 0
    total_expenses: float = 0.0
    net_profit: float = 0.0


class CustomerStats(CamelModel):
    total: int = 0
    by_category: Dict[str, int] = Field(default_factory=dict)


class SalesStats(CamelModel):
    count: int = 0
    total_amount: float = 0.0
    average_amount: float = 0.0
    by_status: Dict[str, float] = Field(default_factory=dict)


class ExpenseStats(CamelModel):
    count: int = 0
    total_amount: float = 0.0
    recurring_amount: float = 0.0
    by_category: Dict[str, float] = Field(default_factory=dict)
