"""统计汇总：对已读取的完整列表做计数、求和、平均"""

from collections import Counter, defaultdict
from typing import Dict, Sequence

from bizdash.schemas import CustomerResponse, ExpenseResponse, ProductResponse, SaleResponse
from bizdash.schemas.statistics import (
    CustomerStats, DashboardStats, ExpenseStats, PriceListStats, SalesStats
)


def _mean(values: Sequence[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _enum_value(v) -> str:
    return getattr(v, "value", v)


def price_list_stats(products: Sequence[ProductResponse]) -> PriceListStats:
    """价目表统计：条目数、分类数、平均单价/批量价（批量价只统计已填写的）"""
    bulk_prices = [p.bulk_price for p in products if p.bulk_price is not None]
    return PriceListStats(
        total=len(products),
        category_count=len({p.category for p in products}),
        average_unit_price=_mean([p.unit_price for p in products]),
        average_bulk_price=_mean(bulk_prices),
    )


def dashboard_stats(
    sales: Sequence[SaleResponse],
    customers: Sequence[CustomerResponse],
    expenses: Sequence[ExpenseResponse],
) -> DashboardStats:
    """首页看板：销售总额、客户数、费用总额、净利润"""
    total_sales = sum(s.amount for s in sales)
    total_expenses = sum(e.amount for e in expenses)
    return DashboardStats(
        total_sales=total_sales,
        total_customers=len(customers),
        total_expenses=total_expenses,
        net_profit=total_sales - total_expenses,
    )


def customer_stats(customers: Sequence[CustomerResponse]) -> CustomerStats:
    counts = Counter(_enum_value(c.category) for c in customers)
    return CustomerStats(total=len(customers), by_category=dict(counts))


def sales_stats(sales: Sequence[SaleResponse]) -> SalesStats:
    by_status: Dict[str, float] = defaultdict(float)
    for s in sales:
        by_status[_enum_value(s.status)] += s.amount
    amounts = [s.amount for s in sales]
    return SalesStats(
        count=len(sales),
        total_amount=sum(amounts),
        average_amount=_mean(amounts),
        by_status=dict(by_status),
    )


def expense_stats(expenses: Sequence[ExpenseResponse]) -> ExpenseStats:
    by_category: Dict[str, float] = defaultdict(float)
    for e in expenses:
        by_category[_enum_value(e.category)] += e.amount
    return ExpenseStats(
        count=len(expenses),
        total_amount=sum(e.amount for e in expenses),
        recurring_amount=sum(e.amount for e in expenses if e.is_recurring),
        by_category=dict(by_category),
    )

