"""统计报表API"""

from typing import Any
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.api.responses import unwrap
from bizdash.core.deps import get_db
from bizdash.schemas.statistics import (
    CustomerStats, DashboardStats, ExpenseStats, PriceListStats, SalesStats
)
from bizdash.services import read_views, statistics

router = APIRouter()


@router.get("/dashboard", response_model=DashboardStats)
async def get_dashboard(
    *,
    db: AsyncSession = Depends(get_db)
) -> Any:
    """获取仪表盘数据"""
    sales = unwrap(await read_views.fetch_sales(db), "Error fetching sales")
    customers = unwrap(
        await read_views.fetch_customers(db, include_sales=False), "Error fetching customers"
    )
    expenses = unwrap(await read_views.fetch_expenses(db), "Error fetching expenses")
    return statistics.dashboard_stats(sales, customers, expenses)


@router.get("/products", response_model=PriceListStats)
async def get_price_list_stats(
    *,
    db: AsyncSession = Depends(get_db)
) -> Any:
    """价目表统计"""
    products = unwrap(await read_views.fetch_products(db), "Error fetching products")
    return statistics.price_list_stats(products)


@router.get("/customers", response_model=CustomerStats)
async def get_customer_stats(
    *,
    db: AsyncSession = Depends(get_db)
) -> Any:
    customers = unwrap(
        await read_views.fetch_customers(db, include_sales=False), "Error fetching customers"
    )
    return statistics.customer_stats(customers)


@router.get("/sales", response_model=SalesStats)
async def get_sales_stats(
    *,
    db: AsyncSession = Depends(get_db)
) -> Any:
    sales = unwrap(await read_views.fetch_sales(db), "Error fetching sales")
    return statistics.sales_stats(sales)


@router.get("/expenses", response_model=ExpenseStats)
async def get_expense_stats(
    *,
    db: AsyncSession = Depends(get_db)
) -> Any:
    expenses = unwrap(await read_views.fetch_expenses(db), "Error fetching expenses")
    return statistics.expense_stats(expenses)
