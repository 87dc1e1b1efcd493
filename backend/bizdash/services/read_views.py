"""
读视图
返回完整列表（含关联记录），不做分页和筛选；读取失败返回失败结果
"""

import logging
from typing import Any, Awaitable, Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.core.exceptions import ErrorKind, RecordNotFound
from bizdash.schemas import (
    ActionResult, CustomerWithSales, CustomerResponse, ExpenseResponse,
    ProductResponse, SaleWithRelations,
)
from bizdash.services import gateway
from bizdash.services.cache import PRODUCT_LISTING, listing_cache

logger = logging.getLogger(__name__)


async def _read(resource: str, loader: Callable[[], Awaitable[Any]]) -> ActionResult:
    try:
        return ActionResult.ok(await loader())
    except RecordNotFound as e:
        return ActionResult.fail(ErrorKind.NOT_FOUND, f"{e.resource} not found")
    except SQLAlchemyError as e:
        logger.error(f"读取 {resource} 失败: {e}", exc_info=True)
        return ActionResult.fail(
            ErrorKind.PERSISTENCE, f"Error fetching {resource}", details=str(getattr(e, "orig", None) or e)
        )
    except Exception as e:
        logger.error(f"读取 {resource} 失败（未知错误）: {type(e).__name__}: {e}", exc_info=True)
        return ActionResult.fail(ErrorKind.UNKNOWN, f"Error fetching {resource}")


async def fetch_products(db: AsyncSession) -> ActionResult:
    """商品列表（按创建时间倒序），结果缓存至下次商品变更"""
    async def load():
        products = await gateway.list_products(db)
        return [ProductResponse.model_validate(p) for p in products]

    async def cached():
        return list(await listing_cache.get_or_load(PRODUCT_LISTING, load))

    return await _read("products", cached)


async def fetch_product(db: AsyncSession, product_id: int) -> ActionResult:
    async def load():
        return ProductResponse.model_validate(await gateway.get_product(db, product_id))

    return await _read("product", load)


async def fetch_product_categories(db: AsyncSession) -> ActionResult:
    return await _read("categories", lambda: gateway.list_product_categories(db))


async def fetch_customers(db: AsyncSession, include_sales: bool = True) -> ActionResult:
    async def load():
        customers = await gateway.list_customers(db, include_sales=include_sales)
        schema = CustomerWithSales if include_sales else CustomerResponse
        return [schema.model_validate(c) for c in customers]

    return await _read("customers", load)


async def fetch_customer(db: AsyncSession, customer_id: int) -> ActionResult:
    async def load():
        customer = await gateway.get_customer(db, customer_id, include_sales=True)
        return CustomerWithSales.model_validate(customer)

    return await _read("customer", load)


async def fetch_sales(db: AsyncSession) -> ActionResult:
    async def load():
        sales = await gateway.list_sales(db, include_related=True)
        return [SaleWithRelations.model_validate(s) for s in sales]

    return await _read("sales", load)


async def fetch_sale(db: AsyncSession, sale_id: int) -> ActionResult:
    async def load():
        sale = await gateway.get_sale(db, sale_id, include_related=True)
        return SaleWithRelations.model_validate(sale)

    return await _read("sale", load)


async def fetch_expenses(db: AsyncSession) -> ActionResult:
    async def load():
        expenses = await gateway.list_expenses(db)
        return [ExpenseResponse.model_validate(e) for e in expenses]

    return await _read("expenses", load)


async def fetch_expense(db: AsyncSession, expense_id: int) -> ActionResult:
    async def load():
        return ExpenseResponse.model_validate(await gateway.get_expense(db, expense_id))

    return await _read("expense", load)
