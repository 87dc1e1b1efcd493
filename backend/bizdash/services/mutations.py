"""
写操作处理

每个处理函数：接收原始输入 → Schema 校验 → 调用数据访问层 → 返回 ActionResult。
- 校验失败只返回通用提示，字段错误写入日志
- 数据库异常回滚会话，返回失败结果，不重试
- 商品写操作成功后使商品列表缓存失效
"""

import logging
from typing import Any, Awaitable, Callable, Iterable, Optional, Tuple, Type

from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.core.exceptions import (
    ErrorKind, GENERIC_VALIDATION_ERROR, RecordInUse, RecordNotFound
)
from bizdash.schemas import (
    ActionResult, validate_payload,
    CustomerCreate, CustomerResponse, CustomerSchema,
    ExpenseCreate, ExpenseResponse, ExpenseSchema,
    ProductCreate, ProductResponse, ProductSchema,
    SaleCreate, SaleSchema, SaleWithRelations,
)
from bizdash.services import gateway
from bizdash.services.cache import PRODUCT_LISTING, listing_cache

logger = logging.getLogger(__name__)


def _validate(schema: Type[BaseModel], raw: Any, action: str) -> Tuple[Optional[Any], Optional[ActionResult]]:
    record, errors = validate_payload(schema, raw)
    if errors:
        logger.warning(f"服务端校验失败（{action}）: {errors}")
        return None, ActionResult.fail(ErrorKind.VALIDATION, GENERIC_VALIDATION_ERROR)
    return record, None


def _check_identity(record: Any, record_id: int, action: str) -> Optional[ActionResult]:
    """完整 Schema 中的 id 若提供，必须与目标记录一致"""
    if getattr(record, "id", None) is not None and record.id != record_id:
        logger.warning(f"服务端校验失败（{action}）: id {record.id} 与目标 {record_id} 不一致")
        return ActionResult.fail(ErrorKind.VALIDATION, GENERIC_VALIDATION_ERROR)
    return None


async def _persist(
    db: AsyncSession,
    action: str,
    operation: Callable[[], Awaitable[Any]],
    invalidate: Iterable[str] = (),
) -> ActionResult:
    """执行数据库操作，所有异常转换为失败结果"""
    try:
        data = await operation()
    except RecordNotFound as e:
        await db.rollback()
        logger.info(f"{action}失败: {e}")
        return ActionResult.fail(ErrorKind.NOT_FOUND, f"{e.resource} not found")
    except RecordInUse as e:
        await db.rollback()
        logger.info(f"{action}失败: {e}")
        return ActionResult.fail(ErrorKind.CONFLICT, str(e))
    except SQLAlchemyError as e:
        await db.rollback()
        logger.error(f"{action}失败: {e}", exc_info=True)
        message = str(getattr(e, "orig", None) or e)
        return ActionResult.fail(ErrorKind.PERSISTENCE, f"Database error: {message}")
    except Exception as e:
        await db.rollback()
        logger.error(f"{action}失败（未知错误）: {type(e).__name__}: {e}", exc_info=True)
        return ActionResult.fail(
            ErrorKind.UNKNOWN, f"An unexpected error occurred while trying to {action}."
        )

    keys = list(invalidate)
    if keys:
        listing_cache.invalidate(*keys)
    return ActionResult.ok(data)


# ========== 商品 ==========

async def add_product_action(db: AsyncSession, data: Any) -> ActionResult:
    record, failure = _validate(ProductCreate, data, "add product")
    if failure:
        return failure

    async def operation():
        product = await gateway.create_product(db, record)
        logger.info(f"新增商品: {product.id} {product.category}/{product.service}")
        return ProductResponse.model_validate(product)

    return await _persist(db, "add product", operation, invalidate=[PRODUCT_LISTING])


async def update_product_action(db: AsyncSession, product_id: int, data: Any) -> ActionResult:
    record, failure = _validate(ProductSchema, data, "update product")
    if failure:
        return failure
    failure = _check_identity(record, product_id, "update product")
    if failure:
        return failure

    async def operation():
        product = await gateway.update_product(db, product_id, record)
        logger.info(f"更新商品: {product_id}")
        return ProductResponse.model_validate(product)

    return await _persist(db, "update product", operation, invalidate=[PRODUCT_LISTING])


async def delete_product_action(db: AsyncSession, product_id: int) -> ActionResult:
    async def operation():
        await gateway.delete_product(db, product_id)
        logger.info(f"删除商品: {product_id}")

    return await _persist(db, "delete product", operation, invalidate=[PRODUCT_LISTING])


async def bulk_delete_products_action(db: AsyncSession, ids: Iterable[int]) -> ActionResult:
    ids = list(ids)
    if not ids:
        logger.warning("批量删除商品: 未提供ID")
        return ActionResult.fail(ErrorKind.VALIDATION, GENERIC_VALIDATION_ERROR)

    async def operation():
        deleted = await gateway.delete_products(db, ids)
        logger.info(f"批量删除商品: 请求 {len(ids)} 个，删除 {deleted} 个")
        return {"deleted": deleted}

    return await _persist(db, "delete products", operation, invalidate=[PRODUCT_LISTING])


# ========== 客户 ==========

async def add_customer_action(db: AsyncSession, data: Any) -> ActionResult:
    record, failure = _validate(CustomerCreate, data, "add customer")
    if failure:
        return failure

    async def operation():
        customer = await gateway.create_customer(db, record)
        logger.info(f"新增客户: {customer.id} {customer.name}")
        return CustomerResponse.model_validate(customer)

    return await _persist(db, "add customer", operation)


async def update_customer_action(db: AsyncSession, customer_id: int, data: Any) -> ActionResult:
    record, failure = _validate(CustomerSchema, data, "update customer")
    if failure:
        return failure
    failure = _check_identity(record, customer_id, "update customer")
    if failure:
        return failure

    async def operation():
        customer = await gateway.update_customer(db, customer_id, record)
        return CustomerResponse.model_validate(customer)

    return await _persist(db, "update customer", operation)


async def delete_customer_action(db: AsyncSession, customer_id: int) -> ActionResult:
    async def operation():
        await gateway.delete_customer(db, customer_id)
        logger.info(f"删除客户: {customer_id}")

    return await _persist(db, "delete customer", operation)


# ========== 销售记录 ==========

async def add_sale_action(db: AsyncSession, data: Any) -> ActionResult:
    record, failure = _validate(SaleCreate, data, "add sale")
    if failure:
        return failure

    async def operation():
        sale = await gateway.create_sale(db, record)
        logger.info(f"新增销售记录: {sale.id} 客户 {sale.customer_id} 商品 {sale.product_id}")
        return SaleWithRelations.model_validate(sale)

    return await _persist(db, "add sale", operation)


async def update_sale_action(db: AsyncSession, sale_id: int, data: Any) -> ActionResult:
    record, failure = _validate(SaleSchema, data, "update sale")
    if failure:
        return failure
    failure = _check_identity(record, sale_id, "update sale")
    if failure:
        return failure

    async def operation():
        sale = await gateway.update_sale(db, sale_id, record)
        return SaleWithRelations.model_validate(sale)

    return await _persist(db, "update sale", operation)


async def delete_sale_action(db: AsyncSession, sale_id: int) -> ActionResult:
    async def operation():
        await gateway.delete_sale(db, sale_id)
        logger.info(f"删除销售记录: {sale_id}")

    return await _persist(db, "delete sale", operation)


# ========== 费用 ==========

async def add_expense_action(db: AsyncSession, data: Any) -> ActionResult:
    record, failure = _validate(ExpenseCreate, data, "add expense")
    if failure:
        return failure

    async def operation():
        expense = await gateway.create_expense(db, record)
        logger.info(f"新增费用: {expense.id} {expense.category} {expense.amount}")
        return ExpenseResponse.model_validate(expense)

    return await _persist(db, "add expense", operation)


async def update_expense_action(db: AsyncSession, expense_id: int, data: Any) -> ActionResult:
    record, failure = _validate(ExpenseSchema, data, "update expense")
    if failure:
        return failure
    failure = _check_identity(record, expense_id, "update expense")
    if failure:
        return failure

    async def operation():
        expense = await gateway.update_expense(db, expense_id, record)
        return ExpenseResponse.model_validate(expense)

    return await _persist(db, "update expense", operation)


async def delete_expense_action(db: AsyncSession, expense_id: int) -> ActionResult:
    async def operation():
        await gateway.delete_expense(db, expense_id)
        logger.info(f"删除费用: {expense_id}")

    return await _persist(db, "delete expense", operation)
