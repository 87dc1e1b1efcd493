"""
数据访问层
每个实体一组增删改查，入参为已校验的 Schema，返回 ORM 对象。
记录不存在抛 RecordNotFound，被销售单引用时抛 RecordInUse，
其余数据库异常（SQLAlchemyError）原样抛出，由调用方处理。
"""

from typing import Any, Iterable, List, Sequence, Type

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from bizdash.core.exceptions import RecordNotFound, RecordInUse
from bizdash.models import Customer, Expense, Product, Sale
from bizdash.schemas import CustomerCreate, ExpenseCreate, ProductCreate, SaleCreate


def _values(data) -> dict:
    """Schema 转为列值（枚举取值，不含 id）"""
    return data.model_dump(mode="json", exclude={"id"})


async def _get_or_raise(
    db: AsyncSession, model: Type[Any], record_id: int, options: Sequence[Any] = ()
):
    if options:
        result = await db.execute(
            select(model)
            .options(*options)
            .where(model.id == record_id)
            .execution_options(populate_existing=True)
        )
        record = result.scalar_one_or_none()
    else:
        record = await db.get(model, record_id)
    if record is None:
        raise RecordNotFound(model.__name__, record_id)
    return record


async def _apply_update(db: AsyncSession, record, data) -> None:
    """整体替换字段"""
    for field, value in _values(data).items():
        setattr(record, field, value)
    await db.commit()
    await db.refresh(record)


async def _count_sales(db: AsyncSession, *conditions) -> int:
    result = await db.execute(select(func.count(Sale.id)).where(*conditions))
    return result.scalar() or 0


# ========== 商品 ==========

async def list_products(db: AsyncSession) -> List[Product]:
    result = await db.execute(
        select(Product).order_by(Product.created_at.desc(), Product.id.desc())
    )
    return list(result.scalars().all())


async def get_product(db: AsyncSession, product_id: int) -> Product:
    return await _get_or_raise(db, Product, product_id)


async def create_product(db: AsyncSession, data: ProductCreate) -> Product:
    product = Product(**_values(data))
    db.add(product)
    await db.commit()
    await db.refresh(product)
    return product


async def update_product(db: AsyncSession, product_id: int, data: ProductCreate) -> Product:
    product = await get_product(db, product_id)
    await _apply_update(db, product, data)
    return product


async def delete_product(db: AsyncSession, product_id: int) -> None:
    product = await get_product(db, product_id)

    # 检查是否有关联销售记录
    sales_count = await _count_sales(db, Sale.product_id == product_id)
    if sales_count > 0:
        raise RecordInUse("Product", product_id, sales_count)

    await db.delete(product)
    await db.commit()


async def delete_products(db: AsyncSession, ids: Iterable[int]) -> int:
    """批量删除商品，不存在的ID忽略；任一商品被引用则全部不删"""
    ids = sorted(set(ids))
    result = await db.execute(select(Product).where(Product.id.in_(ids)))
    products = list(result.scalars().all())
    if not products:
        return 0

    found_ids = [p.id for p in products]
    referenced = await db.execute(
        select(Sale.product_id, func.count(Sale.id))
        .where(Sale.product_id.in_(found_ids))
        .group_by(Sale.product_id)
        .order_by(Sale.product_id)
    )
    in_use = referenced.first()
    if in_use is not None:
        product_id, sales_count = in_use
        raise RecordInUse("Product", product_id, sales_count)

    for product in products:
        await db.delete(product)
    await db.commit()
    return len(products)


async def list_product_categories(db: AsyncSession) -> List[str]:
    result = await db.execute(
        select(Product.category).distinct().order_by(Product.category)
    )
    return [r[0] for r in result.fetchall() if r[0]]


# ========== 客户 ==========

async def list_customers(db: AsyncSession, include_sales: bool = False) -> List[Customer]:
    query = select(Customer).order_by(Customer.created_at.desc(), Customer.id.desc())
    if include_sales:
        query = query.options(selectinload(Customer.sales)).execution_options(populate_existing=True)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_customer(db: AsyncSession, customer_id: int, include_sales: bool = False) -> Customer:
    options = [selectinload(Customer.sales)] if include_sales else []
    return await _get_or_raise(db, Customer, customer_id, options)


async def create_customer(db: AsyncSession, data: CustomerCreate) -> Customer:
    customer = Customer(**_values(data))
    db.add(customer)
    await db.commit()
    await db.refresh(customer)
    return customer


async def update_customer(db: AsyncSession, customer_id: int, data: CustomerCreate) -> Customer:
    customer = await get_customer(db, customer_id)
    await _apply_update(db, customer, data)
    return customer


async def delete_customer(db: AsyncSession, customer_id: int) -> None:
    customer = await get_customer(db, customer_id)

    sales_count = await _count_sales(db, Sale.customer_id == customer_id)
    if sales_count > 0:
        raise RecordInUse("Customer", customer_id, sales_count)

    await db.delete(customer)
    await db.commit()


# ========== 销售记录 ==========

_SALE_RELATIONS = (selectinload(Sale.customer), selectinload(Sale.product))


async def list_sales(db: AsyncSession, include_related: bool = False) -> List[Sale]:
    query = select(Sale).order_by(Sale.created_at.desc(), Sale.id.desc())
    if include_related:
        query = query.options(*_SALE_RELATIONS).execution_options(populate_existing=True)
    result = await db.execute(query)
    return list(result.scalars().all())


async def get_sale(db: AsyncSession, sale_id: int, include_related: bool = False) -> Sale:
    options = _SALE_RELATIONS if include_related else ()
    return await _get_or_raise(db, Sale, sale_id, options)


async def create_sale(db: AsyncSession, data: SaleCreate) -> Sale:
    """创建销售记录，客户/商品引用由数据库外键校验"""
    sale = Sale(**_values(data))
    db.add(sale)
    await db.commit()
    return await get_sale(db, sale.id, include_related=True)


async def update_sale(db: AsyncSession, sale_id: int, data: SaleCreate) -> Sale:
    sale = await get_sale(db, sale_id)
    await _apply_update(db, sale, data)
    return await get_sale(db, sale_id, include_related=True)


async def delete_sale(db: AsyncSession, sale_id: int) -> None:
    sale = await get_sale(db, sale_id)
    await db.delete(sale)
    await db.commit()


# ========== 费用 ==========

async def list_expenses(db: AsyncSession) -> List[Expense]:
    result = await db.execute(
        select(Expense).order_by(Expense.created_at.desc(), Expense.id.desc())
    )
    return list(result.scalars().all())


async def get_expense(db: AsyncSession, expense_id: int) -> Expense:
    return await _get_or_raise(db, Expense, expense_id)


async def create_expense(db: AsyncSession, data: ExpenseCreate) -> Expense:
    expense = Expense(**_values(data))
    db.add(expense)
    await db.commit()
    await db.refresh(expense)
    return expense


async def update_expense(db: AsyncSession, expense_id: int, data: ExpenseCreate) -> Expense:
    expense = await get_expense(db, expense_id)
    await _apply_update(db, expense, data)
    return expense


async def delete_expense(db: AsyncSession, expense_id: int) -> None:
    expense = await get_expense(db, expense_id)
    await db.delete(expense)
    await db.commit()
