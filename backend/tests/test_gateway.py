import pytest
from sqlalchemy.exc import IntegrityError

from bizdash.core.exceptions import RecordInUse, RecordNotFound
from bizdash.schemas import (
    CustomerCreate, ExpenseCreate, ProductCreate, ProductResponse, SaleCreate, SaleWithRelations
)
from bizdash.services import gateway

from tests.factories import CUSTOMER, EXPENSE, PRODUCT, sale_payload


async def add_product(db, **overrides):
    return await gateway.create_product(db, ProductCreate.model_validate({**PRODUCT, **overrides}))


async def add_customer(db, **overrides):
    return await gateway.create_customer(db, CustomerCreate.model_validate({**CUSTOMER, **overrides}))


async def test_product_round_trip(db):
    created = await add_product(db)
    assert created.id is not None

    fetched = ProductResponse.model_validate(await gateway.get_product(db, created.id))
    assert fetched.category == "Apparel"
    assert fetched.service == "T-Shirt"
    assert fetched.unit_price == pytest.approx(19.99)
    assert fetched.bulk_price == pytest.approx(15.99)
    assert fetched.turnaround_time == "3 days"
    assert fetched.created_at is not None


async def test_products_newest_first(db):
    first = await add_product(db, service="First")
    second = await add_product(db, service="Second")
    third = await add_product(db, service="Third")

    products = await gateway.list_products(db)
    assert [p.id for p in products] == [third.id, second.id, first.id]


async def test_update_replaces_fields(db):
    product = await add_product(db)
    updated = await gateway.update_product(
        db, product.id, ProductCreate.model_validate({**PRODUCT, "service": "Hoodie", "bulkPrice": None})
    )
    assert updated.service == "Hoodie"
    assert updated.bulk_price is None


async def test_missing_records_raise_not_found(db):
    with pytest.raises(RecordNotFound):
        await gateway.get_product(db, 999)
    with pytest.raises(RecordNotFound):
        await gateway.delete_expense(db, 999)
    with pytest.raises(RecordNotFound):
        await gateway.update_customer(db, 999, CustomerCreate.model_validate(CUSTOMER))


async def test_sale_loads_customer_and_product(db):
    customer = await add_customer(db)
    product = await add_product(db)

    sale = await gateway.create_sale(db, SaleCreate.model_validate(sale_payload(customer.id, product.id)))
    view = SaleWithRelations.model_validate(sale)
    assert view.customer.name == "Jane Doe"
    assert view.product.service == "T-Shirt"

    sales = await gateway.list_sales(db, include_related=True)
    assert [s.customer.email for s in sales] == ["jane@acme.co"]

    with_sales = await gateway.get_customer(db, customer.id, include_sales=True)
    assert [s.id for s in with_sales.sales] == [sale.id]


async def test_sale_with_unknown_references_is_rejected(db):
    with pytest.raises(IntegrityError):
        await gateway.create_sale(db, SaleCreate.model_validate(sale_payload(41, 42)))
    await db.rollback()
    assert await gateway.list_sales(db) == []


async def test_referenced_records_cannot_be_deleted(db):
    customer = await add_customer(db)
    product = await add_product(db)
    sale = await gateway.create_sale(db, SaleCreate.model_validate(sale_payload(customer.id, product.id)))

    with pytest.raises(RecordInUse) as exc:
        await gateway.delete_product(db, product.id)
    assert exc.value.reference_count == 1
    with pytest.raises(RecordInUse):
        await gateway.delete_customer(db, customer.id)

    await gateway.delete_sale(db, sale.id)
    await gateway.delete_product(db, product.id)
    await gateway.delete_customer(db, customer.id)
    assert await gateway.list_products(db) == []
    assert await gateway.list_customers(db) == []


async def test_bulk_delete_ignores_unknown_ids(db):
    keep = await add_product(db, category="Print")
    a = await add_product(db)
    b = await add_product(db)

    assert await gateway.delete_products(db, [a.id, b.id, 999]) == 2
    assert [p.id for p in await gateway.list_products(db)] == [keep.id]
    assert await gateway.delete_products(db, [999]) == 0


async def test_bulk_delete_is_all_or_nothing(db):
    customer = await add_customer(db)
    unused = await add_product(db)
    used = await add_product(db)
    await gateway.create_sale(db, SaleCreate.model_validate(sale_payload(customer.id, used.id)))

    with pytest.raises(RecordInUse) as exc:
        await gateway.delete_products(db, [unused.id, used.id])
    assert exc.value.record_id == used.id
    assert exc.value.reference_count == 1
    assert len(await gateway.list_products(db)) == 2


async def test_categories_are_distinct_and_sorted(db):
    await add_product(db, category="Print")
    await add_product(db, category="Apparel")
    await add_product(db, category="Print")
    assert await gateway.list_product_categories(db) == ["Apparel", "Print"]


async def test_expense_round_trip(db):
    expense = await gateway.create_expense(db, ExpenseCreate.model_validate(EXPENSE))
    fetched = await gateway.get_expense(db, expense.id)
    assert fetched.is_recurring is True
    assert fetched.recurring_period == "MONTHLY"
    assert fetched.category == "RENT"
