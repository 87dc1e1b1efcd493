from bizdash.core.exceptions import ErrorKind, GENERIC_VALIDATION_ERROR
from bizdash.services import gateway, mutations, read_views
from bizdash.services.cache import PRODUCT_LISTING, listing_cache

from tests.factories import CUSTOMER, EXPENSE, PRODUCT, sale_payload


async def test_add_product_returns_created_record(db):
    result = await mutations.add_product_action(db, PRODUCT)
    assert result.success
    assert result.data.id is not None
    assert result.data.unit_price == 19.99

    listed = await read_views.fetch_products(db)
    assert [p.id for p in listed.data] == [result.data.id]


async def test_invalid_product_is_rejected_with_generic_message(db):
    result = await mutations.add_product_action(db, {**PRODUCT, "unitPrice": "-3"})
    assert not result.success
    assert result.error_kind == ErrorKind.VALIDATION
    assert result.error == GENERIC_VALIDATION_ERROR
    assert await gateway.list_products(db) == []


async def test_update_product(db):
    created = (await mutations.add_product_action(db, PRODUCT)).data
    result = await mutations.update_product_action(
        db, created.id, {**PRODUCT, "id": created.id, "unitPrice": "25"}
    )
    assert result.success
    assert result.data.unit_price == 25
    assert result.data.created_at == created.created_at


async def test_update_with_mismatched_id_is_a_validation_failure(db):
    created = (await mutations.add_product_action(db, PRODUCT)).data
    result = await mutations.update_product_action(db, created.id, {**PRODUCT, "id": created.id + 1})
    assert result.error_kind == ErrorKind.VALIDATION


async def test_update_missing_product_is_not_found(db):
    result = await mutations.update_product_action(db, 404, PRODUCT)
    assert result.error_kind == ErrorKind.NOT_FOUND
    assert result.error == "Product not found"


async def test_deleting_twice_reports_not_found(db):
    created = (await mutations.add_product_action(db, PRODUCT)).data
    assert (await mutations.delete_product_action(db, created.id)).success

    again = await mutations.delete_product_action(db, created.id)
    assert not again.success
    assert again.error_kind == ErrorKind.NOT_FOUND


async def test_product_writes_refresh_the_listing(db):
    await mutations.add_product_action(db, PRODUCT)
    first = (await read_views.fetch_products(db)).data
    assert listing_cache.get(PRODUCT_LISTING) is not None

    await mutations.add_product_action(db, {**PRODUCT, "service": "Mug"})
    assert listing_cache.get(PRODUCT_LISTING) is None

    second = (await read_views.fetch_products(db)).data
    assert len(second) == len(first) + 1
    assert second[0].service == "Mug"


async def test_failed_write_keeps_the_listing(db):
    await mutations.add_product_action(db, PRODUCT)
    await read_views.fetch_products(db)

    await mutations.add_product_action(db, {**PRODUCT, "category": ""})
    assert listing_cache.get(PRODUCT_LISTING) is not None


async def test_sale_with_unknown_customer_is_a_persistence_failure(db):
    product = (await mutations.add_product_action(db, PRODUCT)).data
    result = await mutations.add_sale_action(db, sale_payload(999, product.id))
    assert result.error_kind == ErrorKind.PERSISTENCE
    assert result.error.startswith("Database error:")

    # 回滚后会话仍可用
    assert (await read_views.fetch_sales(db)).data == []


async def test_unexpected_errors_are_contained(db, monkeypatch):
    async def broken(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(gateway, "create_product", broken)
    result = await mutations.add_product_action(db, PRODUCT)
    assert result.error_kind == ErrorKind.UNKNOWN
    assert result.error == "An unexpected error occurred while trying to add product."
    assert "disk on fire" not in result.error


async def test_sale_flow_and_delete_restriction(db):
    customer = (await mutations.add_customer_action(db, CUSTOMER)).data
    product = (await mutations.add_product_action(db, PRODUCT)).data

    sale = await mutations.add_sale_action(db, sale_payload(customer.id, product.id, amount="80"))
    assert sale.success
    assert sale.data.customer.id == customer.id
    assert sale.data.product.service == "T-Shirt"

    blocked = await mutations.delete_customer_action(db, customer.id)
    assert blocked.error_kind == ErrorKind.CONFLICT

    customers = (await read_views.fetch_customers(db)).data
    assert [s.id for s in customers[0].sales] == [sale.data.id]

    assert (await mutations.delete_sale_action(db, sale.data.id)).success
    assert (await mutations.delete_customer_action(db, customer.id)).success


async def test_bulk_delete_products(db):
    ids = [(await mutations.add_product_action(db, {**PRODUCT, "service": s})).data.id for s in "abc"]
    result = await mutations.bulk_delete_products_action(db, ids[:2] + [999])
    assert result.data == {"deleted": 2}

    empty = await mutations.bulk_delete_products_action(db, [])
    assert empty.error_kind == ErrorKind.VALIDATION


async def test_expense_actions(db):
    created = await mutations.add_expense_action(db, EXPENSE)
    assert created.data.recurring_period.value == "MONTHLY"

    invalid = await mutations.add_expense_action(db, {**EXPENSE, "recurringPeriod": None})
    assert invalid.error_kind == ErrorKind.VALIDATION

    updated = await mutations.update_expense_action(
        db, created.data.id, {**EXPENSE, "isRecurring": False, "type": "ONE_TIME"}
    )
    assert updated.data.recurring_period is None
    assert (await mutations.delete_expense_action(db, created.data.id)).success
    assert (await read_views.fetch_expense(db, created.data.id)).error_kind == ErrorKind.NOT_FOUND
