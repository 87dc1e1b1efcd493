from bizdash.core.exceptions import GENERIC_VALIDATION_ERROR

from tests.factories import CUSTOMER, EXPENSE, PRODUCT, sale_payload


def create(client, path, payload):
    response = client.post(f"/api/{path}", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_price_list_form_submission(client):
    response = client.post("/api/product", json=PRODUCT)
    assert response.status_code == 201
    body = response.json()
    assert body["service"] == "T-Shirt"
    assert body["unitPrice"] == 19.99
    assert "createdAt" in body

    listed = client.get("/api/products").json()
    assert [p["id"] for p in listed] == [body["id"]]


def test_price_list_form_rejects_missing_fields(client):
    response = client.post("/api/product", json={"service": "T-Shirt"})
    assert response.status_code == 400
    assert response.json() == {"error": "Missing or invalid required fields."}
    assert client.get("/api/products").json() == []


def test_delete_by_query_parameter(client):
    product = create(client, "products", PRODUCT)

    assert client.delete("/api/product", params={"id": "abc"}).status_code == 400
    assert client.delete("/api/product").json() == {"error": "Invalid or missing ID"}

    response = client.delete("/api/product", params={"id": str(product["id"])})
    assert response.status_code == 200
    assert response.json() == {"message": "Product deleted successfully"}
    assert client.delete("/api/product", params={"id": str(product["id"])}).status_code == 404


def test_product_crud_by_id(client):
    product = create(client, "products", PRODUCT)
    url = f"/api/products/{product['id']}"

    assert client.get(url).json()["service"] == "T-Shirt"

    updated = client.put(url, json={**PRODUCT, "service": "Hoodie"})
    assert updated.status_code == 200
    assert updated.json()["service"] == "Hoodie"
    assert client.get("/api/products").json()[0]["service"] == "Hoodie"

    assert client.delete(url).status_code == 200
    missing = client.get(url)
    assert missing.status_code == 404
    assert missing.json() == {"error": "Product not found"}


def test_invalid_customer_email(client):
    response = client.post("/api/customers", json={**CUSTOMER, "email": "not-an-email"})
    assert response.status_code == 400
    assert response.json() == {"error": GENERIC_VALIDATION_ERROR}


def test_malformed_json_body(client):
    response = client.post(
        "/api/customers", content="{not json", headers={"Content-Type": "application/json"}
    )
    assert response.status_code == 400
    assert response.json() == {"error": GENERIC_VALIDATION_ERROR}


def test_sales_include_customer_and_product(client):
    customer = create(client, "customers", CUSTOMER)
    product = create(client, "products", PRODUCT)
    sale = create(client, "sales", sale_payload(customer["id"], product["id"], amount="45.5"))

    assert sale["customer"]["name"] == "Jane Doe"
    assert sale["product"]["service"] == "T-Shirt"
    assert sale["amount"] == 45.5

    listed = client.get("/api/sales").json()
    assert listed[0]["customer"]["email"] == "jane@acme.co"

    customers = client.get("/api/customers").json()
    assert [s["id"] for s in customers[0]["sales"]] == [sale["id"]]


def test_referenced_customer_cannot_be_deleted(client):
    customer = create(client, "customers", CUSTOMER)
    product = create(client, "products", PRODUCT)
    create(client, "sales", sale_payload(customer["id"], product["id"]))

    response = client.delete(f"/api/customers/{customer['id']}")
    assert response.status_code == 409
    assert "error" in response.json()
    assert client.delete(f"/api/products/{product['id']}").status_code == 409
    assert len(client.get("/api/customers").json()) == 1


def test_sale_with_unknown_references(client):
    response = client.post("/api/sales", json=sale_payload(7, 8))
    assert response.status_code == 500
    assert response.json()["error"].startswith("Database error:")


def test_expense_recurring_rules(client):
    created = create(client, "expenses", EXPENSE)
    assert created["recurringPeriod"] == "MONTHLY"

    response = client.post("/api/expenses", json={**EXPENSE, "recurringPeriod": None})
    assert response.status_code == 400


def test_product_table_clamps_page(client):
    for i in range(23):
        create(client, "products", {**PRODUCT, "service": f"Service {i}"})

    body = client.get("/api/products/table", params={"page": 4}).json()
    assert body["page"] == 3
    assert body["totalPages"] == 3
    assert body["total"] == 23
    assert len(body["items"]) == 3
    assert (body["start"], body["end"]) == (21, 23)
    assert body["categories"] == ["Apparel"]

    sized = client.get("/api/products/table", params={"pageSize": 5}).json()
    assert len(sized["items"]) == 5
    assert sized["totalPages"] == 5


def test_product_table_no_match(client):
    create(client, "products", PRODUCT)
    body = client.get("/api/products/table", params={"search": "zzz"}).json()
    assert body["items"] == []
    assert body["total"] == 0
    assert body["emptyMessage"] == 'No products found for "zzz".'


def test_categories_and_bulk_delete(client):
    ids = [
        create(client, "products", {**PRODUCT, "category": c})["id"]
        for c in ("Print", "Apparel", "Print")
    ]
    assert client.get("/api/products/categories").json() == {"categories": ["Apparel", "Print"]}

    response = client.request("DELETE", "/api/products/bulk-delete", json={"ids": ids[:2]})
    assert response.status_code == 200
    assert response.json()["deleted"] == 2
    assert [p["id"] for p in client.get("/api/products").json()] == [ids[2]]

    empty = client.request("DELETE", "/api/products/bulk-delete", json={"ids": []})
    assert empty.status_code == 400


def test_statistics(client):
    for price in (10, 20, 30):
        create(client, "products", {**PRODUCT, "unitPrice": price, "bulkPrice": None})
    customer = create(client, "customers", CUSTOMER)
    products = client.get("/api/products").json()
    create(client, "sales", sale_payload(customer["id"], products[0]["id"], amount=500))
    create(client, "expenses", {**EXPENSE, "amount": 120})

    price_stats = client.get("/api/statistics/products").json()
    assert price_stats["total"] == 3
    assert price_stats["averageUnitPrice"] == 20
    assert price_stats["averageBulkPrice"] == 0

    dashboard = client.get("/api/statistics/dashboard").json()
    assert dashboard == {
        "totalSales": 500,
        "totalCustomers": 1,
        "totalExpenses": 120,
        "netProfit": 380,
    }


def test_sub_cent_price_is_rejected_and_listing_stays_readable(client):
    create(client, "products", PRODUCT)

    response = client.post("/api/products", json={**PRODUCT, "unitPrice": "0.001"})
    assert response.status_code == 400
    assert response.json() == {"error": GENERIC_VALIDATION_ERROR}

    listed = client.get("/api/products")
    assert listed.status_code == 200
    assert len(listed.json()) == 1
    assert client.get("/api/statistics/products").status_code == 200


def test_sub_cent_amounts_are_rejected(client):
    customer = create(client, "customers", CUSTOMER)
    product = create(client, "products", PRODUCT)

    sale = client.post("/api/sales", json=sale_payload(customer["id"], product["id"], amount=0.004))
    assert sale.status_code == 400
    expense = client.post("/api/expenses", json={**EXPENSE, "amount": "0.001"})
    assert expense.status_code == 400

    assert client.get("/api/sales").json() == []
    assert client.get("/api/expenses").json() == []


def test_table_page_size_zero_is_clamped(client):
    for i in range(3):
        create(client, "products", {**PRODUCT, "service": f"Service {i}"})

    zero = client.get("/api/products/table", params={"pageSize": 0}).json()
    assert zero["pageSize"] == 1
    assert len(zero["items"]) == 1
    assert zero["totalPages"] == 3

    negative = client.get("/api/products/table", params={"pageSize": -1}).json()
    assert negative["pageSize"] == 1
