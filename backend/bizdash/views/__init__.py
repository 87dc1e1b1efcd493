from bizdash.views.table import (
    TablePage, TableView,
    PRODUCT_SEARCH_FIELDS, CUSTOMER_SEARCH_FIELDS, SALE_SEARCH_FIELDS, EXPENSE_SEARCH_FIELDS,
)

__all__ = [
    "TablePage",
    "TableView",
    "PRODUCT_SEARCH_FIELDS",
    "CUSTOMER_SEARCH_FIELDS",
    "SALE_SEARCH_FIELDS",
    "EXPENSE_SEARCH_FIELDS",
]
