from bizdash.schemas.common import ActionResult, CamelModel, MessageResponse, validate_payload
from bizdash.schemas.product import (
    ProductCreate, ProductSchema, ProductResponse, BulkDeleteRequest, CategoryListResponse
)
from bizdash.schemas.customer import (
    CustomerCreate, CustomerSchema, CustomerResponse, CustomerWithSales
)
from bizdash.schemas.sale import SaleCreate, SaleSchema, SaleResponse, SaleWithRelations
from bizdash.schemas.expense import ExpenseCreate, ExpenseSchema, ExpenseResponse

# 客户响应中的销售记录为前向引用
CustomerWithSales.model_rebuild(_types_namespace={"SaleResponse": SaleResponse})

__all__ = [
    "ActionResult",
    "CamelModel",
    "MessageResponse",
    "validate_payload",
    "ProductCreate",
    "ProductSchema",
    "ProductResponse",
    "BulkDeleteRequest",
    "CategoryListResponse",
    "CustomerCreate",
    "CustomerSchema",
    "CustomerResponse",
    "CustomerWithSales",
    "SaleCreate",
    "SaleSchema",
    "SaleResponse",
    "SaleWithRelations",
    "ExpenseCreate",
    "ExpenseSchema",
    "ExpenseResponse",
]
