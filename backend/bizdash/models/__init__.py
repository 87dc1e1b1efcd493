# 数据模型
# 客户、商品各自一对多关联销售记录；费用独立

from bizdash.models.product import Product
from bizdash.models.customer import Customer
from bizdash.models.sale import Sale
from bizdash.models.expense import Expense

__all__ = [
    "Product",
    "Customer",
    "Sale",
    "Expense",
]
