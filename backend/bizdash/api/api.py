"""API 路由聚合（无认证）"""
from fastapi import APIRouter

from bizdash.api.endpoints import customers, expenses, product, products, sales, statistics

api_router = APIRouter()

api_router.include_router(products.router, prefix="/products", tags=["商品管理"])
# 单数路径：价目表表单直接调用的新增/删除接口
api_router.include_router(product.router, prefix="/product", tags=["商品管理"])
api_router.include_router(customers.router, prefix="/customers", tags=["客户管理"])
api_router.include_router(sales.router, prefix="/sales", tags=["销售管理"])
api_router.include_router(expenses.router, prefix="/expenses", tags=["费用管理"])
api_router.include_router(statistics.router, prefix="/statistics", tags=["统计报表"])
