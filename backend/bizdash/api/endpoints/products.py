"""商品（价目表）API"""

from typing import Any, List, Optional
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.api.responses import table_response, unwrap
from bizdash.core.deps import get_db
from bizdash.schemas import (
    BulkDeleteRequest, CategoryListResponse, MessageResponse, ProductResponse
)
from bizdash.schemas.table import TablePageResponse
from bizdash.services import mutations, read_views
from bizdash.views import PRODUCT_SEARCH_FIELDS

router = APIRouter()


@router.get("", response_model=List[ProductResponse])
async def list_products(
    *,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """获取商品列表（按创建时间倒序）"""
    return unwrap(await read_views.fetch_products(db), "Error fetching products")


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    *,
    db: AsyncSession = Depends(get_db),
    payload: Any = Body(...),
) -> Any:
    """创建商品"""
    return unwrap(await mutations.add_product_action(db, payload))


@router.get("/categories", response_model=CategoryListResponse)
async def list_categories(
    *,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """获取所有分类"""
    categories = unwrap(await read_views.fetch_product_categories(db))
    return {"categories": categories}


@router.get("/table", response_model=TablePageResponse)
async def product_table(
    *,
    db: AsyncSession = Depends(get_db),
    search: Optional[str] = Query(None, description="搜索"),
    category: Optional[str] = Query(None, description="分类筛选，all 表示全部"),
    page: int = Query(1, description="页码"),
    page_size: Optional[int] = Query(None, alias="pageSize", description="每页条数"),
) -> Any:
    """价目表表格：搜索 + 分类筛选 + 分页"""
    products = unwrap(await read_views.fetch_products(db), "Error fetching products")
    return table_response(
        products,
        PRODUCT_SEARCH_FIELDS,
        "products",
        search=search,
        category=category,
        page=page,
        page_size=page_size,
        with_categories=True,
    )


@router.delete("/bulk-delete")
async def bulk_delete_products(
    *,
    db: AsyncSession = Depends(get_db),
    request: BulkDeleteRequest,
) -> Any:
    """批量删除商品"""
    result = unwrap(await mutations.bulk_delete_products_action(db, request.ids))
    return {"message": f"Deleted {result['deleted']} products", "deleted": result["deleted"]}


@router.get("/{product_id}", response_model=ProductResponse)
async def get_product(
    *,
    db: AsyncSession = Depends(get_db),
    product_id: int,
) -> Any:
    """获取商品详情"""
    return unwrap(await read_views.fetch_product(db, product_id))


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    *,
    db: AsyncSession = Depends(get_db),
    product_id: int,
    payload: Any = Body(...),
) -> Any:
    """更新商品（整体替换）"""
    return unwrap(await mutations.update_product_action(db, product_id, payload))


@router.delete("/{product_id}", response_model=MessageResponse)
async def delete_product(
    *,
    db: AsyncSession = Depends(get_db),
    product_id: int,
) -> Any:
    """删除商品（被销售记录引用时禁止删除）"""
    unwrap(await mutations.delete_product_action(db, product_id))
    return {"message": "Product deleted successfully"}
