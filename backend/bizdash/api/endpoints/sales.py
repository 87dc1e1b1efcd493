"""销售管理API"""

from typing import Any, List, Optional
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.api.responses import table_response, unwrap
from bizdash.core.deps import get_db
from bizdash.schemas import MessageResponse, SaleWithRelations
from bizdash.schemas.table import TablePageResponse
from bizdash.services import mutations, read_views
from bizdash.views import SALE_SEARCH_FIELDS

router = APIRouter()


@router.get("", response_model=List[SaleWithRelations])
async def list_sales(
    *,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """获取销售记录（含客户和商品）"""
    return unwrap(await read_views.fetch_sales(db), "Error fetching sales")


@router.post("", response_model=SaleWithRelations, status_code=status.HTTP_201_CREATED)
async def create_sale(
    *,
    db: AsyncSession = Depends(get_db),
    payload: Any = Body(...),
) -> Any:
    """创建销售记录"""
    return unwrap(await mutations.add_sale_action(db, payload))


@router.get("/table", response_model=TablePageResponse)
async def sale_table(
    *,
    db: AsyncSession = Depends(get_db),
    search: Optional[str] = Query(None),
    page: int = Query(1),
    page_size: Optional[int] = Query(None, alias="pageSize"),
) -> Any:
    sales = unwrap(await read_views.fetch_sales(db), "Error fetching sales")
    return table_response(
        sales, SALE_SEARCH_FIELDS, "sales",
        search=search, page=page, page_size=page_size,
    )


@router.get("/{sale_id}", response_model=SaleWithRelations)
async def get_sale(
    *,
    db: AsyncSession = Depends(get_db),
    sale_id: int,
) -> Any:
    return unwrap(await read_views.fetch_sale(db, sale_id))


@router.put("/{sale_id}", response_model=SaleWithRelations)
async def update_sale(
    *,
    db: AsyncSession = Depends(get_db),
    sale_id: int,
    payload: Any = Body(...),
) -> Any:
    return unwrap(await mutations.update_sale_action(db, sale_id, payload))


@router.delete("/{sale_id}", response_model=MessageResponse)
async def delete_sale(
    *,
    db: AsyncSession = Depends(get_db),
    sale_id: int,
) -> Any:
    unwrap(await mutations.delete_sale_action(db, sale_id))
    return {"message": "Sale deleted successfully"}
