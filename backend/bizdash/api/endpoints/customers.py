"""客户管理API"""

from typing import Any, List, Optional
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.api.responses import table_response, unwrap
from bizdash.core.deps import get_db
from bizdash.schemas import CustomerResponse, CustomerWithSales, MessageResponse
from bizdash.schemas.table import TablePageResponse
from bizdash.services import mutations, read_views
from bizdash.views import CUSTOMER_SEARCH_FIELDS

router = APIRouter()


@router.get("", response_model=List[CustomerWithSales])
async def list_customers(
    *,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """获取客户列表（含销售记录）"""
    return unwrap(await read_views.fetch_customers(db), "Error fetching customers")


@router.post("", response_model=CustomerResponse, status_code=status.HTTP_201_CREATED)
async def create_customer(
    *,
    db: AsyncSession = Depends(get_db),
    payload: Any = Body(...),
) -> Any:
    """创建客户"""
    return unwrap(await mutations.add_customer_action(db, payload))


@router.get("/table", response_model=TablePageResponse)
async def customer_table(
    *,
    db: AsyncSession = Depends(get_db),
    search: Optional[str] = Query(None),
    page: int = Query(1),
    page_size: Optional[int] = Query(None, alias="pageSize"),
) -> Any:
    """客户表格：搜索 + 分页"""
    customers = unwrap(await read_views.fetch_customers(db), "Error fetching customers")
    return table_response(
        customers, CUSTOMER_SEARCH_FIELDS, "customers",
        search=search, page=page, page_size=page_size,
    )


@router.get("/{customer_id}", response_model=CustomerWithSales)
async def get_customer(
    *,
    db: AsyncSession = Depends(get_db),
    customer_id: int,
) -> Any:
    return unwrap(await read_views.fetch_customer(db, customer_id))


@router.put("/{customer_id}", response_model=CustomerResponse)
async def update_customer(
    *,
    db: AsyncSession = Depends(get_db),
    customer_id: int,
    payload: Any = Body(...),
) -> Any:
    return unwrap(await mutations.update_customer_action(db, customer_id, payload))


@router.delete("/{customer_id}", response_model=MessageResponse)
async def delete_customer(
    *,
    db: AsyncSession = Depends(get_db),
    customer_id: int,
) -> Any:
    """删除客户（有销售记录时禁止删除）"""
    unwrap(await mutations.delete_customer_action(db, customer_id))
    return {"message": "Customer deleted successfully"}
