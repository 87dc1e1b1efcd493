"""费用管理API"""

from typing import Any, List, Optional
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.api.responses import table_response, unwrap
from bizdash.core.deps import get_db
from bizdash.schemas import ExpenseResponse, MessageResponse
from bizdash.schemas.table import TablePageResponse
from bizdash.services import mutations, read_views
from bizdash.views import EXPENSE_SEARCH_FIELDS

router = APIRouter()


@router.get("", response_model=List[ExpenseResponse])
async def list_expenses(
    *,
    db: AsyncSession = Depends(get_db),
) -> Any:
    """获取费用列表（按创建时间倒序）"""
    return unwrap(await read_views.fetch_expenses(db), "Error fetching expenses")


@router.post("", response_model=ExpenseResponse, status_code=status.HTTP_201_CREATED)
async def create_expense(
    *,
    db: AsyncSession = Depends(get_db),
    payload: Any = Body(...),
) -> Any:
    """创建费用"""
    return unwrap(await mutations.add_expense_action(db, payload))


@router.get("/table", response_model=TablePageResponse)
async def expense_table(
    *,
    db: AsyncSession = Depends(get_db),
    search: Optional[str] = Query(None),
    page: int = Query(1),
    page_size: Optional[int] = Query(None, alias="pageSize"),
) -> Any:
    expenses = unwrap(await read_views.fetch_expenses(db), "Error fetching expenses")
    return table_response(
        expenses, EXPENSE_SEARCH_FIELDS, "expenses",
        search=search, page=page, page_size=page_size,
    )


@router.get("/{expense_id}", response_model=ExpenseResponse)
async def get_expense(
    *,
    db: AsyncSession = Depends(get_db),
    expense_id: int,
) -> Any:
    return unwrap(await read_views.fetch_expense(db, expense_id))


@router.put("/{expense_id}", response_model=ExpenseResponse)
async def update_expense(
    *,
    db: AsyncSession = Depends(get_db),
    expense_id: int,
    payload: Any = Body(...),
) -> Any:
    return unwrap(await mutations.update_expense_action(db, expense_id, payload))


@router.delete("/{expense_id}", response_model=MessageResponse)
async def delete_expense(
    *,
    db: AsyncSession = Depends(get_db),
    expense_id: int,
) -> Any:
    unwrap(await mutations.delete_expense_action(db, expense_id))
    return {"message": "Expense deleted successfully"}
