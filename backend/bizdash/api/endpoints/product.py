"""商品单数路径接口：价目表表单提交、按查询参数删除"""

from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from bizdash.api.responses import unwrap
from bizdash.core.deps import get_db
from bizdash.core.exceptions import ActionError, ErrorKind
from bizdash.schemas import MessageResponse, ProductResponse
from bizdash.services import mutations

router = APIRouter()


@router.post("", response_model=ProductResponse, status_code=status.HTTP_201_CREATED)
async def create_product(
    *,
    db: AsyncSession = Depends(get_db),
    payload: Any = Body(...),
) -> Any:
    """创建商品，字段缺失或价格无效返回 400"""
    result = await mutations.add_product_action(db, payload)
    if result.error_kind == ErrorKind.VALIDATION:
        return unwrap(result, "Missing or invalid required fields.")
    return unwrap(result)


@router.delete("", response_model=MessageResponse)
async def delete_product(
    *,
    db: AsyncSession = Depends(get_db),
    id: Optional[str] = Query(None, description="商品ID"),
) -> Any:
    """删除商品"""
    try:
        product_id = int(id) if id is not None else None
    except ValueError:
        product_id = None
    if product_id is None:
        raise ActionError.from_kind(ErrorKind.VALIDATION, "Invalid or missing ID")

    unwrap(await mutations.delete_product_action(db, product_id))
    return {"message": "Product deleted successfully"}
