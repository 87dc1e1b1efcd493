"""列表表格分页响应"""
from typing import Any, List, Optional

from pydantic import Field

from bizdash.schemas.common import CamelModel


class TablePageResponse(CamelModel):
    """一页表格数据

    start/end 为 1 起始的显示区间（"Showing start to end of total"）
    """
    items: List[Any] = Field(default_factory=list)
    page: int
    page_size: int
    total_pages: int
    total: int
    start: int
    end: int
    search: str = ""
    category: Optional[str] = None
    categories: List[str] = Field(default_factory=list)
    empty_message: Optional[str] = None
