"""接口层辅助：处理结果转响应、列表表格分页"""
from typing import Any, Iterable, Optional, Sequence

from bizdash.core.config import settings
from bizdash.core.exceptions import ActionError, ErrorKind
from bizdash.schemas import ActionResult
from bizdash.schemas.table import TablePageResponse
from bizdash.views import TableView


def unwrap(result: ActionResult, error: Optional[str] = None) -> Any:
    """成功返回 data，失败抛出 ActionError（error 可覆盖失败提示）"""
    if result.success:
        return result.data
    raise ActionError.from_kind(
        result.error_kind or ErrorKind.UNKNOWN,
        error or result.error or "Request failed",
        result.details,
    )


def table_response(
    rows: Iterable[Any],
    search_fields: Sequence[str],
    label: str,
    *,
    search: Optional[str] = None,
    category: Optional[str] = None,
    page: int = 1,
    page_size: Optional[int] = None,
    with_categories: bool = False,
) -> TablePageResponse:
    view = TableView.build(
        rows,
        search_fields,
        label=label,
        search=search or "",
        category=category,
        page=page,
        page_size=page_size if page_size is not None else settings.DEFAULT_PAGE_SIZE,
        max_page_size=settings.MAX_PAGE_SIZE,
    )
    current = view.current_page()
    return TablePageResponse(
        items=[item.model_dump(mode="json", by_alias=True) for item in current.items],
        page=current.page,
        page_size=current.page_size,
        total_pages=current.total_pages,
        total=current.total,
        start=current.start,
        end=current.end,
        search=view.search,
        category=view.category,
        categories=view.categories if with_categories else [],
        empty_message=current.empty_message,
    )
