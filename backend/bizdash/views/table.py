"""
列表表格视图模型

对内存中的完整列表做搜索和分页。视图对象不可变：
快照在构造时固定为 tuple，搜索/翻页都返回新的视图对象。

- 搜索：在指定字段上做不区分大小写的子串匹配
- 修改搜索词、分类或每页条数时回到第 1 页
- 页码限制在 [1, max(1, ceil(筛选后条数 / 每页条数))]
"""

import math
from dataclasses import dataclass, field, replace
from typing import Any, Iterable, Mapping, Optional, Sequence, Tuple

PRODUCT_SEARCH_FIELDS = ("category", "service", "size", "turnaround_time", "notes")
CUSTOMER_SEARCH_FIELDS = ("name", "email", "company", "category")
SALE_SEARCH_FIELDS = ("customer.name", "product.service", "status", "payment_method", "notes")
EXPENSE_SEARCH_FIELDS = ("description", "category", "type")

ALL_CATEGORIES = "all"


def field_value(row: Any, path: str) -> Any:
    """按点分路径取值，支持字典和对象（如 customer.name）"""
    value = row
    for part in path.split("."):
        if value is None:
            return None
        if isinstance(value, Mapping):
            value = value.get(part)
        else:
            value = getattr(value, part, None)
    return getattr(value, "value", value)


def matches(row: Any, term: str, fields: Sequence[str]) -> bool:
    term = term.strip().lower()
    if not term:
        return True
    for path in fields:
        value = field_value(row, path)
        if value is not None and term in str(value).lower():
            return True
    return False


def filter_rows(
    rows: Iterable[Any],
    term: str,
    fields: Sequence[str],
    category: Optional[str] = None,
    category_field: str = "category",
) -> Tuple[Any, ...]:
    """搜索 + 分类精确筛选，返回新的 tuple"""
    check_category = bool(category) and category != ALL_CATEGORIES
    return tuple(
        row for row in rows
        if matches(row, term or "", fields)
        and (not check_category or field_value(row, category_field) == category)
    )


def count_pages(count: int, page_size: int) -> int:
    return math.ceil(count / page_size) if page_size > 0 else 0


def clamp_page(page: int, pages: int) -> int:
    return max(1, min(page, max(1, pages)))


def clamp_page_size(page_size: int, max_page_size: int) -> int:
    return max(1, min(page_size, max_page_size))


def paginate(rows: Sequence[Any], page: int, page_size: int) -> Tuple[Any, ...]:
    start = (page - 1) * page_size
    end = start + page_size
    return tuple(rows[start:end])


@dataclass(frozen=True)
class TablePage:
    """当前页"""
    items: Tuple[Any, ...]
    page: int
    page_size: int
    total_pages: int
    total: int
    start: int
    end: int
    empty_message: Optional[str] = None


@dataclass(frozen=True)
class TableView:
    """列表快照 + 搜索/分页状态"""
    rows: Tuple[Any, ...]
    search_fields: Tuple[str, ...]
    label: str = "records"
    search: str = ""
    category: Optional[str] = None
    page: int = 1
    page_size: int = 10
    max_page_size: int = 100
    category_field: str = field(default="category", repr=False)

    @classmethod
    def build(
        cls,
        rows: Iterable[Any],
        search_fields: Sequence[str],
        label: str = "records",
        search: str = "",
        category: Optional[str] = None,
        page: int = 1,
        page_size: int = 10,
        max_page_size: int = 100,
    ) -> "TableView":
        view = cls(
            rows=tuple(rows),
            search_fields=tuple(search_fields),
            label=label,
            search=search or "",
            category=category,
            page_size=clamp_page_size(page_size, max_page_size),
            max_page_size=max_page_size,
        )
        return view.goto(page)

    @property
    def filtered(self) -> Tuple[Any, ...]:
        return filter_rows(
            self.rows, self.search, self.search_fields, self.category, self.category_field
        )

    @property
    def total_pages(self) -> int:
        return count_pages(len(self.filtered), self.page_size)

    @property
    def categories(self) -> list:
        """分类筛选项，取自完整快照"""
        values = {field_value(row, self.category_field) for row in self.rows}
        return sorted(str(v) for v in values if v)

    def with_search(self, term: str) -> "TableView":
        return replace(self, search=term or "", page=1)

    def with_category(self, category: Optional[str]) -> "TableView":
        return replace(self, category=category, page=1)

    def with_page_size(self, page_size: int) -> "TableView":
        return replace(self, page_size=clamp_page_size(page_size, self.max_page_size), page=1)

    def goto(self, page: int) -> "TableView":
        return replace(self, page=clamp_page(page, self.total_pages))

    def next_page(self) -> "TableView":
        return self.goto(self.page + 1)

    def previous_page(self) -> "TableView":
        return self.goto(self.page - 1)

    def first_page(self) -> "TableView":
        return self.goto(1)

    def last_page(self) -> "TableView":
        return self.goto(self.total_pages)

    def current_page(self) -> TablePage:
        filtered = self.filtered
        pages = count_pages(len(filtered), self.page_size)
        page = clamp_page(self.page, pages)
        items = paginate(filtered, page, self.page_size)
        start = (page - 1) * self.page_size
        empty_message = None
        if not items:
            empty_message = f"No {self.label} found"
            if self.search:
                empty_message += f' for "{self.search}"'
            empty_message += "."
        return TablePage(
            items=items,
            page=page,
            page_size=self.page_size,
            total_pages=pages,
            total=len(filtered),
            start=start + 1 if items else 0,
            end=start + len(items),
            empty_message=empty_message,
        )
