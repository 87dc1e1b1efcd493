"""商品（价目表）Schema"""
from typing import Any, List, Optional
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from bizdash.schemas.common import CamelModel, Money, blank_to_none, none_to_empty


class ProductBase(CamelModel):
    """商品字段（读取已存储记录时不做输入规则校验）"""
    category: str
    service: str
    size: str = ""
    unit_price: float
    bulk_price: Optional[float] = None
    turnaround_time: str = ""
    notes: str = ""


class ProductCreate(ProductBase):
    """创建商品（无ID）"""
    category: str = Field(..., min_length=1, max_length=100, description="分类")
    service: str = Field(..., min_length=1, max_length=200, description="服务项目")
    size: str = Field(default="", max_length=100, description="尺寸/规格")
    unit_price: Money = Field(..., description="单价")
    bulk_price: Optional[Money] = Field(None, description="批量价")
    turnaround_time: str = Field(default="", max_length=100, description="交付周期")
    notes: str = Field(default="", description="备注")

    @field_validator("size", "turnaround_time", "notes", mode="before")
    @classmethod
    def fill_optional_text(cls, v: Any) -> Any:
        return none_to_empty(v)

    @field_validator("bulk_price", mode="before")
    @classmethod
    def empty_bulk_price(cls, v: Any) -> Any:
        """表单未填写批量价时为空字符串"""
        return blank_to_none(v)


class ProductSchema(ProductCreate):
    """完整商品（更新用，ID 可选）"""
    id: Optional[int] = Field(None, description="商品ID")


class ProductResponse(ProductBase):
    """商品响应"""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class BulkDeleteRequest(BaseModel):
    ids: List[int] = Field(..., min_length=1, description="商品ID列表")


class CategoryListResponse(BaseModel):
    categories: List[str]
