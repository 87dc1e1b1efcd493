"""客户Schema"""
from typing import Any, List, Optional, TYPE_CHECKING
from datetime import datetime

from pydantic import EmailStr, Field, field_validator

from bizdash.schemas.common import CamelModel, CustomerCategory, none_to_empty

# 延迟导入避免循环依赖，在 bizdash.schemas 中重建
if TYPE_CHECKING:
    from bizdash.schemas.sale import SaleResponse


class CustomerCreate(CamelModel):
    """创建客户"""
    name: str = Field(..., min_length=1, max_length=100, description="名称")
    email: EmailStr = Field(..., description="邮箱")
    phone: str = Field(default="", max_length=50, description="电话")
    company: str = Field(default="", max_length=200, description="公司")
    address: str = Field(default="", max_length=300, description="地址")
    category: CustomerCategory = Field(default=CustomerCategory.REGULAR, description="客户类别")

    @field_validator("phone", "company", "address", mode="before")
    @classmethod
    def fill_optional_text(cls, v: Any) -> Any:
        return none_to_empty(v)


class CustomerSchema(CustomerCreate):
    """完整客户（更新用，ID 可选）"""
    id: Optional[int] = Field(None, description="客户ID")


class CustomerResponse(CustomerCreate):
    """客户响应"""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class CustomerWithSales(CustomerResponse):
    """客户响应（含销售记录）"""
    sales: List["SaleResponse"] = Field(default_factory=list)
