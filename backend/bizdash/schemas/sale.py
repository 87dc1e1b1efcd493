"""销售记录Schema"""
from typing import Any, Optional
from datetime import datetime

from pydantic import Field, field_validator

from bizdash.schemas.common import CamelModel, Money, PaymentMethod, SaleStatus, none_to_empty
from bizdash.schemas.customer import CustomerResponse
from bizdash.schemas.product import ProductResponse


class SaleBase(CamelModel):
    """销售记录字段（读取已存储记录时不做输入规则校验）"""
    customer_id: int
    product_id: int
    amount: float
    payment_method: PaymentMethod
    status: SaleStatus
    notes: str = ""


class SaleCreate(SaleBase):
    """创建销售记录"""
    customer_id: int = Field(..., gt=0, description="客户ID")
    product_id: int = Field(..., gt=0, description="商品ID")
    amount: Money = Field(..., description="金额")
    payment_method: PaymentMethod = Field(..., description="支付方式")
    status: SaleStatus = Field(..., description="状态")
    notes: str = Field(default="", description="备注")

    @field_validator("notes", mode="before")
    @classmethod
    def fill_notes(cls, v: Any) -> Any:
        return none_to_empty(v)


class SaleSchema(SaleCreate):
    """完整销售记录（更新用，ID 可选）"""
    id: Optional[int] = Field(None, description="销售记录ID")


class SaleResponse(SaleBase):
    """销售记录响应"""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class SaleWithRelations(SaleResponse):
    """销售记录响应（含客户和商品）"""
    customer: CustomerResponse
    product: ProductResponse
