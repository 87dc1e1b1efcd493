"""费用支出Schema"""
from typing import Any, Optional
from datetime import datetime

from pydantic import Field, ValidationInfo, field_validator

from bizdash.schemas.common import (
    CamelModel, ExpenseCategory, ExpenseType, Money, RecurringPeriod, blank_to_none
)


class ExpenseBase(CamelModel):
    """费用字段（读取已存储记录时不做输入规则校验）"""
    amount: float
    category: ExpenseCategory
    type: ExpenseType
    description: str
    is_recurring: bool = False
    recurring_period: Optional[RecurringPeriod] = None


class ExpenseCreate(ExpenseBase):
    """创建费用

    周期性费用必须指定周期；非周期性费用的周期一律置空
    """
    amount: Money = Field(..., description="金额")
    category: ExpenseCategory = Field(..., description="费用类别")
    type: ExpenseType = Field(..., description="费用类型")
    description: str = Field(..., min_length=1, description="说明")
    is_recurring: bool = Field(default=False, description="是否周期性")
    recurring_period: Optional[RecurringPeriod] = Field(
        None, validate_default=True, description="周期"
    )

    @field_validator("is_recurring", mode="before")
    @classmethod
    def default_recurring(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("recurring_period", mode="before")
    @classmethod
    def empty_period(cls, v: Any) -> Any:
        return blank_to_none(v)

    @field_validator("recurring_period")
    @classmethod
    def check_period(cls, v: Optional[RecurringPeriod], info: ValidationInfo) -> Optional[RecurringPeriod]:
        if info.data.get("is_recurring"):
            if v is None:
                raise ValueError("Recurring period is required for recurring expenses")
            return v
        return None


class ExpenseSchema(ExpenseCreate):
    """完整费用（更新用，ID 可选）"""
    id: Optional[int] = Field(None, description="费用ID")


class ExpenseResponse(ExpenseBase):
    """费用响应"""
    id: int
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
