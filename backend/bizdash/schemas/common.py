"""通用 Schema：驼峰字段基类、枚举、操作结果、输入校验"""
from decimal import Decimal
from enum import Enum
from typing import Annotated, Any, Dict, Optional, Tuple, Type, TypeVar

from pydantic import AfterValidator, BaseModel, Field, ValidationError
from pydantic.alias_generators import to_camel

from bizdash.core.exceptions import ErrorKind


class CamelModel(BaseModel):
    """对外字段使用驼峰命名（unitPrice、createdAt），输入同时接受蛇形命名"""

    class Config:
        alias_generator = to_camel
        populate_by_name = True
        str_strip_whitespace = True


# ========== 枚举 ==========

class CustomerCategory(str, Enum):
    REGULAR = "REGULAR"
    PREMIUM = "PREMIUM"
    SUBSCRIBER = "SUBSCRIBER"
    WHOLESALE = "WHOLESALE"


class PaymentMethod(str, Enum):
    CASH = "CASH"
    CARD = "CARD"
    TRANSFER = "TRANSFER"
    CREDIT = "CREDIT"


class SaleStatus(str, Enum):
    COMPLETED = "COMPLETED"
    PENDING = "PENDING"
    CANCELLED = "CANCELLED"


class ExpenseCategory(str, Enum):
    OPERATIONAL = "OPERATIONAL"
    INVENTORY = "INVENTORY"
    UTILITIES = "UTILITIES"
    MARKETING = "MARKETING"
    SALARY = "SALARY"
    RENT = "RENT"
    OTHER = "OTHER"


class ExpenseType(str, Enum):
    RECURRING = "RECURRING"
    ONE_TIME = "ONE_TIME"


class RecurringPeriod(str, Enum):
    DAILY = "DAILY"
    WEEKLY = "WEEKLY"
    MONTHLY = "MONTHLY"
    QUARTERLY = "QUARTERLY"
    ANNUALLY = "ANNUALLY"


# ========== 字段预处理 ==========

def none_to_empty(v: Any) -> Any:
    """可选文本字段：None 统一为空字符串"""
    return "" if v is None else v


def blank_to_none(v: Any) -> Any:
    """可选数值/枚举字段：空字符串统一为 None"""
    if isinstance(v, str) and not v.strip():
        return None
    return v


# ========== 金额 ==========

# 与数据库 DECIMAL(12, 2) 列一致
MONEY_MAX_DIGITS = 12
MONEY_DECIMAL_PLACES = 2


def check_money(v: float) -> float:
    """金额最多两位小数，整数部分不超过 10 位"""
    amount = Decimal(str(v))
    if amount.as_tuple().exponent < -MONEY_DECIMAL_PLACES:
        raise ValueError(f"Amount must have at most {MONEY_DECIMAL_PLACES} decimal places")
    if abs(amount) >= Decimal(10) ** (MONEY_MAX_DIGITS - MONEY_DECIMAL_PLACES):
        raise ValueError("Amount is too large")
    return v


# 输入用金额：正数、有限、精确到分
Money = Annotated[float, Field(gt=0, allow_inf_nan=False), AfterValidator(check_money)]


# ========== 操作结果 ==========

class ActionResult(BaseModel):
    """写操作/读视图的统一结果

    成功：success=True，data 为记录（或 None）
    失败：success=False，error_kind + error（+ details）
    """
    success: bool
    data: Any = None
    error_kind: Optional[ErrorKind] = None
    error: Optional[str] = None
    details: Optional[str] = None

    @classmethod
    def ok(cls, data: Any = None) -> "ActionResult":
        return cls(success=True, data=data)

    @classmethod
    def fail(cls, kind: ErrorKind, error: str, details: Optional[str] = None) -> "ActionResult":
        return cls(success=False, error_kind=kind, error=error, details=details)


class MessageResponse(BaseModel):
    message: str


M = TypeVar("M", bound=BaseModel)


def validate_payload(
    schema: Type[M], raw: Any
) -> Tuple[Optional[M], Optional[Dict[str, str]]]:
    """校验任意输入

    返回 (记录, None) 或 (None, {字段: 错误信息})，非法输入不抛异常
    """
    try:
        return schema.model_validate(raw), None
    except ValidationError as e:
        errors: Dict[str, str] = {}
        for err in e.errors():
            field = ".".join(str(part) for part in err.get("loc", ())) or "__root__"
            errors.setdefault(field, err.get("msg", "Invalid value"))
        return None, errors
