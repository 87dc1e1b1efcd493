"""费用支出模型"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime, DECIMAL
from bizdash.db.base import Base


class Expense(Base):
    """费用支出"""
    __tablename__ = "expenses"

    id = Column(Integer, primary_key=True, index=True)

    amount = Column(DECIMAL(12, 2), nullable=False, comment="金额")
    # OPERATIONAL / INVENTORY / UTILITIES / MARKETING / SALARY / RENT / OTHER
    category = Column(String(20), nullable=False, comment="费用类别")
    # RECURRING / ONE_TIME
    type = Column(String(20), nullable=False, comment="费用类型")
    description = Column(Text, nullable=False, comment="说明")

    # 周期性费用
    is_recurring = Column(Boolean, nullable=False, default=False, comment="是否周期性")
    recurring_period = Column(String(20), nullable=True, comment="周期：DAILY/WEEKLY/MONTHLY/QUARTERLY/ANNUALLY")

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    def __repr__(self):
        return f"<Expense {self.id}: {self.amount} {self.category}>"
