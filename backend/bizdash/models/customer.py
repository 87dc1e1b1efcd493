"""客户模型"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from bizdash.db.base import Base


class Customer(Base):
    """客户"""
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)

    name = Column(String(100), nullable=False, index=True, comment="名称")
    email = Column(String(254), nullable=False, comment="邮箱")

    # 联系信息
    phone = Column(String(50), nullable=False, default="", comment="电话")
    company = Column(String(200), nullable=False, default="", comment="公司")
    address = Column(String(300), nullable=False, default="", comment="地址")

    # REGULAR / PREMIUM / SUBSCRIBER / WHOLESALE
    category = Column(String(20), nullable=False, default="REGULAR", comment="客户类别")

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 关系
    sales = relationship("Sale", back_populates="customer", passive_deletes="all")

    def __repr__(self):
        return f"<Customer {self.id}: {self.name} ({self.category})>"
