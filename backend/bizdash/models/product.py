"""
商品/价目表模型
一条记录即价目表中的一项服务报价
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, DECIMAL
from sqlalchemy.orm import relationship
from bizdash.db.base import Base


class Product(Base):
    """商品 - 价目表条目"""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)

    category = Column(String(100), nullable=False, index=True, comment="分类")
    service = Column(String(200), nullable=False, comment="服务项目")
    size = Column(String(100), nullable=False, default="", comment="尺寸/规格")

    # 价格
    unit_price = Column(DECIMAL(12, 2), nullable=False, comment="单价")
    bulk_price = Column(DECIMAL(12, 2), nullable=True, comment="批量价")

    turnaround_time = Column(String(100), nullable=False, default="", comment="交付周期")
    notes = Column(Text, nullable=False, default="", comment="备注")

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 关系（仅反向引用，销售单不归商品所有）
    sales = relationship("Sale", back_populates="product", passive_deletes="all")

    def __repr__(self):
        return f"<Product {self.id}: {self.category}/{self.service} ({self.size})>"
