"""销售记录模型"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, DECIMAL
from sqlalchemy.orm import relationship
from bizdash.db.base import Base


class Sale(Base):
    """销售记录

    每条销售记录引用且仅引用一个客户和一个商品，
    被引用的客户/商品不允许删除（ON DELETE RESTRICT）
    """
    __tablename__ = "sales"

    id = Column(Integer, primary_key=True, index=True)

    amount = Column(DECIMAL(12, 2), nullable=False, comment="金额")
    # CASH / CARD / TRANSFER / CREDIT
    payment_method = Column(String(20), nullable=False, comment="支付方式")
    # COMPLETED / PENDING / CANCELLED
    status = Column(String(20), nullable=False, default="COMPLETED", comment="状态")
    notes = Column(Text, nullable=False, default="", comment="备注")

    customer_id = Column(
        Integer, ForeignKey("customers.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    product_id = Column(
        Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True
    )

    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
    updated_at = Column(DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    # 关系
    customer = relationship("Customer", back_populates="sales")
    product = relationship("Product", back_populates="sales")

    def __repr__(self):
        return f"<Sale {self.id}: {self.amount} {self.payment_method} ({self.status})>"
