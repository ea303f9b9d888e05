from sqlalchemy import Column, ForeignKey, Integer
from sqlalchemy.orm import relationship

from models.base import Base


class OrderLine(Base):
    """
    Association between one purchase order and one product.
    A product appears at most once per order; the order service enforces this
    before writing, there is no unique constraint.
    """
    __tablename__ = "order_lines"
    __table_args__ = {"sqlite_autoincrement": True}  # never reuse line IDs

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    order_id = Column(Integer, ForeignKey("purchase_orders.id", ondelete="CASCADE"), nullable=False, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="RESTRICT"), nullable=False, index=True)

    product = relationship("Product", lazy="joined")
