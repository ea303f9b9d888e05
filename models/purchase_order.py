from sqlalchemy import Column, DateTime, Integer, Numeric, String, func
from sqlalchemy.orm import relationship

from models.base import Base


class PurchaseOrder(Base):
    """
    Purchase order aggregate. `total` is derived from the lines and is
    recomputed by the order service whenever the line set changes.
    """
    __tablename__ = "purchase_orders"
    __table_args__ = {"sqlite_autoincrement": True}

    id = Column(Integer, primary_key=True, autoincrement=True, index=True)
    customer_name = Column(String(100), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    total = Column(Numeric(18, 2), nullable=False, server_default="0")

    lines = relationship(
        "OrderLine",
        passive_deletes=True,
        order_by="OrderLine.id",
        lazy="selectin",
    )
