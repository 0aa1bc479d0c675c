from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Numeric, JSON
from datetime import datetime, timezone

from app.data.database import Base

class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=True, index=True)  # None dla gosci

    # snapshot pozycji: [{product_id, quantity, size?}]
    products = Column(JSON, nullable=False)
    total = Column(Numeric(10, 2), nullable=False)
    shipping_info = Column(JSON, nullable=False)
    size = Column(String(3), nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
