from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Float, Integer, JSON, Numeric, String, Text

from app.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False, index=True)
    description = Column(Text, nullable=True)
    price = Column(Numeric(10, 2), nullable=False)
    category = Column(String(100), nullable=True)
    rating = Column(Float, nullable=False, default=0)

    tags = Column(JSON, nullable=False)
    image_url = Column(String(2048), nullable=False)
    sizes = Column(JSON, nullable=False)

    creation_date = Column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
