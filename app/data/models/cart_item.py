from sqlalchemy import Column, Integer, ForeignKey, String
from sqlalchemy.orm import relationship

from app.data.database import Base


class CartItemModel(Base):
    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), nullable=False, index=True)
    # bez FK - produkt moze zostac usuniety, pozycja zostaje
    product_id = Column(Integer, nullable=False)

    quantity = Column(Integer, nullable=False)
    size = Column(String(3), nullable=False)

    cart = relationship("CartModel", back_populates="items")
