from sqlalchemy import Boolean, Column, Integer, JSON, String

from app.data.database import Base


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(100), nullable=False, unique=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)

    # osadzone rekordy: {cardNumber, cardHolderName, expiryDate, cvv} / {address, state, zipcode, city}
    saved_payment_info = Column(JSON, nullable=False)
    shipping_info = Column(JSON, nullable=False)

    is_admin = Column(Boolean, nullable=False, default=False)
