# app/domain/schemas.py
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Annotated, List, Optional

from pydantic import (
    AnyHttpUrl,
    BaseModel,
    ConfigDict,
    EmailStr,
    Field,
    PlainSerializer,
    field_validator,
)
from pydantic.alias_generators import to_camel

from app.utils.luhn import validate_luhn

CARD_NUMBER_PATTERN = r"^\d{13,19}$"
EXPIRY_PATTERN = r"^(0[1-9]|1[0-2])/?([0-9]{2})$"
CVV_PATTERN = r"^\d{3,4}$"
ZIPCODE_PATTERN = r"^\d{5}(-\d{4})?$"

MAX_QUANTITY = 10_000

# w bazie Decimal, w JSON liczba (klient robi toFixed na kwotach)
Money = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class Size(str, Enum):
    XS = "XS"
    S = "S"
    M = "M"
    L = "L"
    XL = "XL"
    XXL = "XXL"


class ApiModel(BaseModel):
    """Na zewnatrz camelCase (savedPaymentInfo, imageUrl), w kodzie snake_case."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReadModel(ApiModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# --- platnosci i wysylka ---

class PaymentInfo(ApiModel):
    """Schema dla danych karty, walidacja formatu + Luhn."""

    card_number: str = Field(..., pattern=CARD_NUMBER_PATTERN)
    card_holder_name: str = Field(..., min_length=1)
    expiry_date: str = Field(..., pattern=EXPIRY_PATTERN, description="MM/YY")
    cvv: str = Field(..., pattern=CVV_PATTERN)

    @field_validator("card_number")
    @classmethod
    def card_number_passes_luhn(cls, v: str) -> str:
        if not validate_luhn(v):
            raise ValueError("Invalid credit card number.")
        return v


class ShippingInfo(ApiModel):
    address: str = Field(..., min_length=1)
    state: str = Field(..., min_length=1)
    zipcode: str = Field(..., pattern=ZIPCODE_PATTERN)
    city: str = Field(..., min_length=1)


# --- konto ---

class RegisterIn(ApiModel):
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)
    saved_payment_info: PaymentInfo
    shipping_info: ShippingInfo


class LoginIn(ApiModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class TokenOut(ApiModel):
    token: str


class AccountUpdateIn(ApiModel):
    username: Optional[str] = Field(default=None, min_length=3, max_length=100)
    email: Optional[EmailStr] = None
    password: Optional[str] = Field(default=None, min_length=6)
    saved_payment_info: Optional[PaymentInfo] = None
    shipping_info: Optional[ShippingInfo] = None


class SavePaymentIn(ApiModel):
    saved_payment_info: PaymentInfo


class AdminCreateIn(ApiModel):
    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6)


class UserSummary(ReadModel):
    id: int
    username: str
    email: str
    shipping_info: Optional[dict] = None
    is_admin: Optional[bool] = None


class UserOut(ReadModel):
    """Dane zalogowanego uzytkownika, bez hasla."""

    id: int
    username: str
    email: str
    saved_payment_info: dict
    shipping_info: dict
    is_admin: bool


class AccountMessageOut(ApiModel):
    message: str
    user: UserSummary


class MessageOut(ApiModel):
    message: str


# --- katalog ---

class ProductCreate(ApiModel):
    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    price: Decimal = Field(..., gt=0)
    category: Optional[str] = None
    tags: List[str] = Field(..., min_length=1)
    image_url: AnyHttpUrl
    sizes: List[Size] = Field(..., min_length=1)


class ProductUpdate(ApiModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(default=None, gt=0)
    category: Optional[str] = None
    tags: Optional[List[str]] = Field(default=None, min_length=1)
    image_url: Optional[AnyHttpUrl] = None
    sizes: Optional[List[Size]] = Field(default=None, min_length=1)


class ProductOut(ReadModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Money
    category: Optional[str] = None
    rating: float
    tags: List[str]
    image_url: str
    sizes: List[str]
    creation_date: datetime


class ProductListOut(ApiModel):
    products: List[ProductOut]


# --- koszyk ---

class CartItemIn(ApiModel):
    """Schema dla dodawania produktu do koszyka."""

    product_id: int = Field(..., gt=0)
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)
    size: Size


class QuantityIn(ApiModel):
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)


class CartLineOut(ApiModel):
    product_id: int
    quantity: int
    size: str
    product: Optional[ProductOut] = None


class CartOut(ApiModel):
    """Schema dla koszyka (response)."""

    user_id: int
    products: List[CartLineOut]


class CartTotalOut(ApiModel):
    total: Money


# --- zakupy ---

class PurchaseIn(ApiModel):
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)
    size: Size


class GuestPurchaseIn(ApiModel):
    quantity: int = Field(..., gt=0, le=MAX_QUANTITY)
    size: Size
    shipping_info: ShippingInfo
    payment_info: PaymentInfo


class EntitlementOut(ReadModel):
    id: int
    user_id: int
    product_id: int
    size: str


class OrderLineOut(ApiModel):
    product_id: int
    quantity: int
    size: Optional[str] = None


class OrderOut(ReadModel):
    """Schema dla zamowienia (response)."""

    id: int
    user_id: Optional[int] = None
    products: List[OrderLineOut]
    total: Money
    shipping_info: dict
    size: str
    created_at: datetime


class PurchaseOut(ApiModel):
    message: str
    entitlement: EntitlementOut
    order: OrderOut


class GuestPurchaseOut(ApiModel):
    message: str
    order: OrderOut


# --- recenzje ---

class ReviewIn(ApiModel):
    rating: int = Field(..., ge=1, le=5)
    comment: Optional[str] = None
    created_at: Optional[datetime] = None


class ReviewOut(ReadModel):
    id: int
    user_id: int
    product_id: int
    rating: int
    comment: Optional[str] = None
    created_at: datetime
    username: Optional[str] = None


class ReviewListOut(ApiModel):
    reviews: List[ReviewOut]
    average_rating: float
