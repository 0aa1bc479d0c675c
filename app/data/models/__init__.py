#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.user import UserModel
from app.data.models.product import ProductModel
from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.data.models.entitlement import EntitlementModel
from app.data.models.order import OrderModel
from app.data.models.review import ReviewModel

__all__ = [
    "UserModel",
    "ProductModel",
    "CartModel",
    "CartItemModel",
    "EntitlementModel",
    "OrderModel",
    "ReviewModel",
]
