# app/services/purchase_service.py
from decimal import Decimal

from sqlalchemy.orm import Session

from app.data.models.entitlement import EntitlementModel
from app.data.models.order import OrderModel
from app.domain.errors import InvalidArgument, NotFound
from app.domain.identity import Identity
from app.domain.schemas import GuestPurchaseIn
from app.repos.entitlement_repo import EntitlementRepo
from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.repos.user_repo import UserRepo
from app.services.notification_service import NotificationService
from app.utils.logging import get_logger

logger = get_logger(__name__)


class PurchaseService:
    """
    Serwis odpowiedzialny za zakupy.

    - zalogowany uzytkownik: entitlement + zamowienie, bez platnosci
    - gosc: tylko zamowienie, dane karty walidowane strukturalnie w schemacie
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.db = db
        self.products = ProductRepo(db)
        self.users = UserRepo(db)
        self.entitlements = EntitlementRepo(db)
        self.orders = OrderRepo(db)
        self.notification_service = notification_service or NotificationService()

    def purchase(self, identity: Identity, product_id: int, quantity: int, size: str):
        """
        Use Case: zakup przez zalogowanego uzytkownika.

        1. Produkt istnieje i ma dany rozmiar
        2. Uzytkownik istnieje
        3. total = cena * ilosc
        4. Entitlement + zamowienie w jednej transakcji
        5. Powiadomienie (async)
        """
        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found.")

        if size not in (product.sizes or []):
            raise InvalidArgument(f"Size {size} is not available for this product.")

        user = self.users.get_user(identity.user_id)
        if not user:
            raise NotFound("User not found.")

        total = Decimal(product.price) * quantity

        # bez sprawdzania wczesniejszych entitlementow, kazdy zakup tworzy nowy
        entitlement = self.entitlements.add(
            EntitlementModel(user_id=user.id, product_id=product.id, size=size)
        )
        order = self.orders.add(
            OrderModel(
                user_id=user.id,
                products=[{"product_id": product.id, "quantity": quantity, "size": size}],
                total=total,
                shipping_info=dict(user.shipping_info or {}),
                size=size,
            )
        )
        self.db.commit()
        self.db.refresh(entitlement)
        self.db.refresh(order)

        logger.info(
            f"Order {order.id} and entitlement {entitlement.id} created for user {user.id}, "
            f"product {product.id} x{quantity} ({size}), total {total}"
        )
        self.notification_service.send_order_notification(order.id, user.id)

        return entitlement, order

    def guest_purchase(self, product_id: int, payload: GuestPurchaseIn) -> OrderModel:
        """
        Use Case: zakup goscia.
        Karta przeszla juz walidacje formatu i Luhna, bramki platnosci nie ma -
        zamowienie powstaje zawsze. Bez entitlementu.
        """
        product = self.products.get_product(product_id)
        if not product:
            raise NotFound("Product not found.")

        total = Decimal(product.price) * payload.quantity

        order = self.orders.create_order(
            OrderModel(
                user_id=None,
                products=[{"product_id": product.id, "quantity": payload.quantity}],
                total=total,
                shipping_info=payload.shipping_info.model_dump(by_alias=True),
                size=payload.size.value,
            )
        )

        logger.info(f"Guest order {order.id} created for product {product.id} x{payload.quantity}, total {total}")
        self.notification_service.send_order_notification(order.id, None)

        return order
