# app/services/cart_service.py
from decimal import Decimal
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.domain.errors import InvalidState, NotFound
from app.repos.cart_repo import CartRepo
from app.repos.product_repo import ProductRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Prosta implementacja cqrs i proste use case dla domeny cart
    commands (add, update, remove, clear) modyfikuja stan
    query (get, total) tylko odczyt

    Pozycja jest identyfikowana samym product_id, rozmiar nie jest czescia klucza.
    Kazda komenda podbija version warunkowym UPDATE (optimistic locking).
    """

    def __init__(self, db: Session):
        self.repo = CartRepo(db)
        self.products = ProductRepo(db)

    #query - odczyt
    def get_cart(self, user_id: int) -> Dict[str, Any]:
        cart = self._require_cart(user_id)
        items = self.repo.get_cart_items(cart.id)
        resolved = self.products.get_many(i.product_id for i in items)

        #dict przyksztalcany w jsona, produkt None gdy zostal usuniety
        return {
            "user_id": cart.user_id,
            "products": [
                {
                    "product_id": i.product_id,
                    "quantity": i.quantity,
                    "size": i.size,
                    "product": resolved.get(i.product_id),
                }
                for i in items
            ],
        }

    def get_cart_total(self, user_id: int) -> Decimal:
        cart = self._require_cart(user_id)
        items = self.repo.get_cart_items(cart.id)
        resolved = self.products.get_many(i.product_id for i in items)

        # pozycje z usunietym produktem pomijamy
        return sum(
            (
                Decimal(resolved[i.product_id].price) * i.quantity
                for i in items
                if i.product_id in resolved
            ),
            Decimal("0.00"),
        )

    #commands
    def add_to_cart(self, user_id: int, product_id: int, quantity: int, size: str) -> Dict[str, Any]:
        if not self.products.get_product(product_id):
            raise NotFound("Product not found.")

        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            logger.info(f"Tworze koszyk dla uzytkownika {user_id}")
            try:
                cart = self.repo.create_cart(CartModel(user_id=user_id, version=1))
            except IntegrityError as e:
                self.repo.rollback()
                raise InvalidState("Cart was modified concurrently, please retry.") from e

        existing = self.repo.get_cart_items_for_product(cart.id, product_id)
        if existing:
            item = existing[0]
            logger.info(
                f"Produkt {product_id} juz jest w koszyku, zwiekszam ilosc "
                f"z {item.quantity} do {item.quantity + quantity}"
            )
            item.quantity += quantity
        else:
            logger.info(f"Dodaje produkt {product_id} ({size}) do koszyka {cart.id}")
            self.repo.add_cart_item(
                CartItemModel(
                    cart_id=cart.id,
                    product_id=product_id,
                    quantity=quantity,
                    size=size,
                )
            )

        self._commit_new_version(cart)
        return self.get_cart(user_id)

    def update_quantity(self, user_id: int, product_id: int, quantity: int) -> Dict[str, Any]:
        cart = self.repo.get_cart_by_user(user_id)
        items = self.repo.get_cart_items_for_product(cart.id, product_id) if cart else []
        if not items:
            raise NotFound("Product not found in cart.")

        items[0].quantity = quantity
        self._commit_new_version(cart)

        logger.info(f"Ilosc produktu {product_id} w koszyku {cart.id} ustawiona na {quantity}")
        return self.get_cart(user_id)

    def remove_from_cart(self, user_id: int, product_id: int) -> Dict[str, Any]:
        cart = self._require_cart(user_id)

        items = self.repo.get_cart_items_for_product(cart.id, product_id)
        if not items:
            raise NotFound("Product not found in cart.")

        for item in items:
            self.repo.delete_cart_item(item)
        self._commit_new_version(cart)

        logger.info(f"Produkt {product_id} usuniety z koszyka {cart.id}")
        return self.get_cart(user_id)

    def clear_cart(self, user_id: int) -> None:
        cart = self._require_cart(user_id)

        for item in self.repo.get_cart_items(cart.id):
            self.repo.delete_cart_item(item)
        self._commit_new_version(cart)

        logger.info(f"Koszyk {cart.id} wyczyszczony")

    def _require_cart(self, user_id: int) -> CartModel:
        cart = self.repo.get_cart_by_user(user_id)
        if not cart:
            raise NotFound("Cart not found.")
        return cart

    def _commit_new_version(self, cart: CartModel) -> None:
        # Optimistic locking
        # np w bazie update set version 2 where id 1 and version 1
        rowcount = self.repo.update_cart_version(
            cart_id=cart.id,
            old_version=cart.version,
            new_data={"version": cart.version + 1},
        )

        if rowcount == 0:
            self.repo.rollback()
            logger.warning(f"Konflikt wspolbieznosci na koszyku {cart.id}")
            raise InvalidState("Cart was modified concurrently, please retry.")

        self.repo.commit()
