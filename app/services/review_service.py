# app/services/review_service.py
from datetime import datetime, timezone
from typing import Any, Dict

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.review import ReviewModel
from app.domain.errors import Forbidden, InvalidState, NotFound
from app.domain.identity import Identity
from app.domain.schemas import ReviewIn
from app.repos.entitlement_repo import EntitlementRepo
from app.repos.order_repo import OrderRepo
from app.repos.product_repo import ProductRepo
from app.repos.review_repo import ReviewRepo
from app.repos.user_repo import UserRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class ReviewService:
    def __init__(self, db: Session):
        self.repo = ReviewRepo(db)
        self.products = ProductRepo(db)
        self.orders = OrderRepo(db)
        self.entitlements = EntitlementRepo(db)
        self.users = UserRepo(db)

    def add_review(self, identity: Identity, product_id: int, payload: ReviewIn) -> ReviewModel:
        """
        Recenzja tylko po zakupie (zamowienie albo entitlement), jedna na produkt.
        """
        if not self.products.get_product(product_id):
            raise NotFound("Product not found.")

        user_id = identity.user_id
        purchased = self.orders.user_ordered_product(user_id, product_id) or self.entitlements.exists(
            user_id, product_id
        )
        if not purchased:
            logger.warning(f"User {user_id} tried to review product {product_id} without purchase")
            raise Forbidden("You can only review a product that you have purchased.")

        if self.repo.get_review(user_id, product_id):
            raise InvalidState("You have already reviewed this product.")

        review = ReviewModel(
            user_id=user_id,
            product_id=product_id,
            rating=payload.rating,
            comment=payload.comment,
            created_at=payload.created_at or datetime.now(timezone.utc),
        )
        try:
            created = self.repo.create_review(review)
        except IntegrityError as e:
            self.repo.db.rollback()
            raise InvalidState("You have already reviewed this product.") from e

        logger.info(f"Review {created.id} added by user {user_id} for product {product_id}")
        return created

    def list_reviews(self, product_id: int) -> Dict[str, Any]:
        reviews = self.repo.list_for_product(product_id)
        usernames = self.users.get_usernames({r.user_id for r in reviews})

        average = sum(r.rating for r in reviews) / len(reviews) if reviews else 0

        return {
            "reviews": [
                {
                    "id": r.id,
                    "user_id": r.user_id,
                    "product_id": r.product_id,
                    "rating": r.rating,
                    "comment": r.comment,
                    "created_at": r.created_at,
                    "username": usernames.get(r.user_id),
                }
                for r in reviews
            ],
            "average_rating": average,
        }
