# app/repos/order_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def add(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        return order

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def list_for_user(self, user_id: int) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel).where(OrderModel.user_id == user_id).order_by(OrderModel.id)
            ).scalars()
        )

    def user_ordered_product(self, user_id: int, product_id: int) -> bool:
        # pozycje sa w JSON, sprawdzenie po stronie aplikacji
        return any(
            line.get("product_id") == product_id
            for order in self.list_for_user(user_id)
            for line in order.products or []
        )
