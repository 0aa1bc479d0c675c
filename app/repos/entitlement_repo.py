# app/repos/entitlement_repo.py
from typing import List

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.data.models.entitlement import EntitlementModel


class EntitlementRepo:
    def __init__(self, db: Session):
        self.db = db

    def add(self, entitlement: EntitlementModel) -> EntitlementModel:
        self.db.add(entitlement)
        return entitlement

    def list_for_user(self, user_id: int) -> List[EntitlementModel]:
        return list(
            self.db.execute(
                select(EntitlementModel)
                .where(EntitlementModel.user_id == user_id)
                .order_by(EntitlementModel.id)
            ).scalars()
        )

    def exists(self, user_id: int, product_id: int) -> bool:
        return (
            self.db.execute(
                select(EntitlementModel.id)
                .where(
                    EntitlementModel.user_id == user_id,
                    EntitlementModel.product_id == product_id,
                )
                .limit(1)
            ).first()
            is not None
        )
