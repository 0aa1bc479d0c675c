# app/api/routers/purchase.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_identity
from app.data.database import get_db
from app.domain.identity import Identity
from app.domain.schemas import (
    EntitlementOut,
    GuestPurchaseIn,
    GuestPurchaseOut,
    OrderOut,
    PurchaseIn,
    PurchaseOut,
)
from app.services.purchase_service import PurchaseService

router = APIRouter(prefix="/purchase", tags=["purchase"])


def get_service(db: Session = Depends(get_db)):
    return PurchaseService(db)


@router.post("/{product_id}", response_model=PurchaseOut)
def purchase(
    product_id: int,
    payload: PurchaseIn,
    identity: Identity = Depends(get_identity),
    svc: PurchaseService = Depends(get_service),
):
    """
    Zakup dla zalogowanego - tworzy entitlement i zamowienie.
    """
    entitlement, order = svc.purchase(identity, product_id, payload.quantity, payload.size.value)
    return PurchaseOut(
        message="Product purchased and entitlement created",
        entitlement=EntitlementOut.model_validate(entitlement),
        order=OrderOut.model_validate(order),
    )


@router.post("/{product_id}/guest", response_model=GuestPurchaseOut, status_code=201)
def guest_purchase(
    product_id: int,
    payload: GuestPurchaseIn,
    svc: PurchaseService = Depends(get_service),
):
    """
    Zakup goscia - bez tokena, tylko zamowienie.
    """
    order = svc.guest_purchase(product_id, payload)
    return GuestPurchaseOut(message="Purchase successful.", order=OrderOut.model_validate(order))
