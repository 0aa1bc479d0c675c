#app/api/routers/cart.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_identity
from app.data.database import get_db
from app.domain.identity import Identity
from app.domain.schemas import (
    CartItemIn,
    CartLineOut,
    CartOut,
    CartTotalOut,
    MessageOut,
    ProductOut,
    QuantityIn,
)
from app.services.cart_service import CartService

router = APIRouter(tags=["cart"])


def get_service(db: Session = Depends(get_db)):
    return CartService(db)


def _to_out(cart: dict) -> CartOut:
    return CartOut(
        user_id=cart["user_id"],
        products=[
            CartLineOut(
                product_id=line["product_id"],
                quantity=line["quantity"],
                size=line["size"],
                product=ProductOut.model_validate(line["product"]) if line["product"] is not None else None,
            )
            for line in cart["products"]
        ],
    )


@router.get("/cart", response_model=CartOut)
def get_cart(identity: Identity = Depends(get_identity), svc: CartService = Depends(get_service)):
    return _to_out(svc.get_cart(identity.user_id))


@router.post("/cart", response_model=CartOut)
def add_to_cart(
    payload: CartItemIn,
    identity: Identity = Depends(get_identity),
    svc: CartService = Depends(get_service),
):
    cart = svc.add_to_cart(
        user_id=identity.user_id,
        product_id=payload.product_id,
        quantity=payload.quantity,
        size=payload.size.value,
    )
    return _to_out(cart)


@router.get("/cart/total", response_model=CartTotalOut)
def get_cart_total(identity: Identity = Depends(get_identity), svc: CartService = Depends(get_service)):
    return CartTotalOut(total=svc.get_cart_total(identity.user_id))


@router.put("/cart/{product_id}", response_model=CartOut)
def update_quantity(
    product_id: int,
    payload: QuantityIn,
    identity: Identity = Depends(get_identity),
    svc: CartService = Depends(get_service),
):
    return _to_out(svc.update_quantity(identity.user_id, product_id, payload.quantity))


@router.delete("/cart/{product_id}", response_model=CartOut)
def remove_from_cart(
    product_id: int,
    identity: Identity = Depends(get_identity),
    svc: CartService = Depends(get_service),
):
    return _to_out(svc.remove_from_cart(identity.user_id, product_id))


@router.delete("/cart_all/delete", response_model=MessageOut)
def clear_cart(identity: Identity = Depends(get_identity), svc: CartService = Depends(get_service)):
    svc.clear_cart(identity.user_id)
    return MessageOut(message="Cart has been cleared.")
