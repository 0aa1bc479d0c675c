# app/api/routers/admin.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_hasher, require_admin
from app.data.database import get_db
from app.domain.identity import Identity
from app.domain.schemas import (
    AccountMessageOut,
    AdminCreateIn,
    MessageOut,
    ProductCreate,
    ProductOut,
    ProductUpdate,
    UserSummary,
)
from app.services.catalog_service import CatalogService
from app.services.user_service import UserService
from app.utils.security import PasswordHasher

router = APIRouter(prefix="/admin", tags=["admin"])


def get_catalog(db: Session = Depends(get_db)):
    return CatalogService(db)


def get_users(db: Session = Depends(get_db), hasher: PasswordHasher = Depends(get_hasher)):
    return UserService(db, hasher)


@router.post("/products", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductCreate,
    admin: Identity = Depends(require_admin),
    svc: CatalogService = Depends(get_catalog),
):
    return ProductOut.model_validate(svc.create_product(payload))


@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    admin: Identity = Depends(require_admin),
    svc: CatalogService = Depends(get_catalog),
):
    return ProductOut.model_validate(svc.update_product(product_id, payload))


@router.delete("/products/{product_id}", response_model=MessageOut)
def delete_product(
    product_id: int,
    admin: Identity = Depends(require_admin),
    svc: CatalogService = Depends(get_catalog),
):
    svc.delete_product(product_id)
    return MessageOut(message="Product deleted")


@router.post("/create", response_model=AccountMessageOut, status_code=201)
def create_admin(
    payload: AdminCreateIn,
    admin: Identity = Depends(require_admin),
    svc: UserService = Depends(get_users),
):
    user = svc.create_admin(payload)
    return AccountMessageOut(
        message="Admin account created successfully.",
        user=UserSummary(id=user.id, username=user.username, email=user.email, is_admin=user.is_admin),
    )


@router.put("/promote/{user_id}", response_model=AccountMessageOut)
def promote_user(
    user_id: int,
    admin: Identity = Depends(require_admin),
    svc: UserService = Depends(get_users),
):
    user = svc.promote(user_id)
    return AccountMessageOut(
        message="User has been promoted to admin.",
        user=UserSummary(id=user.id, username=user.username, email=user.email, is_admin=user.is_admin),
    )
