# app/api/routers/account.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.deps import get_auth_service, get_hasher, get_identity
from app.data.database import get_db
from app.domain.identity import Identity
from app.domain.schemas import (
    AccountMessageOut,
    AccountUpdateIn,
    LoginIn,
    MessageOut,
    RegisterIn,
    SavePaymentIn,
    TokenOut,
    UserOut,
    UserSummary,
)
from app.services.auth_service import AuthService
from app.services.user_service import UserService
from app.utils.security import PasswordHasher

router = APIRouter(prefix="/account", tags=["account"])


def get_service(db: Session = Depends(get_db), hasher: PasswordHasher = Depends(get_hasher)):
    return UserService(db, hasher)


@router.post("/register", response_model=AccountMessageOut, status_code=201)
def register(payload: RegisterIn, auth: AuthService = Depends(get_auth_service)):
    user = auth.register(payload)
    return AccountMessageOut(
        message="User registered successfully.",
        user=UserSummary(
            id=user.id, username=user.username, email=user.email, shipping_info=user.shipping_info
        ),
    )


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, auth: AuthService = Depends(get_auth_service)):
    return TokenOut(token=auth.login(payload.email, payload.password))


@router.post("/logout", response_model=MessageOut)
def logout(identity: Identity = Depends(get_identity)):
    # JWT jest bezstanowy, klient usuwa token u siebie
    return MessageOut(message="Logged out successfully.")


@router.get("/me", response_model=UserOut)
def me(identity: Identity = Depends(get_identity), svc: UserService = Depends(get_service)):
    return UserOut.model_validate(svc.get_user(identity.user_id))


@router.put("/update", response_model=AccountMessageOut)
def update_account(
    payload: AccountUpdateIn,
    identity: Identity = Depends(get_identity),
    svc: UserService = Depends(get_service),
):
    user = svc.update_account(identity.user_id, payload)
    return AccountMessageOut(
        message="Account updated successfully.",
        user=UserSummary(
            id=user.id, username=user.username, email=user.email, shipping_info=user.shipping_info
        ),
    )


@router.post("/payment", response_model=AccountMessageOut)
def save_payment(
    payload: SavePaymentIn,
    identity: Identity = Depends(get_identity),
    svc: UserService = Depends(get_service),
):
    user = svc.save_payment(identity.user_id, payload.saved_payment_info)
    return AccountMessageOut(
        message="Payment information saved successfully.",
        user=UserSummary(id=user.id, username=user.username, email=user.email),
    )
