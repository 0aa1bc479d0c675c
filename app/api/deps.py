# app/api/deps.py
from typing import Optional

from fastapi import Depends, Header, Request
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import Forbidden, InvalidCredential, Unauthenticated
from app.domain.identity import Identity
from app.services.auth_service import AuthService
from app.utils.security import PasswordHasher, TokenCodec
from app.utils.settings import Settings


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_hasher(request: Request) -> PasswordHasher:
    return request.app.state.password_hasher


def get_codec(request: Request) -> TokenCodec:
    return request.app.state.token_codec


def get_auth_service(
    db: Session = Depends(get_db),
    hasher: PasswordHasher = Depends(get_hasher),
    codec: TokenCodec = Depends(get_codec),
) -> AuthService:
    return AuthService(db, hasher, codec)


def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization or not authorization.startswith("Bearer "):
        return None
    token = authorization[len("Bearer "):].strip()
    return token or None


def get_identity(
    authorization: Optional[str] = Header(default=None),
    settings: Settings = Depends(get_settings),
    codec: TokenCodec = Depends(get_codec),
    auth: AuthService = Depends(get_auth_service),
) -> Identity:
    token = _bearer_token(authorization)
    if token is None:
        raise Unauthenticated("Access denied. No token provided.")

    identity = codec.decode(token)
    if settings.admin_flag_from_database:
        identity = auth.refresh_identity(identity)
    return identity


def get_optional_identity(
    authorization: Optional[str] = Header(default=None),
    codec: TokenCodec = Depends(get_codec),
) -> Optional[Identity]:
    # brak albo zly token -> traktujemy jak goscia
    token = _bearer_token(authorization)
    if token is None:
        return None
    try:
        return codec.decode(token)
    except InvalidCredential:
        return None


def require_admin(identity: Identity = Depends(get_identity)) -> Identity:
    if not identity.is_admin:
        raise Forbidden("Access denied. Admins only.")
    return identity
