# app/utils/security.py
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.domain.errors import InvalidCredential
from app.domain.identity import Identity
from app.utils.settings import Settings


class PasswordHasher:
    def __init__(self, rounds: int = 10):
        self._context = CryptContext(
            schemes=["bcrypt"],
            deprecated="auto",
            bcrypt__rounds=rounds,
        )

    def hash(self, password: str) -> str:
        return self._context.hash(password)

    def verify(self, password: str, password_hash: str) -> bool:
        if not password_hash:
            return False
        return self._context.verify(password, password_hash)


class TokenCodec:
    """
    Podpisany token JWT z {sub, isAdmin, exp}.
    """

    def __init__(self, secret: str, algorithm: str = "HS256", ttl_seconds: int = 3600):
        self.secret = secret
        self.algorithm = algorithm
        self.ttl = timedelta(seconds=ttl_seconds)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            secret=settings.jwt_secret,
            algorithm=settings.jwt_algorithm,
            ttl_seconds=settings.token_ttl_seconds,
        )

    def issue(self, user_id: int, is_admin: bool) -> str:
        expire = datetime.now(timezone.utc) + self.ttl
        payload = {"sub": str(user_id), "isAdmin": bool(is_admin), "exp": expire}
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def decode(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidCredential("Invalid token.") from e

        sub = payload.get("sub")
        try:
            user_id = int(sub)
        except (TypeError, ValueError) as e:
            raise InvalidCredential("Invalid token.") from e

        return Identity(user_id=user_id, is_admin=bool(payload.get("isAdmin", False)))
