# app/services/auth_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.user import UserModel
from app.domain.errors import InvalidCredentials, InvalidState, Unauthenticated
from app.domain.identity import Identity
from app.domain.schemas import RegisterIn
from app.repos.user_repo import UserRepo
from app.utils.logging import get_logger
from app.utils.security import PasswordHasher, TokenCodec

logger = get_logger(__name__)


class AuthService:
    """
    Rejestracja, logowanie (wydanie tokena) i odswiezanie tozsamosci.
    """

    def __init__(self, db: Session, hasher: PasswordHasher, codec: TokenCodec):
        self.repo = UserRepo(db)
        self.hasher = hasher
        self.codec = codec

    def register(self, payload: RegisterIn) -> UserModel:
        email = payload.email.lower()
        ensure_unique(self.repo, username=payload.username, email=email)

        user = UserModel(
            username=payload.username,
            email=email,
            password_hash=self.hasher.hash(payload.password),
            saved_payment_info=payload.saved_payment_info.model_dump(by_alias=True),
            shipping_info=payload.shipping_info.model_dump(by_alias=True),
            is_admin=False,
        )
        created = create_or_conflict(self.repo, user)

        logger.info(f"Registered user {created.id} ({created.username})")
        return created

    def login(self, email: str, password: str) -> str:
        user = self.repo.get_by_email(email.lower())

        # ten sam komunikat dla nieznanego emaila i zlego hasla
        if not user or not self.hasher.verify(password, user.password_hash):
            logger.warning("Failed login attempt")
            raise InvalidCredentials("Invalid credentials.")

        return self.codec.issue(user.id, user.is_admin)

    def refresh_identity(self, identity: Identity) -> Identity:
        """Flaga admina z bazy zamiast z tokena (ADMIN_FLAG_FROM_DATABASE)."""
        user = self.repo.get_user(identity.user_id)
        if not user:
            raise Unauthenticated("User no longer exists.")
        return Identity(user_id=user.id, is_admin=bool(user.is_admin))


def ensure_unique(
    repo: UserRepo,
    username: str | None = None,
    email: str | None = None,
    exclude_id: int | None = None,
) -> None:
    if email is not None:
        existing = repo.get_by_email(email)
        if existing and existing.id != exclude_id:
            raise InvalidState("User with this email already exists.")

    if username is not None:
        existing = repo.get_by_username(username)
        if existing and existing.id != exclude_id:
            raise InvalidState("User with this username already exists.")


def create_or_conflict(repo: UserRepo, user: UserModel) -> UserModel:
    # unique constraint jako ostatnia linia przy rownoleglej rejestracji
    try:
        return repo.create_user(user)
    except IntegrityError as e:
        repo.db.rollback()
        raise InvalidState("User with this email or username already exists.") from e
