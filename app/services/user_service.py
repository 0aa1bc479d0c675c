# app/services/user_service.py
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.data.models.user import UserModel
from app.domain.errors import InvalidState, NotFound
from app.domain.schemas import AccountUpdateIn, AdminCreateIn, PaymentInfo
from app.repos.user_repo import UserRepo
from app.services.auth_service import create_or_conflict, ensure_unique
from app.utils.logging import get_logger
from app.utils.security import PasswordHasher

logger = get_logger(__name__)

# konta adminow nie maja prawdziwej karty ani adresu
ADMIN_PAYMENT_PLACEHOLDER = {
    "cardNumber": "0000000000000000",
    "cardHolderName": "Admin",
    "expiryDate": "01/30",
    "cvv": "000",
}
ADMIN_SHIPPING_PLACEHOLDER = {
    "address": "Admin Address",
    "state": "Admin State",
    "zipcode": "00000",
    "city": "Admin City",
}


class UserService:
    def __init__(self, db: Session, hasher: PasswordHasher):
        self.repo = UserRepo(db)
        self.hasher = hasher

    def get_user(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFound("User not found.")
        return user

    def update_account(self, user_id: int, payload: AccountUpdateIn) -> UserModel:
        user = self.get_user(user_id)
        changes = payload.model_dump(exclude_unset=True, exclude_none=True)

        email = changes.get("email")
        if email is not None:
            email = email.lower()
        ensure_unique(self.repo, username=changes.get("username"), email=email, exclude_id=user.id)

        if "username" in changes:
            user.username = changes["username"]
        if email is not None:
            user.email = email
        if "password" in changes:
            user.password_hash = self.hasher.hash(changes["password"])
        # JSON podmieniany w calosci, SQLAlchemy nie sledzi mutacji w miejscu
        if payload.saved_payment_info is not None:
            user.saved_payment_info = payload.saved_payment_info.model_dump(by_alias=True)
        if payload.shipping_info is not None:
            user.shipping_info = payload.shipping_info.model_dump(by_alias=True)

        try:
            saved = self.repo.save(user)
        except IntegrityError as e:
            self.repo.db.rollback()
            raise InvalidState("User with this email or username already exists.") from e

        logger.info(f"Account {user_id} updated: {sorted(changes)}")
        return saved

    def save_payment(self, user_id: int, payment: PaymentInfo) -> UserModel:
        user = self.get_user(user_id)
        user.saved_payment_info = payment.model_dump(by_alias=True)
        saved = self.repo.save(user)
        logger.info(f"Payment info saved for user {user_id}")
        return saved

    # admin

    def create_admin(self, payload: AdminCreateIn) -> UserModel:
        email = payload.email.lower()
        ensure_unique(self.repo, username=payload.username, email=email)

        admin = UserModel(
            username=payload.username,
            email=email,
            password_hash=self.hasher.hash(payload.password),
            saved_payment_info=dict(ADMIN_PAYMENT_PLACEHOLDER),
            shipping_info=dict(ADMIN_SHIPPING_PLACEHOLDER),
            is_admin=True,
        )
        created = create_or_conflict(self.repo, admin)

        logger.info(f"Admin account {created.id} ({created.username}) created")
        return created

    def promote(self, user_id: int) -> UserModel:
        user = self.get_user(user_id)
        if user.is_admin:
            raise InvalidState("User is already an admin.")

        user.is_admin = True
        saved = self.repo.save(user)
        logger.info(f"User {user_id} promoted to admin")
        return saved
