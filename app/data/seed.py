# app/data/seed.py
from sqlalchemy.orm import sessionmaker

from app.data.models.user import UserModel
from app.repos.user_repo import UserRepo
from app.services.user_service import ADMIN_PAYMENT_PLACEHOLDER, ADMIN_SHIPPING_PLACEHOLDER
from app.utils.logging import get_logger
from app.utils.security import PasswordHasher
from app.utils.settings import Settings

logger = get_logger(__name__)


def seed_admin(session_factory: sessionmaker, settings: Settings, hasher: PasswordHasher) -> None:
    """
    Pierwsze konto admina z konfiguracji - /admin/create wymaga juz admina.
    """
    if not (
        settings.bootstrap_admin_email
        and settings.bootstrap_admin_password
        and settings.bootstrap_admin_username
    ):
        return

    email = settings.bootstrap_admin_email.lower()
    db = session_factory()
    try:
        repo = UserRepo(db)
        # not forcing: only seed if missing
        if repo.get_by_email(email):
            return
        repo.create_user(
            UserModel(
                username=settings.bootstrap_admin_username,
                email=email,
                password_hash=hasher.hash(settings.bootstrap_admin_password),
                saved_payment_info=dict(ADMIN_PAYMENT_PLACEHOLDER),
                shipping_info=dict(ADMIN_SHIPPING_PLACEHOLDER),
                is_admin=True,
            )
        )
        logger.info(f"Bootstrap admin {email} created")
    finally:
        db.close()
