# app/api/__init__.py
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from app.api.errors import register_error_handlers
from app.api.routers import account, admin, cart, health, products, purchase
from app.celery_worker import configure_celery
from app.data.database import create_db_engine, create_session_factory, init_db
from app.data.seed import seed_admin
from app.utils.logging import configure_logging, get_logger
from app.utils.security import PasswordHasher, TokenCodec
from app.utils.settings import Settings

logger = get_logger(__name__)


def create_app(settings: Settings) -> FastAPI:
    configure_logging(settings.log_level)

    engine = create_db_engine(settings.database_url)
    logger.info("Initializing database...")
    init_db(engine)

    app = FastAPI(title="Storefront API", version="1.0.0")

    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.password_hasher = PasswordHasher(rounds=settings.bcrypt_rounds)
    app.state.token_codec = TokenCodec.from_settings(settings)

    configure_celery(settings)
    seed_admin(app.state.session_factory, settings, app.state.password_hasher)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        status_code = 500
        try:
            response = await call_next(request)
            status_code = response.status_code
            return response
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            logger.info(f"{request.method} {request.url.path} -> {status_code} ({elapsed_ms:.1f} ms)")

    register_error_handlers(app)

    # Include routers
    app.include_router(health.router)
    app.include_router(account.router)
    app.include_router(products.router)
    app.include_router(admin.router)
    app.include_router(cart.router)
    app.include_router(purchase.router)

    return app
