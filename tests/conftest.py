import pytest
from fastapi.testclient import TestClient

from app.api import create_app
from app.utils.settings import Settings

VALID_CARD = "4111111111111111"

ADMIN_EMAIL = "admin@gmail.com"
ADMIN_PASSWORD = "admin-secret"


def make_settings(**overrides) -> Settings:
    values = dict(
        database_url="sqlite://",
        jwt_secret="test-secret",
        bcrypt_rounds=4,
        celery_broker_url="memory://",
        celery_result_backend="cache+memory://",
        celery_task_always_eager=True,
        log_level="DEBUG",
        bootstrap_admin_username="admin",
        bootstrap_admin_email=ADMIN_EMAIL,
        bootstrap_admin_password=ADMIN_PASSWORD,
    )
    values.update(overrides)
    return Settings(**values)


def register_payload(username="alice", email="alice@gmail.com", password="secret123", **overrides):
    payload = {
        "username": username,
        "email": email,
        "password": password,
        "savedPaymentInfo": {
            "cardNumber": VALID_CARD,
            "cardHolderName": "Alice Smith",
            "expiryDate": "12/29",
            "cvv": "123",
        },
        "shippingInfo": {
            "address": "1 Main St",
            "state": "CA",
            "zipcode": "94105",
            "city": "San Francisco",
        },
    }
    payload.update(overrides)
    return payload


def product_payload(name="Blue T-Shirt", tags=("summer", "cotton"), sizes=("S", "M", "L"), **overrides):
    payload = {
        "name": name,
        "description": f"{name} description",
        "price": 19.99,
        "category": "tops",
        "tags": list(tags),
        "imageUrl": "https://cdn.shop.io/img/product.png",
        "sizes": list(sizes),
    }
    payload.update(overrides)
    return payload


def auth(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def db(app):
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


def login(client, email, password) -> str:
    resp = client.post("/account/login", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    return resp.json()["token"]


@pytest.fixture
def admin_token(client):
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def user_token(client):
    resp = client.post("/account/register", json=register_payload())
    assert resp.status_code == 201, resp.text
    return login(client, "alice@gmail.com", "secret123")


@pytest.fixture
def create_product(client, admin_token):
    def _create(**kwargs):
        resp = client.post("/admin/products", json=product_payload(**kwargs), headers=auth(admin_token))
        assert resp.status_code == 201, resp.text
        return resp.json()

    return _create
