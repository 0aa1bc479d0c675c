import time

from jose import jwt

from app.utils.security import TokenCodec
from tests.conftest import auth, login, register_payload


def test_register_returns_user_without_password(client):
    resp = client.post("/account/register", json=register_payload())

    assert resp.status_code == 201
    body = resp.json()
    assert body["message"] == "User registered successfully."
    assert body["user"]["username"] == "alice"
    assert body["user"]["shippingInfo"]["zipcode"] == "94105"
    assert "password" not in body["user"]


def test_register_duplicate_email_conflicts(client):
    client.post("/account/register", json=register_payload())
    resp = client.post("/account/register", json=register_payload(username="alice2"))

    assert resp.status_code == 409


def test_register_reports_all_field_errors(client):
    payload = register_payload(username="al", password="123")
    payload["savedPaymentInfo"]["cardNumber"] = "4111111111111112"
    payload["shippingInfo"]["zipcode"] = "ABCDE"

    resp = client.post("/account/register", json=payload)

    assert resp.status_code == 400
    fields = {e["field"] for e in resp.json()["errors"]}
    assert {"username", "password", "savedPaymentInfo.cardNumber", "shippingInfo.zipcode"} <= fields


def test_login_issues_token_with_identity(client, settings):
    client.post("/account/register", json=register_payload())
    token = login(client, "alice@gmail.com", "secret123")

    payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    assert payload["isAdmin"] is False
    assert int(payload["sub"]) > 0
    assert 3500 < payload["exp"] - time.time() <= 3600


def test_login_does_not_disclose_which_field_was_wrong(client):
    client.post("/account/register", json=register_payload())

    wrong_password = client.post("/account/login", json={"email": "alice@gmail.com", "password": "nope-nope"})
    unknown_email = client.post("/account/login", json={"email": "bob@gmail.com", "password": "secret123"})

    assert wrong_password.status_code == unknown_email.status_code == 401
    assert wrong_password.json() == unknown_email.json() == {"detail": "Invalid credentials."}


def test_me_requires_token(client):
    resp = client.get("/account/me")
    assert resp.status_code == 401


def test_me_rejects_garbage_token(client):
    resp = client.get("/account/me", headers=auth("not-a-jwt"))
    assert resp.status_code == 401


def test_me_rejects_token_signed_with_other_secret(client, user_token):
    forged = TokenCodec(secret="other-secret").issue(1, True)
    resp = client.get("/account/me", headers=auth(forged))
    assert resp.status_code == 401


def test_me_rejects_expired_token(client, settings, user_token):
    expired = TokenCodec(secret=settings.jwt_secret, ttl_seconds=-10).issue(2, False)
    resp = client.get("/account/me", headers=auth(expired))
    assert resp.status_code == 401


def test_me_returns_account_without_password(client, user_token):
    resp = client.get("/account/me", headers=auth(user_token))

    assert resp.status_code == 200
    body = resp.json()
    assert body["email"] == "alice@gmail.com"
    assert body["savedPaymentInfo"]["cardHolderName"] == "Alice Smith"
    assert "password" not in body and "passwordHash" not in body


def test_update_account_and_login_with_new_password(client, user_token):
    resp = client.put(
        "/account/update",
        json={"username": "alice-new", "password": "brand-new-pw"},
        headers=auth(user_token),
    )

    assert resp.status_code == 200
    assert resp.json()["user"]["username"] == "alice-new"
    assert login(client, "alice@gmail.com", "brand-new-pw")


def test_update_account_rejects_taken_email(client, user_token):
    client.post("/account/register", json=register_payload(username="bob", email="bob@gmail.com"))

    resp = client.put("/account/update", json={"email": "bob@gmail.com"}, headers=auth(user_token))

    assert resp.status_code == 409


def test_save_payment_validates_card(client, user_token):
    bad = {"savedPaymentInfo": {"cardNumber": "1234567890123", "cardHolderName": "", "expiryDate": "13/29", "cvv": "12"}}
    resp = client.post("/account/payment", json=bad, headers=auth(user_token))

    assert resp.status_code == 400
    assert len(resp.json()["errors"]) == 4

    good = {"savedPaymentInfo": {"cardNumber": "5555555555554444", "cardHolderName": "Alice", "expiryDate": "01/30", "cvv": "9876"}}
    resp = client.post("/account/payment", json=good, headers=auth(user_token))
    assert resp.status_code == 200

    me = client.get("/account/me", headers=auth(user_token)).json()
    assert me["savedPaymentInfo"]["cardNumber"] == "5555555555554444"


def test_logout_acknowledges(client, user_token):
    resp = client.post("/account/logout", headers=auth(user_token))
    assert resp.status_code == 200
    assert resp.json() == {"message": "Logged out successfully."}
