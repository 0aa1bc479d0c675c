import pytest


from tests.conftest import auth, login, make_settings, product_payload, register_payload


def test_non_admin_cannot_manage_products(client, user_token):
    resp = client.post("/admin/products", json=product_payload(), headers=auth(user_token))
    assert resp.status_code == 403


def test_admin_routes_require_token(client):
    resp = client.post("/admin/products", json=product_payload())
    assert resp.status_code == 401


def test_create_product_sets_rating_and_creation_date(client, admin_token):
    resp = client.post("/admin/products", json=product_payload(), headers=auth(admin_token))

    assert resp.status_code == 201
    body = resp.json()
    assert body["rating"] == 0
    assert body["creationDate"]
    assert body["price"] == pytest.approx(19.99)
    assert body["sizes"] == ["S", "M", "L"]


def test_create_product_collects_validation_errors(client, admin_token):
    payload = product_payload(price=0, tags=[], sizes=["M", "XXXL"], imageUrl="not a url")
    resp = client.post("/admin/products", json=payload, headers=auth(admin_token))

    assert resp.status_code == 400
    fields = {e["field"].split(".")[0] for e in resp.json()["errors"]}
    assert {"price", "tags", "sizes", "imageUrl"} <= fields


def test_update_product_merges_given_fields_only(client, admin_token, create_product):
    product = create_product()

    resp = client.put(
        f"/admin/products/{product['id']}",
        json={"price": 25.5, "tags": ["winter"]},
        headers=auth(admin_token),
    )

    assert resp.status_code == 200
    body = resp.json()
    assert body["price"] == pytest.approx(25.50)
    assert body["tags"] == ["winter"]
    assert body["name"] == product["name"]
    assert body["sizes"] == product["sizes"]


def test_update_product_rejects_invalid_fields(client, admin_token, create_product):
    product = create_product()
    resp = client.put(f"/admin/products/{product['id']}", json={"sizes": []}, headers=auth(admin_token))
    assert resp.status_code == 400


def test_update_and_delete_unknown_product(client, admin_token):
    assert client.put("/admin/products/999", json={"price": 10}, headers=auth(admin_token)).status_code == 404
    assert client.delete("/admin/products/999", headers=auth(admin_token)).status_code == 404


def test_delete_product(client, admin_token, create_product):
    product = create_product()

    resp = client.delete(f"/admin/products/{product['id']}", headers=auth(admin_token))

    assert resp.status_code == 200
    assert client.get(f"/products/{product['id']}").status_code == 404


def test_create_admin_account(client, admin_token):
    resp = client.post(
        "/admin/create",
        json={"username": "second", "email": "second@gmail.com", "password": "second-pw"},
        headers=auth(admin_token),
    )

    assert resp.status_code == 201
    assert resp.json()["user"]["isAdmin"] is True

    token = login(client, "second@gmail.com", "second-pw")
    assert client.post("/admin/products", json=product_payload(), headers=auth(token)).status_code == 201


def test_promote_user(client, admin_token, user_token):
    me = client.get("/account/me", headers=auth(user_token)).json()

    resp = client.put(f"/admin/promote/{me['id']}", headers=auth(admin_token))
    assert resp.status_code == 200
    assert resp.json()["user"]["isAdmin"] is True

    again = client.put(f"/admin/promote/{me['id']}", headers=auth(admin_token))
    assert again.status_code == 409


def test_promote_unknown_user(client, admin_token):
    assert client.put("/admin/promote/999", headers=auth(admin_token)).status_code == 404


def test_promotion_needs_fresh_token_when_flag_comes_from_token(client, admin_token, user_token):
    me = client.get("/account/me", headers=auth(user_token)).json()
    client.put(f"/admin/promote/{me['id']}", headers=auth(admin_token))

    # stary token nadal ma isAdmin=false
    stale = client.post("/admin/products", json=product_payload(), headers=auth(user_token))
    assert stale.status_code == 403

    fresh = login(client, "alice@gmail.com", "secret123")
    assert client.post("/admin/products", json=product_payload(), headers=auth(fresh)).status_code == 201


def test_promotion_applies_immediately_when_flag_read_from_database():
    from fastapi.testclient import TestClient

    from app.api import create_app

    client = TestClient(create_app(make_settings(admin_flag_from_database=True)))
    client.post("/account/register", json=register_payload())
    user_token = login(client, "alice@gmail.com", "secret123")
    admin_token = login(client, "admin@gmail.com", "admin-secret")

    me = client.get("/account/me", headers=auth(user_token)).json()
    client.put(f"/admin/promote/{me['id']}", headers=auth(admin_token))

    resp = client.post("/admin/products", json=product_payload(), headers=auth(user_token))
    assert resp.status_code == 201
