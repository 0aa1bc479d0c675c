import pytest

from tests.conftest import VALID_CARD, auth


@pytest.fixture
def product(create_product):
    return create_product()


def _review(client, token, product_id, **body):
    body.setdefault("rating", 4)
    return client.post(f"/products/{product_id}/review", json=body, headers=auth(token))


def test_review_requires_purchase(client, user_token, product):
    resp = _review(client, user_token, product["id"])

    assert resp.status_code == 403
    assert resp.json() == {"detail": "You can only review a product that you have purchased."}


def test_review_after_purchase_then_duplicate(client, user_token, product):
    client.post(f"/purchase/{product['id']}", json={"quantity": 1, "size": "M"}, headers=auth(user_token))

    first = _review(client, user_token, product["id"], rating=5, comment="Great fit")
    assert first.status_code == 201
    assert first.json()["rating"] == 5
    assert first.json()["comment"] == "Great fit"

    second = _review(client, user_token, product["id"], rating=1)
    assert second.status_code == 409
    assert second.json() == {"detail": "You have already reviewed this product."}


def test_guest_order_does_not_allow_review(client, user_token, product):
    guest = {
        "quantity": 1,
        "size": "M",
        "shippingInfo": {"address": "1 Main St", "state": "CA", "zipcode": "94105", "city": "SF"},
        "paymentInfo": {"cardNumber": VALID_CARD, "cardHolderName": "Alice", "expiryDate": "12/29", "cvv": "123"},
    }
    client.post(f"/purchase/{product['id']}/guest", json=guest)

    assert _review(client, user_token, product["id"]).status_code == 403


def test_review_unknown_product(client, user_token):
    assert _review(client, user_token, 999).status_code == 404


def test_review_rating_out_of_range(client, user_token, product):
    resp = _review(client, user_token, product["id"], rating=6)
    assert resp.status_code == 400
    assert resp.json()["errors"][0]["field"] == "rating"


def test_review_requires_token(client, product):
    resp = client.post(f"/products/{product['id']}/review", json={"rating": 3})
    assert resp.status_code == 401


def test_review_created_at_override(client, user_token, product):
    client.post(f"/purchase/{product['id']}", json={"quantity": 1, "size": "M"}, headers=auth(user_token))

    resp = _review(client, user_token, product["id"], createdAt="2024-05-01T10:00:00Z")

    assert resp.status_code == 201
    assert resp.json()["createdAt"].startswith("2024-05-01T10:00:00")


def test_list_reviews_with_average_and_usernames(client, admin_token, user_token, product):
    client.post(f"/purchase/{product['id']}", json={"quantity": 1, "size": "M"}, headers=auth(user_token))
    client.post(f"/purchase/{product['id']}", json={"quantity": 1, "size": "S"}, headers=auth(admin_token))
    _review(client, user_token, product["id"], rating=5)
    _review(client, admin_token, product["id"], rating=2)

    resp = client.get(f"/products/{product['id']}/reviews")

    assert resp.status_code == 200
    body = resp.json()
    assert body["averageRating"] == 3.5
    assert [r["username"] for r in body["reviews"]] == ["alice", "admin"]


def test_list_reviews_empty(client, product):
    resp = client.get(f"/products/{product['id']}/reviews")
    assert resp.json() == {"reviews": [], "averageRating": 0}
