"""
Review eligibility, uniqueness and product rating aggregates
"""
import pytest

from foody.repositories import ReviewRepository
from tests.conftest import API


async def _product_rating(client, product_id):
    product = (await client.get(f"{API}/products/{product_id}")).json()["product"]
    return product["rating"], product["num_reviews"]


@pytest.fixture
def eligible(place_order, set_status, product):
    """Give an account a completed order containing `product`"""
    async def _eligible(account):
        order = await place_order(account, [(product.id, 1)])
        await set_status(order["id"], "completed")
        return order
    return _eligible


@pytest.mark.asyncio
async def test_review_requires_fulfilled_order(client, customer, product, place_order):
    r = await client.post(f"{API}/reviews/product/{product.id}", json={"rating": 5}, headers=customer.headers)
    assert r.status_code == 400
    assert r.json()["message"] == "You can only review products you have ordered"

    # A pending order is not enough
    await place_order(customer, [(product.id, 1)])
    r = await client.post(f"{API}/reviews/product/{product.id}", json={"rating": 5}, headers=customer.headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_review_once_per_product(client, customer, product, eligible):
    order = await eligible(customer)

    r = await client.post(
        f"{API}/reviews/product/{product.id}",
        json={"rating": 4, "comment": "  Juicy  "},
        headers=customer.headers,
    )
    assert r.status_code == 201, r.text
    review = r.json()["review"]
    assert review["comment"] == "Juicy"
    assert review["order_id"] == order["id"]
    assert review["user"]["id"] == customer.id
    assert await _product_rating(client, product.id) == (4.0, 1)

    r = await client.post(f"{API}/reviews/product/{product.id}", json={"rating": 1}, headers=customer.headers)
    assert r.status_code == 400
    assert r.json()["message"] == "You already reviewed this product"


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [{"rating": 0}, {"rating": 6}, {"rating": 3, "comment": "x" * 501}])
async def test_review_validation(client, customer, product, eligible, payload):
    await eligible(customer)
    r = await client.post(f"{API}/reviews/product/{product.id}", json=payload, headers=customer.headers)
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_rating_tracks_create_update_delete(client, customer, other_customer, product, eligible):
    await eligible(customer)
    await eligible(other_customer)

    first = (await client.post(
        f"{API}/reviews/product/{product.id}", json={"rating": 5}, headers=customer.headers
    )).json()["review"]
    await client.post(f"{API}/reviews/product/{product.id}", json={"rating": 4}, headers=other_customer.headers)
    assert await _product_rating(client, product.id) == (4.5, 2)

    r = await client.put(f"{API}/reviews/{first['id']}", json={"rating": 2}, headers=customer.headers)
    assert r.status_code == 200
    assert await _product_rating(client, product.id) == (3.0, 2)

    r = await client.delete(f"{API}/reviews/{first['id']}", headers=customer.headers)
    assert r.status_code == 200
    assert r.json()["message"] == "Review deleted"
    assert await _product_rating(client, product.id) == (4.0, 1)


@pytest.mark.asyncio
async def test_rating_rounds_half_up_to_one_decimal(client, make_account, product, eligible):
    for rating in (5, 4, 4, 4):
        account = await make_account()
        await eligible(account)
        r = await client.post(
            f"{API}/reviews/product/{product.id}", json={"rating": rating}, headers=account.headers
        )
        assert r.status_code == 201
    # mean 4.25
    assert await _product_rating(client, product.id) == (4.3, 4)


@pytest.mark.asyncio
async def test_only_author_or_admin_can_modify(client, customer, other_customer, admin, product, eligible):
    await eligible(customer)
    review = (await client.post(
        f"{API}/reviews/product/{product.id}", json={"rating": 5}, headers=customer.headers
    )).json()["review"]

    r = await client.put(f"{API}/reviews/{review['id']}", json={"rating": 1}, headers=other_customer.headers)
    assert r.status_code == 403
    r = await client.delete(f"{API}/reviews/{review['id']}", headers=other_customer.headers)
    assert r.status_code == 403

    r = await client.delete(f"{API}/reviews/{review['id']}", headers=admin.headers)
    assert r.status_code == 200
    assert await _product_rating(client, product.id) == (0.0, 0)


@pytest.mark.asyncio
async def test_missing_review(client, customer):
    r = await client.put(f"{API}/reviews/999", json={"rating": 3}, headers=customer.headers)
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_review_listings(client, customer, admin, product, eligible):
    await eligible(customer)
    await client.post(f"{API}/reviews/product/{product.id}", json={"rating": 5}, headers=customer.headers)

    r = await client.get(f"{API}/reviews/product/{product.id}")
    assert r.json()["pagination"]["total"] == 1

    r = await client.get(f"{API}/reviews/my-reviews", headers=customer.headers)
    assert len(r.json()["reviews"]) == 1

    assert (await client.get(f"{API}/reviews", headers=customer.headers)).status_code == 403
    r = await client.get(f"{API}/reviews", headers=admin.headers)
    assert r.json()["pagination"]["total"] == 1


@pytest.mark.asyncio
async def test_duplicate_review_caught_by_unique_constraint(client, customer, product, eligible, monkeypatch):
    await eligible(customer)
    r = await client.post(f"{API}/reviews/product/{product.id}", json={"rating": 5}, headers=customer.headers)
    assert r.status_code == 201

    # The duplicate check sees nothing, so the insert itself collides
    async def no_review(self, user_id, product_id):
        return None

    monkeypatch.setattr(ReviewRepository, "get_for_user_product", no_review)

    r = await client.post(f"{API}/reviews/product/{product.id}", json={"rating": 1}, headers=customer.headers)
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "You already reviewed this product"}
    assert await _product_rating(client, product.id) == (5.0, 1)
