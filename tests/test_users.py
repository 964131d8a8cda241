"""
Admin user management
"""
import pytest

from tests.conftest import API, PASSWORD


@pytest.mark.asyncio
async def test_user_admin_is_admin_only(client, staff):
    r = await client.get(f"{API}/users", headers=staff.headers)
    assert r.status_code == 403
    assert r.json()["message"] == "Role 'staff' is not authorized to access this route"


@pytest.mark.asyncio
async def test_list_and_search(client, admin, customer, other_customer):
    r = await client.get(f"{API}/users", headers=admin.headers)
    body = r.json()
    assert body["pagination"]["total"] == 3
    assert all("hashed_password" not in user for user in body["users"])

    r = await client.get(f"{API}/users", params={"search": "olive"}, headers=admin.headers)
    assert [u["id"] for u in r.json()["users"]] == [other_customer.id]


@pytest.mark.asyncio
async def test_create_user_with_role(client, admin, customer):
    r = await client.post(
        f"{API}/users",
        json={"name": "New Waiter", "email": "Waiter@FoodyApp.com", "password": PASSWORD, "role": "staff"},
        headers=admin.headers,
    )
    assert r.status_code == 201, r.text
    user = r.json()["user"]
    assert user["role"] == "staff"
    assert user["email"] == "waiter@foodyapp.com"

    r = await client.post(f"{API}/auth/login", json={"email": "waiter@foodyapp.com", "password": PASSWORD})
    assert r.status_code == 200

    r = await client.post(
        f"{API}/users",
        json={"name": "Copy Cat", "email": customer.email, "password": PASSWORD},
        headers=admin.headers,
    )
    assert r.status_code == 400
    assert r.json()["message"] == "Email already exists"


@pytest.mark.asyncio
async def test_role_update(client, admin, customer):
    r = await client.put(f"{API}/users/{customer.id}/role", json={"role": "chef"}, headers=admin.headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid role"

    r = await client.put(f"{API}/users/{customer.id}/role", json={"role": "staff"}, headers=admin.headers)
    assert r.status_code == 200
    assert r.json()["user"]["role"] == "staff"

    # The promoted user now passes staff checks with the same token
    r = await client.get(f"{API}/orders/all", headers=customer.headers)
    assert r.status_code == 200


@pytest.mark.asyncio
async def test_update_user_rejects_taken_email(client, admin, customer, other_customer):
    r = await client.put(f"{API}/users/{customer.id}", json={"email": other_customer.email}, headers=admin.headers)
    assert r.status_code == 400

    r = await client.put(f"{API}/users/{customer.id}", json={"name": "Casey C."}, headers=admin.headers)
    assert r.json()["user"]["name"] == "Casey C."


@pytest.mark.asyncio
async def test_user_orders(client, admin, customer, product, place_order):
    order = await place_order(customer, [(product.id, 1)])
    r = await client.get(f"{API}/users/{customer.id}/orders", headers=admin.headers)
    assert [o["id"] for o in r.json()["orders"]] == [order["id"]]

    assert (await client.get(f"{API}/users/999/orders", headers=admin.headers)).status_code == 404


@pytest.mark.asyncio
async def test_delete_user(client, admin, customer, other_customer, product, place_order):
    await place_order(customer, [(product.id, 1)])

    r = await client.delete(f"{API}/users/{customer.id}", headers=admin.headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Cannot delete a user who has orders or bills"

    r = await client.delete(f"{API}/users/{other_customer.id}", headers=admin.headers)
    assert r.json() == {"success": True, "message": "User deleted"}
    assert (await client.get(f"{API}/users/{other_customer.id}", headers=admin.headers)).status_code == 404
