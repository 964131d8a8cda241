"""
Registration, login, cookie/bearer authentication and profile management
"""
import pytest

from tests.conftest import API, PASSWORD


async def _register(client, email="new@foodyapp.com", password="hunter22", name="New Person"):
    return await client.post(
        f"{API}/auth/register",
        json={"name": name, "email": email, "password": password},
    )


@pytest.mark.asyncio
async def test_register_creates_customer_and_sets_cookie(client):
    r = await _register(client)
    assert r.status_code == 201, r.text
    body = r.json()
    assert body["success"] is True
    assert body["token"]
    assert body["user"]["role"] == "customer"
    assert "hashed_password" not in body["user"]
    assert "token" in r.cookies


@pytest.mark.asyncio
async def test_register_ignores_requested_role(client):
    r = await client.post(
        f"{API}/auth/register",
        json={"name": "Sneaky", "email": "sneaky@foodyapp.com", "password": "hunter22", "role": "admin"},
    )
    assert r.status_code == 201
    assert r.json()["user"]["role"] == "customer"


@pytest.mark.asyncio
async def test_register_duplicate_email(client):
    await _register(client)
    r = await _register(client)
    assert r.status_code == 400
    assert r.json() == {"success": False, "message": "Email already registered"}


@pytest.mark.asyncio
@pytest.mark.parametrize("payload, message", [
    ({"name": "A", "email": "a@foodyapp.com", "password": "hunter22"}, "Name must be at least 2 characters"),
    ({"name": "Alex", "email": "a@foodyapp.com", "password": "123"}, "Password must be at least 6 characters"),
])
async def test_register_validation_messages(client, payload, message):
    r = await client.post(f"{API}/auth/register", json=payload)
    assert r.status_code == 400
    assert r.json()["success"] is False
    assert r.json()["message"] == message


@pytest.mark.asyncio
async def test_register_invalid_email(client):
    r = await _register(client, email="not-an-email")
    assert r.status_code == 400
    assert r.json()["success"] is False


@pytest.mark.asyncio
async def test_login_success_and_failure(client, customer):
    r = await client.post(f"{API}/auth/login", json={"email": customer.email, "password": PASSWORD})
    assert r.status_code == 200, r.text
    assert r.json()["user"]["id"] == customer.id

    r = await client.post(f"{API}/auth/login", json={"email": customer.email, "password": "wrong-one"})
    assert r.status_code == 401
    assert r.json()["message"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_me_requires_token(client):
    r = await client.get(f"{API}/auth/me")
    assert r.status_code == 401
    assert r.json()["success"] is False


@pytest.mark.asyncio
async def test_me_rejects_tampered_token(client):
    r = await client.get(f"{API}/auth/me", headers={"Authorization": "Bearer not.a.jwt"})
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_me_with_bearer_token(client, customer):
    r = await client.get(f"{API}/auth/me", headers=customer.headers)
    assert r.status_code == 200
    assert r.json()["user"]["email"] == customer.email


@pytest.mark.asyncio
async def test_me_with_cookie_after_login(client, customer):
    r = await client.post(f"{API}/auth/login", json={"email": customer.email, "password": PASSWORD})
    assert r.status_code == 200
    r = await client.get(f"{API}/auth/me")
    assert r.status_code == 200
    assert r.json()["user"]["id"] == customer.id


@pytest.mark.asyncio
async def test_update_profile_rejects_taken_email(client, customer, other_customer):
    r = await client.put(f"{API}/auth/me", json={"email": other_customer.email}, headers=customer.headers)
    assert r.status_code == 400

    r = await client.put(f"{API}/auth/me", json={"name": "Casey Renamed"}, headers=customer.headers)
    assert r.status_code == 200
    assert r.json()["user"]["name"] == "Casey Renamed"


@pytest.mark.asyncio
async def test_update_password(client, customer):
    r = await client.put(
        f"{API}/auth/update-password",
        json={"current_password": "wrong-one", "new_password": "brandnew1"},
        headers=customer.headers,
    )
    assert r.status_code == 401

    r = await client.put(
        f"{API}/auth/update-password",
        json={"current_password": PASSWORD, "new_password": "brandnew1"},
        headers=customer.headers,
    )
    assert r.status_code == 200
    assert r.json()["token"]

    r = await client.post(f"{API}/auth/login", json={"email": customer.email, "password": "brandnew1"})
    assert r.status_code == 200
