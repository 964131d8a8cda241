"""
Shared fixtures: an in-memory database per test, an ASGI client bound to it,
and accounts for each role.
"""
import os

# Must be set before foody is imported: config is read at import time
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"

from collections import namedtuple

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine, async_sessionmaker, AsyncSession
from sqlalchemy import event
from sqlalchemy.pool import StaticPool

from foody.main import app
from foody.core.security import create_user_token, get_password_hash
from foody.database.base import Base
from foody.database.session import get_db, set_sqlite_pragma
from foody.database.models import Category, Product, User, UserRole

API = "/api/v1"
PASSWORD = "secret123"

Account = namedtuple("Account", ["id", "email", "token", "headers"])


# ─── Database ──────────────────────────────────────────────────────────────────
@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    event.listen(engine.sync_engine, "connect", set_sqlite_pragma)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(bind=engine, class_=AsyncSession, autoflush=False, expire_on_commit=False)


@pytest_asyncio.fixture
async def db(session_factory):
    """A session for arranging and inspecting data outside of requests"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


# ─── Accounts ──────────────────────────────────────────────────────────────────
@pytest_asyncio.fixture
async def make_account(session_factory):
    hashed = get_password_hash(PASSWORD)
    counter = {"n": 0}

    async def _make(role: UserRole = UserRole.CUSTOMER, name: str = "Test User") -> Account:
        counter["n"] += 1
        email = f"{role.value}{counter['n']}@foodyapp.com"
        async with session_factory() as session:
            user = User(name=name, email=email, hashed_password=hashed, role=role)
            session.add(user)
            await session.commit()
            await session.refresh(user)
        token = create_user_token(user)
        return Account(user.id, email, token, {"Authorization": f"Bearer {token}"})

    return _make


@pytest_asyncio.fixture
async def customer(make_account):
    return await make_account(UserRole.CUSTOMER, "Casey Customer")


@pytest_asyncio.fixture
async def other_customer(make_account):
    return await make_account(UserRole.CUSTOMER, "Olive Other")


@pytest_asyncio.fixture
async def staff(make_account):
    return await make_account(UserRole.STAFF, "Sam Staff")


@pytest_asyncio.fixture
async def admin(make_account):
    return await make_account(UserRole.ADMIN, "Ada Admin")


# ─── Menu ──────────────────────────────────────────────────────────────────────
@pytest_asyncio.fixture
async def category(session_factory):
    async with session_factory() as session:
        category = Category(name="Mains")
        session.add(category)
        await session.commit()
        await session.refresh(category)
    return category


@pytest_asyncio.fixture
async def make_product(session_factory, category):
    async def _make(name: str = "Momo", price: float = 300.0, **fields) -> Product:
        async with session_factory() as session:
            product = Product(name=name, price=price, category_id=category.id, **fields)
            session.add(product)
            await session.commit()
            await session.refresh(product)
        return product

    return _make


@pytest_asyncio.fixture
async def product(make_product):
    return await make_product()


# ─── Ordering ──────────────────────────────────────────────────────────────────
@pytest_asyncio.fixture
async def place_order(client):
    """Fill the account's cart and check out; returns the order JSON"""
    async def _place(account: Account, lines: list[tuple[int, int]], table_number: str = "T1") -> dict:
        for product_id, quantity in lines:
            r = await client.post(
                f"{API}/cart/add",
                json={"product_id": product_id, "quantity": quantity},
                headers=account.headers,
            )
            assert r.status_code == 200, r.text
        r = await client.post(f"{API}/orders", json={"table_number": table_number}, headers=account.headers)
        assert r.status_code == 201, r.text
        return r.json()["order"]

    return _place


@pytest_asyncio.fixture
async def set_status(client, staff):
    async def _set(order_id: int, new_status: str) -> dict:
        r = await client.put(
            f"{API}/orders/{order_id}/status",
            json={"status": new_status},
            headers=staff.headers,
        )
        assert r.status_code == 200, r.text
        return r.json()["order"]

    return _set
