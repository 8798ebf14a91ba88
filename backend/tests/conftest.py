"""Shared test configuration and fixtures.

Each test gets a fresh in-memory SQLite database (aiosqlite) with all tables
created, so tests are fully isolated and need no running PostgreSQL.
"""

import os

# Must be set before stayhub.config is imported.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["CLERK_JWT_KEY"] = "test-session-signing-key"
os.environ["CLERK_JWT_ALGORITHMS"] = '["HS256"]'
os.environ["GEMINI_API_KEY"] = "test-gemini-key"
os.environ["SMTP_HOST"] = ""
os.environ["SENDER_EMAIL"] = ""

import uuid
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from decimal import Decimal

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from jose import jwt
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.pool import StaticPool

from stayhub.config import settings
from stayhub.database import Base, get_db
from stayhub.main import app
from stayhub.models.hotel import Hotel
from stayhub.models.room import Room
from stayhub.models.user import User


def make_session_token(user_id: str, **claims) -> str:
    """Issue a session token the way the identity provider would."""
    return jwt.encode({"sub": user_id, **claims}, settings.clerk_jwt_key, algorithm="HS256")


# ---------------------------------------------------------------------------
# Per-test database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session on a brand-new in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session = AsyncSession(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def session_factory(db_session: AsyncSession):
    """Stand-in for ``async_session_factory`` that hands out the test session."""

    @asynccontextmanager
    async def _factory():
        yield db_session

    return _factory


# ---------------------------------------------------------------------------
# Convenience fixtures: users
# ---------------------------------------------------------------------------


async def create_user(db_session: AsyncSession, role: str = "user") -> User:
    unique = uuid.uuid4().hex[:8]
    user = User(
        id=f"user_{unique}",
        username="Test User",
        email=f"testuser-{unique}@test.com",
        role=role,
        recent_searched_cities=[],
    )
    db_session.add(user)
    await db_session.flush()
    await db_session.refresh(user)
    return user


@pytest_asyncio.fixture
async def test_user(db_session: AsyncSession) -> User:
    """Create and return a guest user directly in the DB."""
    return await create_user(db_session)


@pytest_asyncio.fixture
async def auth_headers(test_user: User) -> dict[str, str]:
    """Return Authorization headers for the test user."""
    return {"Authorization": f"Bearer {make_session_token(test_user.id)}"}


@pytest_asyncio.fixture
async def hotel_owner(db_session: AsyncSession) -> User:
    return await create_user(db_session, role="hotelOwner")


# ---------------------------------------------------------------------------
# Convenience fixtures: hotels and rooms
# ---------------------------------------------------------------------------


async def create_hotel(db_session: AsyncSession, owner: User, name: str, city: str) -> Hotel:
    hotel = Hotel(
        name=name,
        address=f"1 Main Street, {city}",
        contact="+0123456789",
        city=city,
        owner_id=owner.id,
    )
    db_session.add(hotel)
    await db_session.flush()
    await db_session.refresh(hotel)
    return hotel


async def create_room(
    db_session: AsyncSession,
    hotel: Hotel,
    room_type: str = "Double Bed",
    price: str = "1500.00",
    amenities: list[str] | None = None,
    is_available: bool = True,
) -> Room:
    room = Room(
        hotel_id=hotel.id,
        room_type=room_type,
        price_per_night=Decimal(price),
        amenities=amenities if amenities is not None else ["Free WiFi", "Room Service"],
        images=["https://img.example/room.jpg"],
        is_available=is_available,
    )
    db_session.add(room)
    await db_session.flush()
    await db_session.refresh(room)
    return room


@pytest_asyncio.fixture
async def test_hotel(db_session: AsyncSession, hotel_owner: User) -> Hotel:
    return await create_hotel(db_session, hotel_owner, "Seaside Retreat", "Mumbai")


@pytest_asyncio.fixture
async def test_room(db_session: AsyncSession, test_hotel: Hotel) -> Room:
    """A ₹1500/night double room in Mumbai."""
    return await create_room(db_session, test_hotel)


@pytest.fixture
def make_user(db_session: AsyncSession):
    async def _make(role: str = "user") -> User:
        return await create_user(db_session, role)

    return _make


@pytest.fixture
def make_hotel(db_session: AsyncSession, hotel_owner: User):
    async def _make(name: str, city: str) -> Hotel:
        return await create_hotel(db_session, hotel_owner, name, city)

    return _make


@pytest.fixture
def make_room(db_session: AsyncSession):
    async def _make(hotel: Hotel, **kwargs) -> Room:
        return await create_room(db_session, hotel, **kwargs)

    return _make


@pytest.fixture
def auth_headers_for():
    """Return a function building Authorization headers for any user."""

    def _headers(user: User) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_session_token(user.id)}"}

    return _headers


@pytest.fixture
def session_token():
    """Return the token factory so tests can add custom claims."""
    return make_session_token
