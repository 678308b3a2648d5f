import os
import sys
from decimal import Decimal
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

sys.path.append(str(Path(__file__).parents[1] / "src"))

# Keep the app's own engine off the on-disk database during tests.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_JSON", "false")

from hsa.db.session import get_db  # noqa: E402
from hsa.main import app  # noqa: E402

TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite://")

# One shared in-memory database per engine; StaticPool keeps the single connection alive.
test_engine = create_async_engine(
    TEST_DATABASE_URL,
    echo=False,
    poolclass=StaticPool,
)
TestSessionLocal = async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)

TEST_PASSWORD = "password123"


@pytest.fixture(scope="function")
async def setup_database():
    """Create tables for tests that need the database, and drop them after.

    Not autouse, so pure unit tests (rules, generators) run without a database.
    """
    from hsa.models.base import Base

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield

    async with test_engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    # Fresh connection per test; each test runs on its own event loop
    await test_engine.dispose()


@pytest.fixture
async def db_session(setup_database):
    """Provide test database session with fresh connection per test."""
    async with TestSessionLocal() as session:
        yield session
        await session.rollback()


@pytest.fixture
async def test_user(db_session: AsyncSession):
    """Create a registered user with an empty HSA account."""
    from hsa.core.security import hash_password
    from hsa.models.account import HSAAccount
    from hsa.models.user import User

    user = User(
        email="testuser@example.com",
        password_hash=hash_password(TEST_PASSWORD),
        first_name="Test",
        last_name="User",
    )
    db_session.add(user)
    await db_session.flush()
    db_session.add(HSAAccount(user_id=user.id, balance=Decimal("0.00")))
    await db_session.commit()
    return user


@pytest.fixture
async def funded_user(db_session: AsyncSession, test_user):
    """Test user whose account holds 100.00."""
    from hsa.services.account import AccountService

    await AccountService(db_session).deposit(test_user.id, Decimal("100.00"))
    return test_user


@pytest.fixture
async def active_card(db_session: AsyncSession, test_user):
    """Active virtual card for the test user."""
    from hsa.services.card import CardService

    return await CardService(db_session).issue_card(test_user.id)


@pytest.fixture
async def auth_headers(test_user):
    """Provide authentication headers with valid JWT token."""
    from hsa.core.security import create_access_token

    token = create_access_token(user_id=test_user.id)
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
async def client(db_session: AsyncSession):
    """Provide test client with database override."""
    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
