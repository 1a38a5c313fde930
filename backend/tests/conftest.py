# Shared pytest configuration and fixtures for all test types
from datetime import datetime, timedelta, timezone

import jwt
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from slowapi import Limiter
from slowapi.util import get_remote_address
from unittest.mock import patch

# Create test limiter with no limits and in-memory storage
test_limiter = Limiter(
    key_func=get_remote_address,
    default_limits=[],
    storage_uri="memory://",
)

# Patch the limiter before importing the app so decorators use test limiter
with patch("common.providers.rate_limiter.limiter.limiter", test_limiter):
    from api.main import app

from common.core.config import settings
from common.db.base import Base
from packages.accounts.models.database.account import AccountEntity
from packages.auth.providers.factory import IdentityProviderFactory
from packages.metering.models.database.consumption_event import (  # noqa: F401
    ConsumptionEventEntity,
)

# Test database URL
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


def make_token(account_id: str, expires_in: timedelta = timedelta(hours=1)) -> str:
    """Mint an access token the way the identity service would."""
    claims = {
        "sub": account_id,
        "exp": datetime.now(timezone.utc) + expires_in,
    }
    return jwt.encode(claims, settings.auth_jwt_secret, algorithm="HS256")


@pytest_asyncio.fixture(scope="function")
async def test_engine():
    """Create test database engine and initialize schema."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def test_connection(test_engine):
    """Create test connection with outer transaction for rollback isolation."""
    async with test_engine.connect() as connection:
        trans = await connection.begin()
        yield connection
        await trans.rollback()


@pytest_asyncio.fixture(scope="function")
async def test_session_factory(test_connection):
    """Create session factory bound to test connection.

    Using join_transaction_mode="create_savepoint" so commits inside
    get_session()/transaction() release savepoints instead of the outer
    transaction.
    """
    return async_sessionmaker(
        bind=test_connection,
        class_=AsyncSession,
        expire_on_commit=False,
        join_transaction_mode="create_savepoint",
    )


@pytest_asyncio.fixture(scope="function")
async def test_db(test_session_factory):
    """Create a test database session."""
    async with test_session_factory() as session:
        yield session


@pytest_asyncio.fixture(scope="function", autouse=True)
async def patch_lazy_sessions(test_session_factory, monkeypatch):
    """
    Patch session factories to use test database.

    Repositories constructed without a session run the real get_session()
    commit/rollback logic against the test connection.
    """
    monkeypatch.setattr("common.db.scoped.AsyncSessionLocal", test_session_factory)
    monkeypatch.setattr(
        "common.db.scoped.AsyncSessionLocalReadonly", test_session_factory
    )


@pytest_asyncio.fixture(scope="function")
async def client():
    """Create a test client that authenticates with real bearer tokens."""
    IdentityProviderFactory.clear_cache()
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture(scope="function")
async def starter_account(test_db: AsyncSession):
    """Create an account on the starter plan."""
    account = AccountEntity(id="acct_starter", email="starter@example.com", tier_id="starter")
    test_db.add(account)
    await test_db.commit()
    return account


@pytest_asyncio.fixture(scope="function")
async def pro_account(test_db: AsyncSession):
    """Create an account on the pro plan."""
    account = AccountEntity(id="acct_pro", email="pro@example.com", tier_id="pro")
    test_db.add(account)
    await test_db.commit()
    return account


@pytest_asyncio.fixture(scope="function")
def auth_headers():
    """Build Authorization headers for an account id."""

    def _headers(account_id: str) -> dict:
        return {"Authorization": f"Bearer {make_token(account_id)}"}

    return _headers
