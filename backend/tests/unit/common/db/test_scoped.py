import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy import text

from common.db.base import Base
from common.db.scoped import (
    get_current_session,
    get_session,
    in_transaction,
    transaction,
)
from packages.accounts.models.database.account import AccountEntity


# Create a separate test engine for scoped tests
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture(scope="function")
async def scoped_test_engine():
    """Create a test engine for scoped session tests."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def scoped_session_factory(scoped_test_engine):
    """Create session factory for scoped tests."""
    return async_sessionmaker(
        scoped_test_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@pytest_asyncio.fixture(scope="function")
async def patch_session_factories(scoped_session_factory, monkeypatch):
    """Patch the session factories in scoped.py to use test database."""
    monkeypatch.setattr("common.db.scoped.AsyncSessionLocal", scoped_session_factory)
    monkeypatch.setattr(
        "common.db.scoped.AsyncSessionLocalReadonly", scoped_session_factory
    )
    yield


async def account_exists(session_factory, account_id: str) -> bool:
    async with session_factory() as verify_session:
        result = await verify_session.execute(
            text("SELECT id FROM accounts WHERE id = :id"), {"id": account_id}
        )
        return result.fetchone() is not None


class TestTransaction:
    """Test the transaction() context manager with real database."""

    async def test_transaction_commits_on_success(
        self, patch_session_factories, scoped_session_factory
    ):
        """Test that transaction commits data to database."""
        async with transaction() as session:
            session.add(AccountEntity(id="acct_tx", tier_id="pro"))

        assert await account_exists(scoped_session_factory, "acct_tx")

    async def test_transaction_rollback_on_exception(
        self, patch_session_factories, scoped_session_factory
    ):
        """Test that transaction rolls back on exception."""
        with pytest.raises(ValueError):
            async with transaction() as session:
                session.add(AccountEntity(id="acct_rollback"))
                await session.flush()  # Make sure it would have been written
                raise ValueError("Simulated error")

        assert not await account_exists(scoped_session_factory, "acct_rollback")

    async def test_transaction_sets_session_in_context(self, patch_session_factories):
        """Test that transaction sets session in context."""
        async with transaction() as session:
            captured_session = get_current_session(readonly=False)
            was_in_transaction = in_transaction(readonly=False)

        assert captured_session is session
        assert was_in_transaction is True
        # After exiting, context should be cleared
        assert get_current_session(readonly=False) is None
        assert in_transaction(readonly=False) is False

    async def test_reads_see_write_transaction(self, patch_session_factories):
        """A readonly lookup inside a write transaction shares its session."""
        async with transaction() as session:
            assert get_current_session(readonly=True) is session


class TestGetSession:
    """Test the per-operation get_session() helper."""

    async def test_get_session_commits(
        self, patch_session_factories, scoped_session_factory
    ):
        async with get_session() as session:
            session.add(AccountEntity(id="acct_op"))

        assert await account_exists(scoped_session_factory, "acct_op")

    async def test_get_session_reuses_transaction(self, patch_session_factories):
        async with transaction() as outer_session:
            async with get_session() as inner_session:
                assert inner_session is outer_session

    async def test_get_session_rolls_back(
        self, patch_session_factories, scoped_session_factory
    ):
        with pytest.raises(RuntimeError):
            async with get_session() as session:
                session.add(AccountEntity(id="acct_failed"))
                await session.flush()
                raise RuntimeError("boom")

        assert not await account_exists(scoped_session_factory, "acct_failed")

    async def test_readonly_session_does_not_commit(
        self, patch_session_factories, scoped_session_factory
    ):
        async with get_session(readonly=True) as session:
            session.add(AccountEntity(id="acct_readonly"))
            await session.flush()

        assert not await account_exists(scoped_session_factory, "acct_readonly")
