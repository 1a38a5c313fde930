import pytest
from unittest.mock import AsyncMock, patch

from common.providers.locking.memory_lock import InMemoryLock
from tests.fixtures import FIXED_NOW, InMemoryCounterStore


@pytest.fixture
def counter_store():
    """In-memory counter store for service tests."""
    return InMemoryCounterStore()


@pytest.fixture
def fixed_clock():
    """Clock frozen at FIXED_NOW."""
    return lambda: FIXED_NOW


@pytest.fixture
def memory_lock():
    return InMemoryLock()


@pytest.fixture
def mock_lock_provider():
    """Create a mock lock provider instance for testing."""
    lock = AsyncMock()
    lock.acquire_lock = AsyncMock(return_value="test-lock-token")
    lock.acquire_lock_with_retry = AsyncMock(return_value="test-lock-token")
    lock.release_lock = AsyncMock(return_value=True)
    lock.is_locked = AsyncMock(return_value=False)
    return lock


@pytest.fixture(autouse=True)
def mock_get_lock_provider(mock_lock_provider):
    """Keep unit tests off Redis."""
    with patch(
        "packages.metering.services.admission_gate.get_lock_provider",
        return_value=mock_lock_provider,
    ):
        yield
