import time
import uuid
from typing import Dict, Optional, Tuple

from common.core.otel_axiom_exporter import get_logger
from .interface import DistributedLockInterface

logger = get_logger(__name__)


class InMemoryLock(DistributedLockInterface):
    """Process-local lock table with expiry.

    Only serializes callers inside one process, so it suits single-worker
    deployments and tests. Multi-pod deployments use RedisLock.
    """

    def __init__(self):
        # resource_key -> (token, expires_at monotonic)
        self._locks: Dict[str, Tuple[str, float]] = {}

    def _current(self, resource_key: str) -> Optional[str]:
        held = self._locks.get(resource_key)
        if held is None:
            return None
        token, expires_at = held
        if time.monotonic() >= expires_at:
            del self._locks[resource_key]
            return None
        return token

    async def acquire_lock(
        self, resource_key: str, timeout_seconds: int = 30
    ) -> Optional[str]:
        # No await between check and set, so this is atomic on the event loop
        if self._current(resource_key) is not None:
            logger.debug(f"Failed to acquire lock for {resource_key} - already locked")
            return None

        lock_token = str(uuid.uuid4())
        self._locks[resource_key] = (lock_token, time.monotonic() + timeout_seconds)
        logger.debug(f"Acquired lock for {resource_key} with token {lock_token}")
        return lock_token

    async def release_lock(self, resource_key: str, lock_token: str) -> bool:
        if self._current(resource_key) != lock_token:
            logger.warning(
                f"Cannot release lock for {resource_key} - token mismatch or lock expired"
            )
            return False
        del self._locks[resource_key]
        logger.debug(f"Released lock for {resource_key}")
        return True

    async def is_locked(self, resource_key: str) -> bool:
        return self._current(resource_key) is not None
