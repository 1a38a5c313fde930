"""
Operation-scoped database sessions.

Repositories acquire a session per operation and release it immediately,
so no connection is held while a request waits on the places provider or
a distributed lock.

Usage:
    # Single operation - acquires, commits and releases
    async with get_session() as session:
        result = await session.execute(query)

    # Several operations sharing one session and one commit
    async with transaction():
        await repo.record(...)
        await repo.record(...)

    # Reads that never commit
    async with get_session(readonly=True) as session:
        ...
"""

import time
from contextlib import asynccontextmanager
from contextvars import ContextVar
from typing import AsyncGenerator, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from common.core.otel_axiom_exporter import get_logger
from common.db.session import AsyncSessionLocal, AsyncSessionLocalReadonly

logger = get_logger(__name__)

# Session of the enclosing transaction() block, if any
_write_session: ContextVar[Optional[AsyncSession]] = ContextVar(
    "db_write_session", default=None
)
_read_session: ContextVar[Optional[AsyncSession]] = ContextVar(
    "db_read_session", default=None
)


def get_current_session(readonly: bool = False) -> Optional[AsyncSession]:
    """Return the session of the enclosing transaction, or None."""
    if readonly:
        # A write transaction also serves reads so they see its own writes
        return _read_session.get() or _write_session.get()
    return _write_session.get()


def in_transaction(readonly: bool = False) -> bool:
    return get_current_session(readonly=readonly) is not None


@asynccontextmanager
async def transaction(readonly: bool = False) -> AsyncGenerator[AsyncSession, None]:
    """
    Explicit transaction boundary.

    All get_session() calls inside share this session. Commits on success
    (unless readonly) and rolls back on any exception before re-raising it.
    """
    session_factory = AsyncSessionLocalReadonly if readonly else AsyncSessionLocal
    context_var = _read_session if readonly else _write_session

    start = time.perf_counter()
    async with session_factory() as session:
        logger.debug(
            f"Transaction session acquire: {(time.perf_counter() - start) * 1000:.2f}ms, readonly={readonly}"
        )
        token = context_var.set(session)
        try:
            yield session
            if not readonly:
                await session.commit()
        except Exception as e:
            logger.error(f"Transaction rollback due to: {e}")
            await session.rollback()
            raise
        finally:
            context_var.reset(token)


@asynccontextmanager
async def get_session(readonly: bool = False) -> AsyncGenerator[AsyncSession, None]:
    """
    Get a session for a single DB operation.

    Reuses the session of an enclosing transaction() block. Otherwise opens
    a fresh session, commits it on success (unless readonly) and releases it
    as soon as the block exits.
    """
    existing = get_current_session(readonly=readonly)
    if existing is not None:
        yield existing
        return

    session_factory = AsyncSessionLocalReadonly if readonly else AsyncSessionLocal
    start = time.perf_counter()
    async with session_factory() as session:
        logger.debug(
            f"Operation session acquire: {(time.perf_counter() - start) * 1000:.2f}ms, readonly={readonly}"
        )
        try:
            yield session
            if not readonly:
                await session.commit()
        except Exception as e:
            logger.error(f"Operation rollback due to: {e}")
            await session.rollback()
            raise
