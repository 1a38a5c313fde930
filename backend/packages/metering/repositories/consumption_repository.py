"""
Repository for the append-only consumption event log.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import select, func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from common.repositories.base import BaseRepository
from common.core.otel_axiom_exporter import trace_span
from packages.metering.exceptions import StorageUnavailable
from packages.metering.models.database.consumption_event import (
    ConsumptionEventEntity,
)
from packages.metering.models.domain.enums import ConsumptionKind
from packages.metering.models.domain.usage import (
    ConsumptionEvent,
    ConsumptionEventCreateModel,
)


class ConsumptionEventRepository(
    BaseRepository[ConsumptionEventEntity, ConsumptionEvent]
):
    """
    Usage counter store.

    record() commits before returning when used without an explicit session,
    so a count taken afterwards always includes the event. Storage faults
    surface as StorageUnavailable.
    """

    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(ConsumptionEventEntity, ConsumptionEvent, db_session)

    @trace_span
    async def record(
        self,
        account_id: str,
        kind: ConsumptionKind,
        at: datetime,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ConsumptionEvent:
        """Append one consumption event."""
        create_model = ConsumptionEventCreateModel(
            account_id=account_id,
            kind=kind,
            occurred_at=at,
            event_metadata=metadata or {},
        )
        try:
            return await self.create(create_model)
        except (SQLAlchemyError, OSError) as e:
            raise StorageUnavailable(
                f"Failed to record {kind.value} event: {e}", account_id=account_id
            ) from e

    @trace_span
    async def count_since(
        self,
        account_id: str,
        kind: ConsumptionKind,
        since: datetime,
        until: Optional[datetime] = None,
    ) -> int:
        """Count events with since <= occurred_at (< until, when given)."""
        query = select(func.count(ConsumptionEventEntity.id)).where(
            ConsumptionEventEntity.account_id == account_id,
            ConsumptionEventEntity.kind == kind.value,
            ConsumptionEventEntity.occurred_at >= since,
        )
        if until is not None:
            query = query.where(ConsumptionEventEntity.occurred_at < until)

        try:
            async with self._get_session(readonly=True) as session:
                result = await session.execute(query)
                return result.scalar_one() or 0
        except (SQLAlchemyError, OSError) as e:
            raise StorageUnavailable(
                f"Failed to count {kind.value} events: {e}", account_id=account_id
            ) from e

    @trace_span
    async def recent(
        self, account_id: str, kind: ConsumptionKind, limit: int = 20
    ) -> List[ConsumptionEvent]:
        """Get the newest events for an account, newest first."""
        query = (
            select(ConsumptionEventEntity)
            .where(
                ConsumptionEventEntity.account_id == account_id,
                ConsumptionEventEntity.kind == kind.value,
            )
            .order_by(
                ConsumptionEventEntity.occurred_at.desc(),
                ConsumptionEventEntity.id.desc(),
            )
            .limit(limit)
        )

        try:
            async with self._get_session(readonly=True) as session:
                result = await session.execute(query)
                return self._entities_to_domain(result.scalars().all())
        except (SQLAlchemyError, OSError) as e:
            raise StorageUnavailable(
                f"Failed to load {kind.value} history: {e}", account_id=account_id
            ) from e
