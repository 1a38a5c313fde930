from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional

from packages.metering.models.database.consumption_event import (
    ConsumptionEventEntity,
)
from packages.metering.models.domain.enums import ConsumptionKind


class ConsumptionEventFactory:
    """Factory for creating consumption event test rows."""

    @staticmethod
    def create_entity(
        account_id: str,
        occurred_at: datetime,
        kind: ConsumptionKind = ConsumptionKind.SEARCH,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ConsumptionEventEntity:
        """Create a ConsumptionEventEntity for testing."""
        return ConsumptionEventEntity(
            account_id=account_id,
            kind=kind.value,
            occurred_at=occurred_at,
            event_metadata=metadata or {},
        )

    @staticmethod
    def create_entities(
        account_id: str,
        count: int,
        start: datetime,
        step: timedelta = timedelta(minutes=1),
    ) -> List[ConsumptionEventEntity]:
        """Create count search events spaced step apart from start."""
        return [
            ConsumptionEventFactory.create_entity(account_id, start + step * i)
            for i in range(count)
        ]
