# Test data and fixtures
from datetime import datetime, timezone
from typing import List, Optional, Tuple

import asyncio

from packages.metering.exceptions import StorageUnavailable
from packages.metering.models.domain.enums import ConsumptionKind
from packages.metering.models.domain.usage import ConsumptionEvent


def utc(*args) -> datetime:
    return datetime(*args, tzinfo=timezone.utc)


# Wednesday; starter weekly window is Mon 2024-03-11 .. Mon 2024-03-18 (UTC)
FIXED_NOW = utc(2024, 3, 13, 15, 30)

SAMPLE_SEARCH_METADATA = {
    "query": "restaurant",
    "location": "Lyon",
    "results_count": 5,
}


class InMemoryCounterStore:
    """Counter store double that yields to the event loop on every call.

    Yielding lets concurrent admissions interleave the way they would
    against a real database.
    """

    def __init__(self):
        self.events: List[Tuple[str, ConsumptionKind, datetime, Optional[dict]]] = []
        self.fail_record = False
        self.fail_count = False

    async def record(self, account_id, kind, at, metadata=None):
        await asyncio.sleep(0)
        if self.fail_record:
            raise StorageUnavailable("record failed", account_id=account_id)
        self.events.append((account_id, kind, at, metadata))
        return ConsumptionEvent(
            id=len(self.events),
            account_id=account_id,
            kind=kind,
            occurred_at=at,
            event_metadata=metadata or {},
        )

    async def count_since(self, account_id, kind, since, until=None):
        await asyncio.sleep(0)
        if self.fail_count:
            raise StorageUnavailable("count failed", account_id=account_id)
        return sum(
            1
            for event_account, event_kind, at, _ in self.events
            if event_account == account_id
            and event_kind == kind
            and at >= since
            and (until is None or at < until)
        )

    def seed(self, account_id: str, count: int, at: datetime = FIXED_NOW):
        for _ in range(count):
            self.events.append((account_id, ConsumptionKind.SEARCH, at, None))
