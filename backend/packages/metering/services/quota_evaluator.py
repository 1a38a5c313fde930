"""
Service computing an account's usage snapshot.

Admission and reporting both go through QuotaEvaluator, so what the search
path enforces and what the dashboard displays can never drift apart.
"""

from datetime import datetime
from typing import Callable, Optional

from common.core.otel_axiom_exporter import trace_span
from packages.accounts.models.domain.account import Account
from packages.metering.models.domain.enums import ConsumptionKind
from packages.metering.models.domain.usage import UsageSnapshot
from packages.metering.repositories.consumption_repository import (
    ConsumptionEventRepository,
)
from packages.metering.services.plan_catalog import PlanCatalog, get_plan_catalog
from packages.metering.services.quota_calendar import QuotaCalendar, utc_now


class QuotaEvaluator:
    """Pure read-aggregate over the consumption log. Never writes."""

    def __init__(
        self,
        counter_store: Optional[ConsumptionEventRepository] = None,
        catalog: Optional[PlanCatalog] = None,
        calendar: Optional[QuotaCalendar] = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.counter_store = counter_store or ConsumptionEventRepository()
        self.catalog = catalog or get_plan_catalog()
        self.calendar = calendar or QuotaCalendar()
        self.clock = clock

    @trace_span
    async def evaluate(
        self, account: Account, now: Optional[datetime] = None
    ) -> UsageSnapshot:
        """
        Compute the usage snapshot for the window containing now.

        Raises StorageUnavailable if the counter store cannot be read.
        """
        tier = self.catalog.resolve(account.tier_id)
        now = now or self.clock()
        window_start, reset_at = self.calendar.window_for(tier.window_kind, now)

        current = await self.counter_store.count_since(
            account.account_id,
            ConsumptionKind.SEARCH,
            since=window_start,
            until=reset_at,
        )

        return UsageSnapshot(
            tier_id=tier.id,
            current=current,
            limit=tier.limit,
            remaining=max(0, tier.limit - current),
            window_kind=tier.window_kind,
            window_start=window_start,
            reset_at=reset_at,
        )
