"""Read-only usage reporting for client display."""

from typing import List, Optional

from common.core.otel_axiom_exporter import trace_span
from packages.accounts.models.domain.account import Account
from packages.metering.models.domain.enums import ConsumptionKind
from packages.metering.models.domain.plans import PlanTier
from packages.metering.models.domain.usage import ConsumptionEvent, UsageSnapshot
from packages.metering.models.schemas.usage import (
    PlanFeaturesResponse,
    PlanInfo,
    PlansResponse,
    UsageHistoryItem,
    UsageHistoryResponse,
    UsageReportResponse,
)
from packages.metering.repositories.consumption_repository import (
    ConsumptionEventRepository,
)
from packages.metering.services.plan_catalog import PlanCatalog, get_plan_catalog
from packages.metering.services.quota_evaluator import QuotaEvaluator


class UsageReportingService:
    """Side-effect free projection of the evaluator state."""

    def __init__(
        self,
        evaluator: Optional[QuotaEvaluator] = None,
        catalog: Optional[PlanCatalog] = None,
        counter_store: Optional[ConsumptionEventRepository] = None,
    ):
        self.catalog = catalog or get_plan_catalog()
        self.counter_store = counter_store or ConsumptionEventRepository()
        self.evaluator = evaluator or QuotaEvaluator(
            counter_store=self.counter_store, catalog=self.catalog
        )

    @trace_span
    async def report(self, account: Account) -> UsageSnapshot:
        """Same computation as admission, safe to call arbitrarily often."""
        return await self.evaluator.evaluate(account)

    @trace_span
    async def get_usage_report(self, account: Account) -> UsageReportResponse:
        snapshot = await self.report(account)
        tier = self.evaluator.catalog.resolve(snapshot.tier_id)

        return UsageReportResponse(
            current=snapshot.current,
            limit=snapshot.limit,
            remaining=snapshot.remaining,
            limit_type=snapshot.window_kind,
            plan_type=snapshot.tier_id,
            is_free_plan=tier.is_free,
            reset_date=snapshot.reset_at,
            plan_features={
                plan.id: self.build_plan_features(plan)
                for plan in self.catalog.all_tiers()
            },
        )

    @trace_span
    async def get_history(self, account: Account, limit: int = 20) -> UsageHistoryResponse:
        events = await self.counter_store.recent(
            account.account_id, ConsumptionKind.SEARCH, limit=limit
        )
        return UsageHistoryResponse(events=self._build_history(events))

    @staticmethod
    def build_plan_features(tier: PlanTier) -> PlanFeaturesResponse:
        return PlanFeaturesResponse(
            name=tier.name,
            price=tier.price_formatted,
            searches=tier.searches_label,
            features=list(tier.features),
        )

    def _build_history(self, events: List[ConsumptionEvent]) -> List[UsageHistoryItem]:
        return [
            UsageHistoryItem(
                id=event.id,
                occurred_at=event.occurred_at,
                kind=event.kind,
                query=event.event_metadata.get("query"),
                location=event.event_metadata.get("location"),
                results_count=event.event_metadata.get("results_count"),
            )
            for event in events
        ]

    def list_plans(self) -> PlansResponse:
        """Public catalog listing for pricing pages."""
        return PlansResponse(
            plans=[
                PlanInfo(
                    tier=tier.id,
                    name=tier.name,
                    description=tier.description,
                    price_cents=tier.price_cents,
                    price_formatted=tier.price_formatted,
                    limit_type=tier.window_kind,
                    limit=tier.limit,
                    is_free_plan=tier.is_free,
                    features=list(tier.features),
                )
                for tier in self.catalog.all_tiers()
            ]
        )
