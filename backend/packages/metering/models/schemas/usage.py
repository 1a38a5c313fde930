"""API schemas for usage reporting and quota denial."""

from datetime import datetime
from typing import Dict, List, Optional

from common.models.schemas import APISchema
from packages.metering.models.domain.enums import ConsumptionKind, WindowKind


class PlanFeaturesResponse(APISchema):
    """Descriptive plan information; not used in quota computation."""

    name: str
    price: str
    searches: str
    features: List[str]


class UsageReportResponse(APISchema):
    current: int
    limit: int
    remaining: int
    limit_type: WindowKind
    plan_type: str
    is_free_plan: bool
    reset_date: datetime
    plan_features: Dict[str, PlanFeaturesResponse]


class QuotaExceededDetail(APISchema):
    """Body of a 429 response; resetDate lets clients show "try again in N"."""

    error: str
    used: int
    limit: int
    limit_type: WindowKind
    plan_type: str
    reset_date: datetime


class UsageHistoryItem(APISchema):
    id: int
    occurred_at: datetime
    kind: ConsumptionKind
    query: Optional[str] = None
    location: Optional[str] = None
    results_count: Optional[int] = None


class UsageHistoryResponse(APISchema):
    events: List[UsageHistoryItem]


class PlanInfo(APISchema):
    tier: str
    name: str
    description: str
    price_cents: int
    price_formatted: str
    limit_type: WindowKind
    limit: int
    is_free_plan: bool
    features: List[str]


class PlansResponse(APISchema):
    plans: List[PlanInfo]
