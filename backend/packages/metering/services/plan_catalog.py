"""Static registry of subscription tiers and their quota parameters."""

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

from common.core.config import settings
from common.core.otel_axiom_exporter import get_logger
from packages.metering.exceptions import UnknownTier
from packages.metering.models.domain.enums import BuiltinTier, WindowKind
from packages.metering.models.domain.plans import PlanTier

logger = get_logger(__name__)

DEFAULT_PLAN_TIERS = (
    PlanTier(
        id=BuiltinTier.STARTER.value,
        window_kind=WindowKind.WEEKLY,
        limit=100,
        name="Starter",
        description="Perfect for getting started",
        price_cents=0,
        features=(
            "100 searches per week",
            "CSV & JSON export",
            "Community support",
            "Basic data",
        ),
    ),
    PlanTier(
        id=BuiltinTier.PRO.value,
        window_kind=WindowKind.MONTHLY,
        limit=1000,
        name="Pro",
        description="For professionals",
        price_cents=2900,
        features=(
            "1,000 searches per month",
            "CSV & JSON export",
            "Priority support",
            "Enriched data",
            "API access",
        ),
    ),
    PlanTier(
        id=BuiltinTier.AGENCY.value,
        window_kind=WindowKind.MONTHLY,
        limit=5000,
        name="Agency",
        description="For agencies",
        price_cents=9900,
        features=(
            "5,000 searches per month",
            "CSV & JSON export",
            "Dedicated support",
            "Complete data",
            "Unlimited API",
            "White-label",
        ),
    ),
)


class PlanCatalog:
    """
    Read-only lookup of plan tiers by id.

    The registry is frozen at construction, so lookups need no locking.
    """

    def __init__(
        self,
        tiers: Iterable[PlanTier] = DEFAULT_PLAN_TIERS,
        default_tier_id: Optional[str] = None,
    ):
        registry = {}
        for tier in tiers:
            if tier.id in registry:
                raise ValueError(f"Duplicate plan tier id: {tier.id!r}")
            registry[tier.id] = tier
        self._tiers: Mapping[str, PlanTier] = MappingProxyType(registry)

        default_tier_id = default_tier_id or settings.default_tier_id
        self._default_tier = self.tier_of(default_tier_id)

    @property
    def default_tier(self) -> PlanTier:
        return self._default_tier

    def tier_of(self, tier_id: str) -> PlanTier:
        """Look up a tier. Raises UnknownTier if the id is not registered."""
        try:
            return self._tiers[tier_id]
        except KeyError:
            raise UnknownTier(tier_id) from None

    def resolve(self, tier_id: Optional[str]) -> PlanTier:
        """Look up a tier, falling back to the default tier for unset or unknown ids."""
        if tier_id is None:
            return self._default_tier
        try:
            return self.tier_of(tier_id)
        except UnknownTier:
            logger.warning(
                f"Unknown tier {tier_id!r}, falling back to {self._default_tier.id}",
                extra={"tier_id": tier_id, "fallback_tier": self._default_tier.id},
            )
            return self._default_tier

    def all_tiers(self) -> List[PlanTier]:
        return list(self._tiers.values())


_catalog: Optional[PlanCatalog] = None


def get_plan_catalog() -> PlanCatalog:
    """Get the process-wide default plan catalog."""
    global _catalog
    if _catalog is None:
        _catalog = PlanCatalog()
    return _catalog
