"""Domain models for metering."""

from packages.metering.models.domain.enums import (
    BuiltinTier,
    ConsumptionKind,
    WindowKind,
)
from packages.metering.models.domain.plans import PlanTier
from packages.metering.models.domain.usage import (
    ConsumptionEvent,
    ConsumptionEventCreateModel,
    UsageSnapshot,
)

__all__ = [
    # Enums
    "BuiltinTier",
    "ConsumptionKind",
    "WindowKind",
    # Plans
    "PlanTier",
    # Usage
    "ConsumptionEvent",
    "ConsumptionEventCreateModel",
    "UsageSnapshot",
]
