"""
Domain models for consumption events and usage snapshots.
"""

import math
from datetime import datetime
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

from packages.metering.models.domain.enums import ConsumptionKind, WindowKind


class UsageSnapshot(BaseModel):
    """
    Point-in-time usage state of one account.

    Derived on every request from the consumption log and never persisted.
    The active window is [window_start, reset_at).
    """

    model_config = ConfigDict(frozen=True)

    tier_id: str
    current: int
    limit: int
    remaining: int
    window_kind: WindowKind
    window_start: datetime
    reset_at: datetime

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0

    def seconds_until_reset(self, now: datetime) -> int:
        """Whole seconds until the window resets, rounded up, never negative."""
        return max(0, math.ceil((self.reset_at - now).total_seconds()))

    def get_user_message(self) -> Optional[str]:
        """Get user-friendly message about quota status."""
        if self.exhausted:
            period = "Weekly" if self.window_kind == WindowKind.WEEKLY else "Monthly"
            return f"{period} limit reached ({self.limit:,} searches for {self.tier_id} plan)"
        return None


class ConsumptionEvent(BaseModel):
    """
    One recorded unit of billable usage.

    Append-only: never mutated after it is recorded.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    account_id: str
    kind: ConsumptionKind
    occurred_at: datetime
    event_metadata: Dict[str, Any] = Field(default_factory=dict)


class ConsumptionEventCreateModel(BaseModel):
    """Model for appending a consumption event."""

    model_config = ConfigDict(use_enum_values=True)

    account_id: str
    kind: ConsumptionKind
    occurred_at: datetime
    event_metadata: Dict[str, Any] = Field(default_factory=dict)
