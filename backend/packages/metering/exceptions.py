"""
Metering error taxonomy.

UnknownTier is recovered inside the evaluator. QuotaExceeded is the expected
user-facing denial. StorageUnavailable is a transient fault of the counter
store whose handling depends on where it happens.
"""

from common.core.exceptions import (
    AppException,
    ProcessingError,
    StorageError,
    UnavailableError,
    ValidationError,
)
from packages.metering.models.domain.usage import UsageSnapshot


class UnknownTier(ValidationError):
    """Tier id is not registered in the plan catalog."""

    def __init__(self, tier_id: str):
        super().__init__(f"Unknown plan tier: {tier_id!r}", tier_id=tier_id)
        self.tier_id = tier_id


class StorageUnavailable(StorageError):
    """The usage counter store could not read or write."""

    pass


class QuotaExceeded(AppException):
    """Admission denied: the account has no allowance left in this window."""

    def __init__(self, snapshot: UsageSnapshot):
        super().__init__(
            snapshot.get_user_message() or "Quota exceeded",
            used=snapshot.current,
            limit=snapshot.limit,
            limit_type=snapshot.window_kind.value,
            plan_type=snapshot.tier_id,
            reset_date=snapshot.reset_at.isoformat(),
        )
        self.snapshot = snapshot


class AdmissionBusy(UnavailableError):
    """Strict mode could not obtain the per-account admission lock in time."""

    pass


class OperationFailed(ProcessingError):
    """The protected operation did not complete. Never consumes quota."""

    pass


class OperationTimedOut(OperationFailed):
    """The protected operation exceeded its time budget."""

    pass
