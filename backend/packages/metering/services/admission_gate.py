"""
Admission gate wrapping a protected operation in check-then-record.

Sequence per call:
1. Evaluate the account's snapshot; deny with QuotaExceeded when nothing remains.
2. Run the operation under a time budget.
3. On success record one consumption event. A failed record is logged only.

The check and the record are separate steps. In bounded_overshoot mode two
concurrent calls at remaining=1 can both be admitted, ending one over the
limit. strict mode serializes calls per account with a distributed lock.
"""

import asyncio
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Optional, Tuple, TypeVar

from common.core.config import settings
from common.core.constants import QuotaEnforcementMode, StorageFailurePolicy
from common.core.otel_axiom_exporter import trace_span, get_logger, log_span_event
from common.providers.locking.factory import get_lock_provider
from common.providers.locking.interface import DistributedLockInterface
from packages.accounts.models.domain.account import Account
from packages.metering.exceptions import (
    AdmissionBusy,
    OperationTimedOut,
    QuotaExceeded,
    StorageUnavailable,
)
from packages.metering.models.domain.enums import ConsumptionKind
from packages.metering.models.domain.usage import ConsumptionEvent, UsageSnapshot
from packages.metering.repositories.consumption_repository import (
    ConsumptionEventRepository,
)
from packages.metering.services.quota_calendar import utc_now
from packages.metering.services.quota_evaluator import QuotaEvaluator

logger = get_logger(__name__)

T = TypeVar("T")


class AdmissionGate:
    """Decides whether a protected operation may run and meters it when it does."""

    def __init__(
        self,
        evaluator: Optional[QuotaEvaluator] = None,
        counter_store: Optional[ConsumptionEventRepository] = None,
        lock_provider: Optional[DistributedLockInterface] = None,
        clock: Callable[[], datetime] = utc_now,
        enforcement_mode: Optional[QuotaEnforcementMode] = None,
        storage_failure_policy: Optional[StorageFailurePolicy] = None,
        operation_timeout_seconds: Optional[float] = None,
    ):
        self.counter_store = counter_store or ConsumptionEventRepository()
        self.evaluator = evaluator or QuotaEvaluator(
            counter_store=self.counter_store, clock=clock
        )
        self._lock_provider = lock_provider
        self.clock = clock
        self.enforcement_mode = enforcement_mode or settings.quota_enforcement_mode
        self.storage_failure_policy = (
            storage_failure_policy or settings.quota_storage_failure_policy
        )
        self.operation_timeout_seconds = (
            operation_timeout_seconds
            if operation_timeout_seconds is not None
            else settings.search_timeout_seconds
        )

    @property
    def lock_provider(self) -> DistributedLockInterface:
        if self._lock_provider is None:
            self._lock_provider = get_lock_provider()
        return self._lock_provider

    async def admit(
        self,
        account: Account,
        operation: Callable[[], Awaitable[T]],
        kind: ConsumptionKind = ConsumptionKind.SEARCH,
        describe: Optional[Callable[[T], Dict[str, Any]]] = None,
    ) -> T:
        """Run operation if the account has allowance left and return its result."""
        result, _ = await self.admit_recorded(account, operation, kind, describe)
        return result

    @trace_span
    async def admit_recorded(
        self,
        account: Account,
        operation: Callable[[], Awaitable[T]],
        kind: ConsumptionKind = ConsumptionKind.SEARCH,
        describe: Optional[Callable[[T], Dict[str, Any]]] = None,
    ) -> Tuple[T, Optional[ConsumptionEvent]]:
        """
        Run operation if the account has allowance left.

        Returns the operation's result and the recorded consumption event,
        which is None when recording failed.

        Args:
            account: The requesting account
            operation: Zero-argument coroutine factory performing the action
            kind: Consumption kind to record on success
            describe: Builds event metadata from the operation's result

        Raises:
            QuotaExceeded: No allowance left; operation was not invoked
            OperationTimedOut: Operation exceeded its time budget
            StorageUnavailable: Usage unreadable and policy is fail_closed
            AdmissionBusy: strict mode could not lock the account in time
        """
        if self.enforcement_mode == QuotaEnforcementMode.STRICT:
            return await self._admit_locked(account, operation, kind, describe)
        return await self._admit(account, operation, kind, describe)

    async def _admit_locked(
        self,
        account: Account,
        operation: Callable[[], Awaitable[T]],
        kind: ConsumptionKind,
        describe: Optional[Callable[[T], Dict[str, Any]]],
    ) -> Tuple[T, Optional[ConsumptionEvent]]:
        resource_key = f"quota:{account.account_id}"
        lock_token = await self.lock_provider.acquire_lock_with_retry(
            resource_key,
            lock_ttl_seconds=settings.quota_lock_ttl_seconds,
            acquire_timeout_seconds=settings.quota_lock_wait_seconds,
        )
        if lock_token is None:
            logger.warning(
                f"Admission lock busy for account {account.account_id}",
                extra={"account_id": account.account_id},
            )
            raise AdmissionBusy(
                "Another request for this account is in progress, retry shortly",
                account_id=account.account_id,
            )

        try:
            return await self._admit(account, operation, kind, describe)
        finally:
            await self.lock_provider.release_lock(resource_key, lock_token)

    async def _admit(
        self,
        account: Account,
        operation: Callable[[], Awaitable[T]],
        kind: ConsumptionKind,
        describe: Optional[Callable[[T], Dict[str, Any]]],
    ) -> Tuple[T, Optional[ConsumptionEvent]]:
        await self._check(account)
        result = await self._run(account, operation)
        event = await self._record(account, kind, self._describe(account, result, describe))
        return result, event

    async def _check(self, account: Account) -> Optional[UsageSnapshot]:
        """Return the snapshot, or None when admitting blind under fail_open."""
        try:
            snapshot = await self.evaluator.evaluate(account)
        except StorageUnavailable as e:
            if self.storage_failure_policy == StorageFailurePolicy.FAIL_CLOSED:
                logger.error(
                    f"Usage unreadable, denying admission (fail_closed): {e}",
                    extra={"account_id": account.account_id},
                )
                raise
            # ALERT: quota is not enforced while this persists
            logger.error(
                f"Usage unreadable, admitting without quota check (fail_open): {e}",
                extra={"account_id": account.account_id, "alert": "quota_fail_open"},
            )
            return None

        if snapshot.exhausted:
            logger.warning(
                f"Account {account.account_id} exceeded {snapshot.window_kind.value} quota",
                extra={
                    "account_id": account.account_id,
                    "current": snapshot.current,
                    "limit": snapshot.limit,
                    "tier_id": snapshot.tier_id,
                },
            )
            raise QuotaExceeded(snapshot)

        return snapshot

    async def _run(self, account: Account, operation: Callable[[], Awaitable[T]]) -> T:
        try:
            return await asyncio.wait_for(
                operation(), timeout=self.operation_timeout_seconds
            )
        except asyncio.TimeoutError as e:
            logger.warning(
                f"Protected operation timed out after {self.operation_timeout_seconds}s",
                extra={"account_id": account.account_id},
            )
            raise OperationTimedOut(
                f"Operation timed out after {self.operation_timeout_seconds}s",
                account_id=account.account_id,
            ) from e

    def _describe(
        self,
        account: Account,
        result: T,
        describe: Optional[Callable[[T], Dict[str, Any]]],
    ) -> Optional[Dict[str, Any]]:
        if describe is None:
            return None
        try:
            return describe(result)
        except Exception as e:
            # Metadata is informational; the event is still recorded without it
            logger.error(
                f"Failed to describe consumption, recording without metadata: {e}",
                extra={"account_id": account.account_id},
            )
            return None

    async def _record(
        self,
        account: Account,
        kind: ConsumptionKind,
        metadata: Optional[Dict[str, Any]],
    ) -> Optional[ConsumptionEvent]:
        try:
            event = await self.counter_store.record(
                account.account_id, kind, self.clock(), metadata=metadata
            )
        except StorageUnavailable as e:
            # The operation already succeeded; its result is returned regardless
            logger.error(
                f"Failed to record {kind.value} consumption: {e}",
                extra={"account_id": account.account_id, "alert": "usage_undercount"},
            )
            return None

        log_span_event(
            "Consumption recorded",
            {"account_id": account.account_id, "kind": kind.value},
        )
        return event
