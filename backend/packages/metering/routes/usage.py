"""
Usage API routes.

Read-only: nothing here records consumption, so clients may poll freely.
"""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from common.core.otel_axiom_exporter import get_logger
from packages.accounts.models.domain.account import Account
from packages.auth.dependencies import get_current_account_plan
from packages.metering.dependencies import get_usage_reporting_service
from packages.metering.exceptions import StorageUnavailable
from packages.metering.models.schemas.usage import (
    UsageHistoryResponse,
    UsageReportResponse,
)
from packages.metering.services.usage_reporting import UsageReportingService

logger = get_logger(__name__)

router = APIRouter()


def _unavailable(account: Account, error: StorageUnavailable) -> HTTPException:
    logger.error(
        f"Usage data unavailable: {error}", extra={"account_id": account.account_id}
    )
    return HTTPException(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        detail="Failed to fetch usage data",
        headers={"Retry-After": "5"},
    )


@router.get("", response_model=UsageReportResponse)
async def get_usage(
    account: Account = Depends(get_current_account_plan),
    reporting_service: UsageReportingService = Depends(get_usage_reporting_service),
):
    """
    Get current usage for the caller's plan window.

    Includes the reset instant and the descriptive features of every plan.
    """
    try:
        return await reporting_service.get_usage_report(account)
    except StorageUnavailable as e:
        raise _unavailable(account, e)


@router.get("/history", response_model=UsageHistoryResponse)
async def get_usage_history(
    limit: int = Query(default=20, ge=1, le=100),
    account: Account = Depends(get_current_account_plan),
    reporting_service: UsageReportingService = Depends(get_usage_reporting_service),
):
    """Get the caller's most recent billed searches, newest first."""
    try:
        return await reporting_service.get_history(account, limit=limit)
    except StorageUnavailable as e:
        raise _unavailable(account, e)
