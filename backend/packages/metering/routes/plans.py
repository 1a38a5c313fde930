"""
Plans API routes.

Public endpoint for retrieving the plan catalog.
"""

from fastapi import APIRouter, Depends

from packages.metering.dependencies import get_usage_reporting_service
from packages.metering.models.schemas.usage import PlansResponse
from packages.metering.services.usage_reporting import UsageReportingService

router = APIRouter()


@router.get("", response_model=PlansResponse)
async def get_plans(
    reporting_service: UsageReportingService = Depends(get_usage_reporting_service),
):
    """
    Get all available plans.

    Returns price, quota window and features for each tier.
    This endpoint is public (no auth required) for pricing pages.
    """
    return reporting_service.list_plans()
