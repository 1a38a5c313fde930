"""
Places search API routes.

Every search passes through the admission gate: denied searches never reach
the places source, and only successful searches are billed.
"""

from fastapi import APIRouter, Depends, HTTPException, status

from common.core.config import settings
from common.core.otel_axiom_exporter import get_logger
from packages.accounts.models.domain.account import Account
from packages.auth.dependencies import get_current_account_plan
from packages.metering.dependencies import get_admission_gate
from packages.metering.exceptions import (
    AdmissionBusy,
    OperationTimedOut,
    QuotaExceeded,
    StorageUnavailable,
)
from packages.metering.models.schemas.usage import QuotaExceededDetail
from packages.metering.services.admission_gate import AdmissionGate
from packages.metering.services.quota_calendar import utc_now
from packages.places.exceptions import NoPlacesFound
from packages.places.models.schemas.search import (
    PlacesSearchRequest,
    PlacesSearchResponse,
)
from packages.places.services.search_service import PlacesSearchService

logger = get_logger(__name__)

router = APIRouter()


def get_places_search_service() -> PlacesSearchService:
    """Get PlacesSearchService instance."""
    return PlacesSearchService()


def _quota_exceeded_exception(error: QuotaExceeded) -> HTTPException:
    snapshot = error.snapshot
    detail = QuotaExceededDetail(
        error=error.message,
        used=snapshot.current,
        limit=snapshot.limit,
        limit_type=snapshot.window_kind,
        plan_type=snapshot.tier_id,
        reset_date=snapshot.reset_at,
    )
    return HTTPException(
        status_code=status.HTTP_429_TOO_MANY_REQUESTS,
        detail=detail.model_dump(by_alias=True, mode="json"),
        headers={"Retry-After": str(snapshot.seconds_until_reset(utc_now()))},
    )


# ============================================================================
# Check-and-search
# ============================================================================


@router.post("/search", response_model=PlacesSearchResponse)
async def search_places(
    request: PlacesSearchRequest,
    account: Account = Depends(get_current_account_plan),
    gate: AdmissionGate = Depends(get_admission_gate),
    search_service: PlacesSearchService = Depends(get_places_search_service),
):
    """
    Search places if the account has quota left.

    Returns 429 with used/limit/limitType/planType/resetDate when the quota
    is exhausted. Searches that find nothing (404) or time out (504) are free.
    """
    query = request.query.strip()
    location = request.location.strip()
    if not query:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Search query is required",
        )
    max_results = min(request.max_results, settings.search_max_results)

    try:
        places, event = await gate.admit_recorded(
            account,
            lambda: search_service.search(query, location, max_results),
            describe=lambda found: search_service.describe(query, location, found),
        )
    except QuotaExceeded as e:
        raise _quota_exceeded_exception(e)
    except NoPlacesFound as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message)
    except OperationTimedOut:
        raise HTTPException(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            detail="Places search timed out. Please try again.",
        )
    except (StorageUnavailable, AdmissionBusy) as e:
        logger.error(
            f"Search admission unavailable: {e}",
            extra={"account_id": account.account_id},
        )
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Search temporarily unavailable. Please try again.",
            headers={"Retry-After": "5"},
        )

    return PlacesSearchResponse(
        id=event.id if event else None,
        query=query,
        location=location,
        places=places,
        results_count=len(places),
        created_at=utc_now(),
    )
