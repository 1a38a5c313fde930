from typing import Annotated, Optional
from fastapi import Depends, HTTPException, status, Header

from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.accounts.models.domain.account import Account
from packages.accounts.services.account_service import AccountService
from packages.auth.models.domain.authenticated_account import AuthenticatedAccount
from packages.auth.providers.factory import get_identity_provider
from packages.auth.providers.interface import IdentityProviderInterface
from packages.auth.providers.models import InvalidCredential
from packages.metering.exceptions import StorageUnavailable

logger = get_logger(__name__)


@trace_span
async def get_current_account(
    authorization: Annotated[Optional[str], Header()] = None,
    identity_provider: IdentityProviderInterface = Depends(get_identity_provider),
) -> AuthenticatedAccount:
    """Resolve the bearer credential to an account id."""
    if not authorization or not authorization.startswith("Bearer "):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = authorization[len("Bearer ") :].strip()
    try:
        account_id = await identity_provider.verify_credential(token)
    except InvalidCredential:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid session",
            headers={"WWW-Authenticate": "Bearer"},
        )

    return AuthenticatedAccount(account_id=account_id)


def get_account_service() -> AccountService:
    """Get AccountService instance."""
    return AccountService()


@trace_span
async def get_current_account_plan(
    current: AuthenticatedAccount = Depends(get_current_account),
    account_service: AccountService = Depends(get_account_service),
) -> Account:
    """Get the authenticated account with its plan tier."""
    try:
        return await account_service.get_account(current.account_id)
    except StorageUnavailable as e:
        logger.error(
            f"Account lookup failed: {e}", extra={"account_id": current.account_id}
        )
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Account data temporarily unavailable",
        )
