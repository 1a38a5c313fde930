from typing import Optional

from sqlalchemy.exc import SQLAlchemyError

from common.core.otel_axiom_exporter import trace_span, get_logger
from packages.accounts.models.domain.account import Account
from packages.accounts.repositories.account_repository import AccountRepository
from packages.metering.exceptions import StorageUnavailable

logger = get_logger(__name__)


class AccountService:
    """Read-only access to accounts owned by the identity service."""

    def __init__(self, account_repo: Optional[AccountRepository] = None):
        self.account_repo = account_repo or AccountRepository()

    @trace_span
    async def get_account(self, account_id: str) -> Account:
        """
        Get an account's plan assignment.

        An account the identity service has not synced yet has no row;
        it is treated as having no tier, which resolves to the default tier.
        """
        try:
            account = await self.account_repo.get(account_id)
        except (SQLAlchemyError, OSError) as e:
            raise StorageUnavailable(
                f"Failed to load account: {e}", account_id=account_id
            ) from e

        if account is None:
            logger.info(
                "Account has no record yet, using default tier",
                extra={"account_id": account_id},
            )
            return Account(account_id=account_id)
        return account
