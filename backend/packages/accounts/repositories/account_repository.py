from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from common.repositories.base import BaseRepository
from packages.accounts.models.database.account import AccountEntity
from packages.accounts.models.domain.account import Account


class AccountRepository(BaseRepository[AccountEntity, Account]):
    def __init__(self, db_session: Optional[AsyncSession] = None):
        super().__init__(AccountEntity, Account, db_session)
