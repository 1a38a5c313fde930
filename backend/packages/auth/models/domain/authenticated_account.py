from pydantic import BaseModel


class AuthenticatedAccount(BaseModel):
    """Identity resolved from a verified bearer credential."""

    account_id: str
