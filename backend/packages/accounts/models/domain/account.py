from typing import Optional
from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class Account(BaseModel):
    """The slice of an account that quota decisions need."""

    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    account_id: str = Field(validation_alias=AliasChoices("account_id", "id"))
    tier_id: Optional[str] = None
