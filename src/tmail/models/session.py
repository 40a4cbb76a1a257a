"""
Session models — JMAP session resource.
"""

from typing import Optional
from pydantic import BaseModel, Field


class Session(BaseModel):
    primary_accounts: dict[str, str] = Field(alias="primaryAccounts")
    username: Optional[str] = None

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def account_for(self, capability: str) -> Optional[str]:
        return self.primary_accounts.get(capability)
