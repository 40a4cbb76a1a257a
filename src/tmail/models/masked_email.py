"""
Masked email models and lifecycle.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


class MaskedEmailState(str, Enum):
    PENDING = "pending"
    ENABLED = "enabled"
    DISABLED = "disabled"
    DELETED = "deleted"


_LIFECYCLE_STATES = frozenset({"enabled", "disabled", "deleted"})

# target state -> states it may be reached from
ALLOWED_TRANSITIONS: dict[str, frozenset[str]] = {
    MaskedEmailState.DISABLED.value: frozenset({"enabled", "disabled"}),
    MaskedEmailState.DELETED.value: frozenset({"enabled", "disabled"}),
}


def can_transition(current: Optional[str], target: str) -> bool:
    """Whether an entity in ``current`` state may be moved to ``target``.

    States outside enabled/disabled/deleted (absent, pending, anything new)
    are left for the remote to judge. Nothing leaves ``deleted``.
    """
    allowed = ALLOWED_TRANSITIONS.get(target)
    if allowed is None:
        return False
    if current in _LIFECYCLE_STATES:
        return current in allowed
    return True


class MaskedEmail(BaseModel):
    """A masked email as returned by MaskedEmail/get and MaskedEmail/set.

    Only ``email`` is required. ``state`` is kept as the raw string so values
    this client does not know survive a round trip.
    """
    id: Optional[str] = None
    email: str
    state: Optional[str] = None
    for_domain: Optional[str] = Field(default=None, alias="forDomain")
    description: Optional[str] = None
    created_at: Optional[str] = Field(default=None, alias="createdAt")
    last_message_at: Optional[str] = Field(default=None, alias="lastMessageAt")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    @property
    def is_active(self) -> bool:
        return self.state == MaskedEmailState.ENABLED.value

    @property
    def created_date(self) -> str:
        """Date portion of createdAt ("2024-01-15"), or "" when absent."""
        return (self.created_at or "")[:10]

    def to_wire(self) -> dict[str, Optional[str]]:
        return self.model_dump(by_alias=True, exclude_none=True)
