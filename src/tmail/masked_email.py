"""
Masked Email API — MaskedEmail/get and MaskedEmail/set.

Lifecycle of one masked email::

    (absent) --create--> enabled --archive--> disabled --destroy--> (gone)
                             \\-------------------destroy-----------/

Creating is never deduplicated: every successful create() mints a new
address, even when called twice with the same arguments.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import ValidationError

from tmail.errors import DecodeError, NotFoundError, ProtocolError
from tmail.models.batch import GetResponse, MethodResponse, Outcome, SetResponse, describe_set_error
from tmail.models.masked_email import MaskedEmail, MaskedEmailState, can_transition
from tmail.session import MASKED_EMAIL_CAPABILITY
from tmail.transport.batch import JMAP_CORE_CAPABILITY, BatchTransport

USING = [JMAP_CORE_CAPABILITY, MASKED_EMAIL_CAPABILITY]
METHOD_GET = "MaskedEmail/get"
METHOD_SET = "MaskedEmail/set"
CREATION_ID = "new"

logger = logging.getLogger(__name__)


def _expect(response: MethodResponse, method: str) -> dict[str, Any]:
    if response.is_error:
        error_type = response.arguments.get("type", "unknown")
        description = response.arguments.get("description")
        detail = f"{error_type}: {description}" if description else error_type
        raise ProtocolError(detail, details=response.arguments)
    if response.name != method:
        raise ProtocolError(f"Unexpected response: {response.name} for {method}")
    return response.arguments


def _set_response(response: MethodResponse) -> SetResponse:
    try:
        return SetResponse.model_validate(_expect(response, METHOD_SET))
    except ValidationError as e:
        raise DecodeError(f"invalid {METHOD_SET} response: {e}")


def _require(outcome: Optional[Outcome], failures: Optional[dict[str, Any]], response: MethodResponse) -> Outcome:
    """Unwrap a successful set outcome or raise with the rejection detail."""
    if outcome is None:
        if failures:
            raise ProtocolError(
                "; ".join(f"{k}: {describe_set_error(v)}" for k, v in failures.items()),
                details=dict(failures),
            )
        raise ProtocolError(f"Unexpected response: {response.arguments}")
    if not outcome.ok:
        error = outcome.error
        raise ProtocolError(describe_set_error(error), details=error if isinstance(error, dict) else {"error": error})
    return outcome


def _decode(raw: Any) -> MaskedEmail:
    try:
        return MaskedEmail.model_validate(raw)
    except ValidationError as e:
        raise DecodeError(f"invalid masked email: {e}")


class MaskedEmailAPI:
    def __init__(self, batch: BatchTransport):
        self._batch = batch

    async def create(
        self, account_id: str, description: Optional[str] = None, for_domain: Optional[str] = None,
    ) -> MaskedEmail:
        """Create a new enabled masked email and return it as the server acknowledged it."""
        response = await self._batch.single(account_id, USING, METHOD_SET, lambda acct: {
            "accountId": acct,
            "create": {
                CREATION_ID: {
                    "state": MaskedEmailState.ENABLED.value,
                    "description": description or "",
                    "forDomain": for_domain or "",
                },
            },
        })
        result = _set_response(response)
        outcome = _require(result.creation(CREATION_ID), result.not_created, response)
        created = _decode(outcome.value)
        logger.debug("Created masked email %s", created.id)
        return created

    async def list(self, account_id: str) -> list[MaskedEmail]:
        """All masked emails of the account, in server order, whatever their state."""
        response = await self._batch.single(account_id, USING, METHOD_GET, lambda acct: {
            "accountId": acct,
            "ids": None,
        })
        try:
            result = GetResponse.model_validate(_expect(response, METHOD_GET))
        except ValidationError as e:
            raise DecodeError(f"invalid {METHOD_GET} response: {e}")
        if result.items is None:
            raise ProtocolError(f"Unexpected response: {response.arguments}")
        return [_decode(item) for item in result.items]

    async def list_active(self, account_id: str) -> list[MaskedEmail]:
        return [m for m in await self.list(account_id) if m.is_active]

    async def archive(self, account_id: str, id: str) -> None:
        """Disable a masked email. Archiving an already disabled one is a no-op update."""
        await self._set_state(account_id, id, MaskedEmailState.DISABLED.value)

    async def destroy(self, account_id: str, id: str) -> None:
        """Mark a masked email deleted. This cannot be undone."""
        await self._set_state(account_id, id, MaskedEmailState.DELETED.value)

    async def find_by_address(self, account_id: str, address: str) -> MaskedEmail:
        for masked in await self.list(account_id):
            if masked.email == address:
                return masked
        raise NotFoundError(address)

    async def archive_address(self, account_id: str, address: str) -> MaskedEmail:
        return await self._transition_address(account_id, address, MaskedEmailState.DISABLED.value)

    async def destroy_address(self, account_id: str, address: str) -> MaskedEmail:
        return await self._transition_address(account_id, address, MaskedEmailState.DELETED.value)

    async def _transition_address(self, account_id: str, address: str, target: str) -> MaskedEmail:
        masked = await self.find_by_address(account_id, address)
        if masked.id is None:
            raise ProtocolError(f"Masked email {address} has no ID")
        if not can_transition(masked.state, target):
            raise ProtocolError(f"Cannot change {address} from {masked.state} to {target}")
        await self._set_state(account_id, masked.id, target)
        return masked.model_copy(update={"state": target})

    async def _set_state(self, account_id: str, id: str, state: str) -> None:
        response = await self._batch.single(account_id, USING, METHOD_SET, lambda acct: {
            "accountId": acct,
            "update": {id: {"state": state}},
        })
        result = _set_response(response)
        _require(result.update(id), result.not_updated, response)
        logger.debug("Set masked email %s to %s", id, state)
