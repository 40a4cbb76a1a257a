"""
Session discovery — finds the account bound to the masked email capability.
"""

from pydantic import ValidationError

from tmail.errors import CapabilityMissingError, DecodeError
from tmail.models.session import Session
from tmail.transport.http import SESSION_URL, HttpClient

MASKED_EMAIL_CAPABILITY = "https://www.fastmail.com/dev/maskedemail"


class SessionResolver:
    def __init__(self, http: HttpClient, session_url: str = SESSION_URL):
        self._http = http
        self._session_url = session_url

    async def discover_session(self) -> Session:
        """Fetch the JMAP session resource. Non-2xx statuses are not retried."""
        raw = await self._http.get(self._session_url)
        try:
            return Session.model_validate(raw)
        except ValidationError as e:
            raise DecodeError(f"invalid session response: {e}")

    @staticmethod
    def resolve_account_id(session: Session) -> str:
        account_id = session.account_for(MASKED_EMAIL_CAPABILITY)
        if account_id is None:
            raise CapabilityMissingError(MASKED_EMAIL_CAPABILITY)
        return account_id

    async def account_id(self) -> str:
        return self.resolve_account_id(await self.discover_session())
