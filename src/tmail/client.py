"""
Tmail / AsyncTmail — main clients.
"""

import asyncio
from typing import Any, Optional

import httpx

from tmail.masked_email import MaskedEmailAPI
from tmail.models.masked_email import MaskedEmail
from tmail.models.session import Session
from tmail.session import SessionResolver
from tmail.transport.batch import BatchTransport
from tmail.transport.http import API_URL, DEFAULT_TIMEOUT, SESSION_URL, HttpClient


class AsyncTmail:
    """Async masked email client (primary).

    The token is fixed for the lifetime of the client. Every call is one
    request/response exchange; nothing is retried.
    """

    def __init__(
        self,
        token: str,
        session_url: str = SESSION_URL,
        api_url: str = API_URL,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.http = HttpClient(token, timeout=timeout, transport=transport)
        self.session = SessionResolver(self.http, session_url=session_url)
        self.batch = BatchTransport(self.http, api_url=api_url)
        self.masked_emails = MaskedEmailAPI(self.batch)

    async def discover_session(self) -> Session:
        return await self.session.discover_session()

    async def get_account_id(self) -> str:
        """Discover the session and return the masked email account ID."""
        return await self.session.account_id()

    async def create_masked_email(
        self, account_id: str, description: Optional[str] = None, for_domain: Optional[str] = None,
    ) -> MaskedEmail:
        return await self.masked_emails.create(account_id, description, for_domain)

    async def list_masked_emails(self, account_id: str) -> list[MaskedEmail]:
        return await self.masked_emails.list(account_id)

    async def archive_masked_email(self, account_id: str, id: str) -> None:
        await self.masked_emails.archive(account_id, id)

    async def destroy_masked_email(self, account_id: str, id: str) -> None:
        await self.masked_emails.destroy(account_id, id)

    async def find_masked_email(self, account_id: str, address: str) -> MaskedEmail:
        return await self.masked_emails.find_by_address(account_id, address)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "AsyncTmail":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.close()


class Tmail:
    """Blocking wrapper around AsyncTmail. Runs the event loop internally."""

    def __init__(self, token: str, **kwargs: Any):
        self._async = AsyncTmail(token, **kwargs)
        self._loop = asyncio.new_event_loop()

    def _run(self, coro: Any) -> Any:
        return self._loop.run_until_complete(coro)

    def discover_session(self) -> Session:
        return self._run(self._async.discover_session())

    def get_account_id(self) -> str:
        return self._run(self._async.get_account_id())

    def create_masked_email(
        self, account_id: str, description: Optional[str] = None, for_domain: Optional[str] = None,
    ) -> MaskedEmail:
        return self._run(self._async.create_masked_email(account_id, description, for_domain))

    def list_masked_emails(self, account_id: str) -> list[MaskedEmail]:
        return self._run(self._async.list_masked_emails(account_id))

    def list_active_masked_emails(self, account_id: str) -> list[MaskedEmail]:
        return self._run(self._async.masked_emails.list_active(account_id))

    def archive_masked_email(self, account_id: str, id: str) -> None:
        self._run(self._async.archive_masked_email(account_id, id))

    def destroy_masked_email(self, account_id: str, id: str) -> None:
        self._run(self._async.destroy_masked_email(account_id, id))

    def find_masked_email(self, account_id: str, address: str) -> MaskedEmail:
        return self._run(self._async.find_masked_email(account_id, address))

    def archive_address(self, account_id: str, address: str) -> MaskedEmail:
        return self._run(self._async.masked_emails.archive_address(account_id, address))

    def destroy_address(self, account_id: str, address: str) -> MaskedEmail:
        return self._run(self._async.masked_emails.destroy_address(account_id, address))

    def close(self) -> None:
        self._run(self._async.close())
        self._loop.close()

    def __enter__(self) -> "Tmail":
        return self

    def __exit__(self, *exc: Any) -> None:
        self.close()
