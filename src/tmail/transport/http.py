"""
Authenticated HTTP client for the JMAP endpoints.
"""

import logging
from typing import Any, Optional

import httpx

from tmail.errors import AuthenticationError, DecodeError, TransportError

SESSION_URL = "https://api.fastmail.com/jmap/session"
API_URL = "https://api.fastmail.com/jmap/api/"
DEFAULT_TIMEOUT = 30.0

logger = logging.getLogger(__name__)


class HttpClient:
    def __init__(
        self,
        token: str,
        timeout: float = DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._token = token
        self._client = httpx.AsyncClient(
            headers={"User-Agent": "tmail/0.1.0", "Accept": "application/json"},
            timeout=timeout,
            transport=transport,
        )

    def _auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self._token}"}

    @staticmethod
    def _decode(resp: httpx.Response) -> Any:
        if not resp.is_success:
            raise AuthenticationError(resp.status_code, resp.text)
        try:
            return resp.json()
        except ValueError as e:
            raise DecodeError(f"invalid JSON body: {e}")

    async def get(self, url: str) -> Any:
        try:
            resp = await self._client.get(url, headers=self._auth_headers())
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__)
        logger.debug("GET %s -> %s", url, resp.status_code)
        return self._decode(resp)

    async def post(self, url: str, body: dict[str, Any]) -> Any:
        try:
            resp = await self._client.post(url, json=body, headers=self._auth_headers())
        except httpx.HTTPError as e:
            raise TransportError(str(e) or type(e).__name__)
        logger.debug("POST %s -> %s", url, resp.status_code)
        return self._decode(resp)

    async def close(self) -> None:
        await self._client.aclose()
