"""
Method-call batching and call-ID correlation.

A batch is sent as one JMAP request. Each call is tagged with a call ID that
is unique within the batch; the response entries carry the same IDs back, in
whatever order the server chose.
"""

import logging
from typing import Any, Callable, Optional, Sequence

from pydantic import ValidationError

from tmail.errors import DecodeError, ProtocolError
from tmail.models.batch import Invocation, MethodResponse, Request, Response
from tmail.transport.http import API_URL, HttpClient

JMAP_CORE_CAPABILITY = "urn:ietf:params:jmap:core"

ArgsBuilder = Callable[[str], dict[str, Any]]

logger = logging.getLogger(__name__)


def build_request(
    account_id: str,
    capabilities: Sequence[str],
    calls: Sequence[tuple[str, ArgsBuilder]],
) -> Request:
    """Build a request envelope, assigning call IDs "0", "1", ... in call order."""
    return Request(
        using=list(capabilities),
        method_calls=[
            Invocation(name=name, arguments=build(account_id), call_id=str(i))
            for i, (name, build) in enumerate(calls)
        ],
    )


def parse_response(raw: Any) -> list[MethodResponse]:
    try:
        return Response.model_validate(raw).invocations()
    except ValidationError as e:
        raise DecodeError(f"unexpected response envelope: {e}")


def index_by_call_id(responses: Sequence[MethodResponse]) -> dict[str, MethodResponse]:
    """Key responses by call ID. The first entry wins if the server repeats an ID."""
    indexed: dict[str, MethodResponse] = {}
    for response in responses:
        indexed.setdefault(response.call_id, response)
    return indexed


class BatchTransport:
    def __init__(self, http: HttpClient, api_url: str = API_URL):
        self._http = http
        self._api_url = api_url

    async def execute(
        self,
        account_id: str,
        capabilities: Sequence[str],
        calls: Sequence[tuple[str, ArgsBuilder]],
    ) -> list[MethodResponse]:
        """Send ``calls`` as one batch and return the response entries in response order."""
        request = build_request(account_id, capabilities, calls)
        logger.debug("Sending batch: %s", ", ".join(c.name for c in request.method_calls))
        raw = await self._http.post(self._api_url, request.to_wire())
        responses = parse_response(raw)
        logger.debug("Received %d method response(s)", len(responses))
        return responses

    async def single(
        self,
        account_id: str,
        capabilities: Sequence[str],
        method: str,
        build: ArgsBuilder,
    ) -> MethodResponse:
        """Execute a one-call batch and return the response correlated to it."""
        responses = await self.execute(account_id, capabilities, [(method, build)])
        match: Optional[MethodResponse] = index_by_call_id(responses).get("0")
        if match is None:
            raise ProtocolError(f"Unexpected response: no result for {method}")
        return match
