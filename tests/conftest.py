"""Shared fixtures: an in-memory Fastmail JMAP endpoint behind httpx.MockTransport."""

import json
from typing import Any, Optional

import httpx
import pytest

from tmail.session import MASKED_EMAIL_CAPABILITY
from tmail.transport.batch import JMAP_CORE_CAPABILITY
from tmail.transport.http import API_URL, SESSION_URL

TOKEN = "fmu1-test-token"
ACCOUNT_ID = "u1234abcd"


class FakeFastmail:
    """Just enough of MaskedEmail/get and MaskedEmail/set to exercise the client.

    Queue raw bodies or httpx.Response objects on ``scripted`` to answer the
    next API request verbatim instead.
    """

    def __init__(self, primary_accounts: Optional[dict[str, str]] = None):
        if primary_accounts is None:
            primary_accounts = {JMAP_CORE_CAPABILITY: ACCOUNT_ID, MASKED_EMAIL_CAPABILITY: ACCOUNT_ID}
        self.primary_accounts = primary_accounts
        self.records: list[dict[str, Any]] = []
        self.requests: list[dict[str, Any]] = []
        self.auth_headers: list[Optional[str]] = []
        self.scripted: list[Any] = []
        self._next_id = 1

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def add(self, email: str, state: Optional[str] = "enabled", **fields: Any) -> dict[str, Any]:
        record = {"id": f"masked-{self._next_id}", "email": email, **fields}
        if state is not None:
            record["state"] = state
        self._next_id += 1
        self.records.append(record)
        return record

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.auth_headers.append(request.headers.get("Authorization"))
        if request.method == "GET" and str(request.url) == SESSION_URL:
            return httpx.Response(200, json={
                "primaryAccounts": self.primary_accounts,
                "username": "me@example.com",
                "apiUrl": API_URL,
            })
        if request.method == "POST" and str(request.url) == API_URL:
            body = json.loads(request.content)
            self.requests.append(body)
            if self.scripted:
                scripted = self.scripted.pop(0)
                if isinstance(scripted, httpx.Response):
                    return scripted
                return httpx.Response(200, json=scripted)
            return httpx.Response(200, json={
                "methodResponses": [self._call(*call) for call in body["methodCalls"]],
                "sessionState": "cyrus-0",
            })
        return httpx.Response(404, text="Not Found")

    def _call(self, name: str, args: dict[str, Any], call_id: str) -> list[Any]:
        if name == "MaskedEmail/get":
            return [name, {"accountId": args["accountId"], "state": "1",
                           "list": [dict(r) for r in self.records], "notFound": []}, call_id]
        if name == "MaskedEmail/set":
            result: dict[str, Any] = {"accountId": args["accountId"]}
            for key, props in (args.get("create") or {}).items():
                record = self.add(
                    f"generated{self._next_id}@mask.example",
                    state=props.get("state", "pending"),
                    forDomain=props.get("forDomain", ""),
                    description=props.get("description", ""),
                    createdAt="2024-01-15T10:00:00Z",
                )
                result.setdefault("created", {})[key] = {
                    "id": record["id"], "email": record["email"], "state": record["state"],
                }
            for id, patch in (args.get("update") or {}).items():
                record = next((r for r in self.records if r["id"] == id), None)
                if record is None or record.get("state") == "deleted":
                    result.setdefault("notUpdated", {})[id] = {"type": "notFound"}
                else:
                    record.update(patch)
                    result.setdefault("updated", {})[id] = None
            return [name, result, call_id]
        return ["error", {"type": "unknownMethod"}, call_id]


def method_response(name: str, arguments: dict[str, Any], call_id: str = "0") -> dict[str, Any]:
    return {"methodResponses": [[name, arguments, call_id]], "sessionState": "cyrus-0"}


@pytest.fixture
def fake() -> FakeFastmail:
    return FakeFastmail()
