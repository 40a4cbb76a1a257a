"""
JMAP request/response envelopes and method result shapes.
"""

from __future__ import annotations

from typing import Any, Generic, Optional, TypeVar
from pydantic import BaseModel, Field, ValidationError

S = TypeVar("S")
F = TypeVar("F")


class Invocation(BaseModel):
    """One method call or method response: [name, arguments, callId]."""
    name: str
    arguments: dict[str, Any]
    call_id: str

    def to_wire(self) -> list[Any]:
        return [self.name, self.arguments, self.call_id]

    @property
    def is_error(self) -> bool:
        return self.name == "error"


MethodResponse = Invocation


class Request(BaseModel):
    using: list[str]
    method_calls: list[Invocation] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return {
            "using": list(self.using),
            "methodCalls": [call.to_wire() for call in self.method_calls],
        }


class Response(BaseModel):
    method_responses: list[tuple[str, dict[str, Any], str]] = Field(alias="methodResponses")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def invocations(self) -> list[Invocation]:
        return [
            Invocation(name=name, arguments=arguments, call_id=call_id)
            for name, arguments, call_id in self.method_responses
        ]


class Outcome(Generic[S, F]):
    """Result of one create or update entry: either a success or a failure payload."""

    __slots__ = ("value", "error", "ok")

    def __init__(self, ok: bool, value: Optional[S] = None, error: Optional[F] = None):
        self.ok = ok
        self.value = value
        self.error = error

    @classmethod
    def success(cls, value: S) -> "Outcome[S, F]":
        return cls(True, value=value)

    @classmethod
    def failure(cls, error: F) -> "Outcome[S, F]":
        return cls(False, error=error)

    def __repr__(self) -> str:
        if self.ok:
            return f"Outcome.success({self.value!r})"
        return f"Outcome.failure({self.error!r})"


class SetError(BaseModel):
    type: str = ""
    description: Optional[str] = None
    properties: Optional[list[str]] = None

    model_config = {"extra": "allow"}

    def __str__(self) -> str:
        text = self.type or "unknown"
        if self.description:
            text += f": {self.description}"
        if self.properties:
            text += f" ({', '.join(self.properties)})"
        return text


class SetResponse(BaseModel):
    """Arguments of a */set response."""
    created: Optional[dict[str, Any]] = None
    not_created: Optional[dict[str, Any]] = Field(default=None, alias="notCreated")
    updated: Optional[dict[str, Any]] = None
    not_updated: Optional[dict[str, Any]] = Field(default=None, alias="notUpdated")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def creation(self, creation_id: str) -> Optional[Outcome[Any, Any]]:
        """Outcome for a create keyed by ``creation_id``; a success entry wins over a failure."""
        return _lookup(self.created, self.not_created, creation_id)

    def update(self, id: str) -> Optional[Outcome[Any, Any]]:
        """Outcome for an update of ``id``. Presence under ``updated`` is the success signal."""
        return _lookup(self.updated, self.not_updated, id)


class GetResponse(BaseModel):
    """Arguments of a */get response."""
    items: Optional[list[Any]] = Field(default=None, alias="list")

    model_config = {"populate_by_name": True, "extra": "ignore"}


def _lookup(successes: Optional[dict[str, Any]], failures: Optional[dict[str, Any]], key: str) -> Optional[Outcome]:
    if successes is not None and key in successes:
        return Outcome.success(successes[key])
    if failures is not None and key in failures:
        return Outcome.failure(failures[key])
    return None


def describe_set_error(raw: Any) -> str:
    """Render a notCreated/notUpdated entry; payloads that are not SetError-shaped are shown verbatim."""
    if isinstance(raw, dict):
        try:
            return str(SetError.model_validate(raw))
        except ValidationError:
            pass
    return repr(raw)
