"""
tmail error types.

Every failure raised by the client is one of the subclasses below, so callers
can branch on the kind instead of matching message text.
"""

from typing import Any, Optional


class TmailError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class TransportError(TmailError):
    """The HTTP exchange could not complete (DNS, TLS, timeout, reset)."""

    def __init__(self, detail: str):
        super().__init__("transport_error", f"HTTP error: {detail}")
        self.detail = detail


class AuthenticationError(TmailError):
    """The endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str):
        super().__init__(
            "auth_error",
            f"Auth failed ({status_code}): {body}",
            {"status_code": status_code, "body": body},
        )
        self.status_code = status_code
        self.body = body


class ProtocolError(TmailError):
    def __init__(self, detail: str, details: Optional[dict[str, Any]] = None):
        super().__init__("protocol_error", f"API error: {detail}", details)
        self.detail = detail


class DecodeError(TmailError):
    def __init__(self, detail: str):
        super().__init__("decode_error", f"Parse error: {detail}")
        self.detail = detail


class CapabilityMissingError(TmailError):
    def __init__(self, capability: str):
        super().__init__(
            "capability_missing",
            "Masked email capability not found",
            {"capability": capability},
        )
        self.capability = capability


class NotFoundError(TmailError):
    def __init__(self, identifier: str):
        super().__init__("not_found", f"Not found: {identifier}", {"identifier": identifier})
        self.identifier = identifier
