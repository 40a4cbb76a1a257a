"""
tmail — Fastmail masked email client for Python.

JMAP client for creating, listing, disabling and deleting masked emails.
"""

from tmail.client import Tmail, AsyncTmail
from tmail.errors import (
    TmailError,
    TransportError,
    AuthenticationError,
    ProtocolError,
    DecodeError,
    CapabilityMissingError,
    NotFoundError,
)
from tmail.models.masked_email import MaskedEmail, MaskedEmailState
from tmail.models.session import Session

__version__ = "0.1.0"
__all__ = [
    "Tmail",
    "AsyncTmail",
    "TmailError",
    "TransportError",
    "AuthenticationError",
    "ProtocolError",
    "DecodeError",
    "CapabilityMissingError",
    "NotFoundError",
    "MaskedEmail",
    "MaskedEmailState",
    "Session",
]
