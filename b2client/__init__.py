"""
Client library for the Backblaze B2 native API: account authorization with
transparent renewal and single-shot uploads.
"""

from b2client.client import AuthSession, Client, RequestsTransport, Transport, TransportResponse, UploadCoordinator
from b2client.client.api.types import AuthToken, Credentials, StoredObjectDescriptor, UploadTicket
from b2client.config import Config
from b2client.enums import AuthState, UploadErrorKind
from b2client.exceptions import (
    AuthError,
    B2ApiException,
    B2ClientException,
    MissingCredentialsException,
    TransportError,
    UploadError,
)
from b2client.logging import configure_logging, logger

__all__ = [
    "AuthError",
    "AuthSession",
    "AuthState",
    "AuthToken",
    "B2ApiException",
    "B2ClientException",
    "Client",
    "Config",
    "Credentials",
    "MissingCredentialsException",
    "RequestsTransport",
    "StoredObjectDescriptor",
    "Transport",
    "TransportError",
    "TransportResponse",
    "UploadCoordinator",
    "UploadError",
    "UploadErrorKind",
    "UploadTicket",
    "configure_logging",
    "logger",
]
