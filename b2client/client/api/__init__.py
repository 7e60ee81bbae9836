"""
API clients for the B2 native API.
"""

from b2client.client.api.base import BaseApiClient
from b2client.client.api.types import (
    AuthToken,
    B2ErrorMessage,
    Credentials,
    StoredObjectDescriptor,
    UploadTicket,
)
from b2client.client.api.versions.v2 import V2Client

__all__ = [
    "AuthToken",
    "B2ErrorMessage",
    "BaseApiClient",
    "Credentials",
    "StoredObjectDescriptor",
    "UploadTicket",
    "V2Client",
]
