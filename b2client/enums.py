"""
Enums shared by the authorization and upload components.
"""

from enum import Enum


class AuthState(Enum):
    """Lifecycle of the cached account authorization token."""

    NO_TOKEN = "no_token"
    VALID = "valid"
    EXPIRED = "expired"

    def __str__(self) -> str:
        return self.name


class UploadErrorKind(Enum):
    """Classification attached to every UploadError."""

    NOT_FOUND = "not_found"
    QUOTA_EXCEEDED = "quota_exceeded"
    MALFORMED = "malformed"
    UNKNOWN = "unknown"

    def __str__(self) -> str:
        return self.name
