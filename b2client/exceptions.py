from typing import Optional

from b2client.enums import UploadErrorKind


class B2ClientException(Exception):
    def __init__(self, message):
        super().__init__(message)


class MissingCredentialsException(B2ClientException):
    def __init__(
        self,
        message="Could not initialize b2client - application key id or application key is missing."
        + "\n\t    Set B2_APPLICATION_KEY_ID and B2_APPLICATION_KEY or pass them to Client().",
    ):
        super().__init__(message)


class TransportError(B2ClientException):
    """Connection, DNS, TLS or timeout failure raised by the transport."""

    def __init__(self, message, url: Optional[str] = None):
        self.url = url
        super().__init__(message)


class B2ApiException(B2ClientException):
    """The B2 service answered with a non-success status."""

    def __init__(self, message, status: Optional[int] = None, code: str = "", body: str = ""):
        self.status = status
        self.code = code
        self.body = body
        self.error = None
        super().__init__(message)

    @classmethod
    def from_error(cls, error, prefix: str, **kwargs):
        """Build an exception from a decoded B2ErrorMessage."""
        message = f"{prefix}: {error.status} ({error.code}): {error.message}"
        exc = cls(message, status=error.status, code=error.code, body=error.raw, **kwargs)
        exc.error = error
        return exc


class AuthError(B2ApiException):
    """Credentials were rejected or the authorization could not be renewed."""


class UploadError(B2ApiException):
    def __init__(
        self,
        message,
        kind: UploadErrorKind = UploadErrorKind.UNKNOWN,
        status: Optional[int] = None,
        code: str = "",
        body: str = "",
    ):
        self.kind = kind
        super().__init__(message, status=status, code=code, body=body)
