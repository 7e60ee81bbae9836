"""
Common types used across API client modules.

Wire responses use B2's camelCase names; the models accept either the wire
alias or the Python field name.
"""

import json
from datetime import datetime, timedelta
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, SecretStr

EMPTY_SHA1 = "da39a3ee5e6b4b0d3255bfef95601890afd80709"


class Credentials(BaseModel):
    """Application key id and secret supplied once at construction"""

    model_config = ConfigDict(frozen=True)

    account_id: str
    application_key: SecretStr


class AuthToken(BaseModel):
    """Result of b2_authorize_account, replaced wholesale on every login"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    token: str = Field(alias="authorizationToken")
    api_url: str = Field(alias="apiUrl")
    download_url: str = Field(alias="downloadUrl")
    expires_at: datetime
    account_id: Optional[str] = Field(default=None, alias="accountId")
    recommended_part_size: Optional[int] = Field(default=None, alias="recommendedPartSize")
    absolute_minimum_part_size: Optional[int] = Field(default=None, alias="absoluteMinimumPartSize")

    def is_expired(self, now: datetime, margin: timedelta = timedelta(0)) -> bool:
        return now >= self.expires_at - margin


class UploadTicket(BaseModel):
    """Single-use upload URL and token scoped to one bucket"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    upload_url: str = Field(alias="uploadUrl")
    upload_auth_token: str = Field(alias="authorizationToken")
    bucket_id: str = Field(alias="bucketId")


class StoredObjectDescriptor(BaseModel):
    """Response from b2_upload_file and b2_get_file_info"""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    file_id: str = Field(alias="fileId")
    file_name: str = Field(alias="fileName")
    content_sha1: str = Field(alias="contentSha1")
    size: int = Field(alias="contentLength", ge=0)
    content_type: Optional[str] = Field(default=None, alias="contentType")
    bucket_id: Optional[str] = Field(default=None, alias="bucketId")
    upload_timestamp: Optional[int] = Field(default=None, alias="uploadTimestamp")
    file_info: Dict[str, str] = Field(default_factory=dict, alias="fileInfo")


class B2ErrorMessage(BaseModel):
    """
    Error object returned by the B2 service: ``{"status", "code", "message"}``.

    Bodies that are not a B2 error object keep the HTTP status, an empty code
    and the raw text as the message.
    """

    model_config = ConfigDict(frozen=True)

    status: int
    code: str = ""
    message: str = ""
    raw: str = ""

    @classmethod
    def decode(cls, status: int, body: bytes) -> "B2ErrorMessage":
        raw = body.decode("utf-8", errors="replace") if body else ""
        try:
            payload = json.loads(raw)
        except ValueError:
            return cls(status=status, message=raw, raw=raw)
        if not isinstance(payload, dict):
            return cls(status=status, message=raw, raw=raw)
        return cls(
            status=status,
            code=str(payload.get("code") or ""),
            message=str(payload.get("message") or ""),
            raw=raw,
        )

    def is_expired_authentication(self) -> bool:
        return self.status == 401 and self.code == "expired_auth_token"

    def is_bad_auth_token(self) -> bool:
        return self.status == 401 and self.code == "bad_auth_token"

    def is_authorization_issue(self) -> bool:
        """True for an expired or otherwise stale token that a fresh login can fix."""
        if self.is_expired_authentication() or self.is_bad_auth_token():
            return True
        if self.message.startswith("Account ") and self.message.endswith(" does not exist"):
            return True
        return self.message in (
            "Invalid authorization token",
            "Authorization token for wrong cluster",
        )

    def is_credentials_issue(self) -> bool:
        if self.status == 401 and self.code == "unauthorized":
            return True
        return self.message in (
            "B2 has not been enabled for this account",
            "User is in B2 suspend",
            "Cannot authorize domain site license account",
            "Invalid authorization",
        )

    def is_bucket_not_found(self) -> bool:
        if self.code in ("bad_bucket_id", "invalid_bucket_id"):
            return True
        message = self.message
        if message.startswith(("Bucket does not exist: ", "Invalid bucket id: ", "Invalid bucketId: ")):
            return True
        if message in ("bad bucketId", "invalid_bucket_id", "BucketId not valid for account"):
            return True
        if message.startswith(("Bucket ", "bucket ")):
            return message.endswith(" does not exist") or message.endswith(" is not a B2 bucket")
        return False

    def is_file_not_found(self) -> bool:
        if self.code in ("no_such_file", "file_not_present", "not_found"):
            return True
        if self.message.startswith(("Invalid fileId: ", "Not a valid file id: ", "File not present: ")):
            return True
        return self.message.startswith("Bucket ") and "does not have file:" in self.message

    def is_cap_exceeded(self) -> bool:
        return self.code.endswith("cap_exceeded")

    def is_invalid_sha1(self) -> bool:
        return self.message == "Sha1 did not match data received"

    def is_service_unavailable(self) -> bool:
        return 500 <= self.status <= 599

    def is_too_many_requests(self) -> bool:
        return self.status == 429

    def should_back_off(self) -> bool:
        return self.status in (408, 429, 503)
