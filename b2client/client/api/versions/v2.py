"""
V2 API client for the B2 native API.

This module provides the client for the ``/b2api/v2`` operations the
library uses.
"""

import base64
from datetime import datetime
from typing import Dict, Optional
from urllib.parse import quote

from b2client.client.api.base import BaseApiClient
from b2client.client.api.types import AuthToken, Credentials, StoredObjectDescriptor, UploadTicket
from b2client.client.http.transport import Transport, TransportResponse
from b2client.exceptions import AuthError
from b2client.helpers.hashing import PreparedPayload

DEFAULT_CONTENT_TYPE = "b2/x-auto"
MAX_FILE_INFO_ENTRIES = 10


def encode_file_name(file_name: str) -> str:
    """Percent-encode a file name for X-Bz-File-Name and download URLs."""
    return quote(file_name, safe="/")


def basic_auth_header(credentials: Credentials) -> str:
    pair = f"{credentials.account_id}:{credentials.application_key.get_secret_value()}"
    return f"Basic {base64.b64encode(pair.encode('utf-8')).decode('ascii')}"


class V2Client(BaseApiClient):
    """Client for the B2 V2 API"""

    API_VERSION = "/b2api/v2"

    def __init__(self, realm_url: str = "https://api.backblazeb2.com", timeout: Optional[float] = None):
        """
        Initialize the V2 API client.

        Args:
            realm_url: Base URL of the account authorization service
            timeout: Per-request timeout in seconds
        """
        super().__init__(timeout=timeout)
        self.realm_url = realm_url

    def authorize_account(self, transport: Transport, credentials: Credentials) -> TransportResponse:
        url = self._get_full_url(self.realm_url, "b2_authorize_account")
        return self.post_json(transport, url, basic_auth_header(credentials))

    def parse_auth_token(self, response: TransportResponse, expires_at: datetime) -> AuthToken:
        return self.parse_model(response, AuthToken, AuthError, extra={"expires_at": expires_at})

    def get_upload_url(self, transport: Transport, token: AuthToken, bucket_id: str) -> TransportResponse:
        url = self._get_full_url(token.api_url, "b2_get_upload_url")
        return self.post_json(transport, url, token.token, {"bucketId": bucket_id})

    def upload_headers(
        self,
        ticket: UploadTicket,
        file_name: str,
        payload: PreparedPayload,
        content_type: Optional[str] = None,
        file_info: Optional[Dict[str, str]] = None,
    ) -> Dict[str, str]:
        """
        Build the b2_upload_file headers.

        Raises:
            ValueError: If more than ten file info entries are given
        """
        file_info = file_info or {}
        if len(file_info) > MAX_FILE_INFO_ENTRIES:
            raise ValueError(f"At most {MAX_FILE_INFO_ENTRIES} file info entries are allowed, got {len(file_info)}")

        headers = {
            "X-Bz-File-Name": encode_file_name(file_name),
            "Content-Type": content_type or DEFAULT_CONTENT_TYPE,
            "X-Bz-Content-Sha1": payload.sha1,
            "Content-Length": str(payload.length),
        }
        for key, value in file_info.items():
            headers[f"X-Bz-Info-{key}"] = quote(str(value), safe="")

        return self.prepare_headers(ticket.upload_auth_token, headers)

    def upload_file(
        self,
        transport: Transport,
        ticket: UploadTicket,
        file_name: str,
        payload: PreparedPayload,
        content_type: Optional[str] = None,
        file_info: Optional[Dict[str, str]] = None,
    ) -> TransportResponse:
        headers = self.upload_headers(ticket, file_name, payload, content_type, file_info)
        return self.request(transport, "POST", ticket.upload_url, headers, payload.body())

    def get_file_info(self, transport: Transport, token: AuthToken, file_id: str) -> TransportResponse:
        url = self._get_full_url(token.api_url, "b2_get_file_info")
        return self.post_json(transport, url, token.token, {"fileId": file_id})

    def delete_file_version(
        self, transport: Transport, token: AuthToken, file_name: str, file_id: str
    ) -> TransportResponse:
        url = self._get_full_url(token.api_url, "b2_delete_file_version")
        return self.post_json(transport, url, token.token, {"fileName": file_name, "fileId": file_id})

    def download_file_by_name(
        self, transport: Transport, token: AuthToken, bucket_name: str, file_name: str
    ) -> TransportResponse:
        url = f"{token.download_url.rstrip('/')}/file/{quote(bucket_name, safe='')}/{encode_file_name(file_name)}"
        return self.request(transport, "GET", url, self.prepare_headers(token.token))

    @staticmethod
    def descriptor_from(response: TransportResponse, error_cls, **error_kwargs) -> StoredObjectDescriptor:
        return BaseApiClient.parse_model(response, StoredObjectDescriptor, error_cls, **error_kwargs)
