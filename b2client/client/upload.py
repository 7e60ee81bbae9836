from typing import Dict, Optional

from b2client.client.api.types import AuthToken, B2ErrorMessage, StoredObjectDescriptor, UploadTicket
from b2client.client.api.versions.v2 import MAX_FILE_INFO_ENTRIES, V2Client
from b2client.client.auth_manager import AuthSession
from b2client.client.http.transport import Transport, TransportResponse
from b2client.enums import UploadErrorKind
from b2client.exceptions import AuthError, UploadError
from b2client.helpers.hashing import PayloadSource, PreparedPayload, prepare_payload
from b2client.logging import logger

# The first attempt plus one retry after re-authorization
MAX_ATTEMPTS = 2
MAX_FILE_NAME_BYTES = 1000


def classify_upload_error(error: B2ErrorMessage) -> UploadErrorKind:
    """Map a decoded B2 error onto an UploadErrorKind."""
    if error.status == 404 or error.is_bucket_not_found():
        return UploadErrorKind.NOT_FOUND
    if error.is_cap_exceeded():
        return UploadErrorKind.QUOTA_EXCEEDED
    if error.status == 400:
        return UploadErrorKind.MALFORMED
    return UploadErrorKind.UNKNOWN


class UploadCoordinator:
    """
    Uploads single objects, renewing the account authorization at most once.

    Every attempt obtains its own upload ticket; tickets are never reused,
    whatever the outcome of the attempt that consumed them.
    """

    def __init__(self, auth_session: AuthSession, api: Optional[V2Client] = None):
        self.auth_session = auth_session
        self.api = api or auth_session.api

    def upload(
        self,
        transport: Transport,
        bucket_id: str,
        file_name: str,
        data: PayloadSource,
        content_type: Optional[str] = None,
        file_info: Optional[Dict[str, str]] = None,
    ) -> StoredObjectDescriptor:
        """
        Upload one object.

        Args:
            transport: Transport used for every request of this call
            bucket_id: Target bucket id
            file_name: Object name, percent-encoded on the wire
            data: Bytes-like data or a binary file object
            content_type: MIME type; b2/x-auto when omitted
            file_info: Up to ten X-Bz-Info-* entries

        Returns:
            StoredObjectDescriptor of the stored object

        Raises:
            UploadError: On any non-authorization failure
            AuthError: If authorization is rejected again after re-login
            TransportError: If a request cannot be delivered
        """
        if not file_name or len(file_name.encode("utf-8")) > MAX_FILE_NAME_BYTES:
            raise UploadError(
                f"File names must be 1 to {MAX_FILE_NAME_BYTES} bytes in UTF-8",
                kind=UploadErrorKind.MALFORMED,
            )
        if file_info and len(file_info) > MAX_FILE_INFO_ENTRIES:
            raise UploadError(
                f"At most {MAX_FILE_INFO_ENTRIES} file info entries are allowed, got {len(file_info)}",
                kind=UploadErrorKind.MALFORMED,
            )
        payload = prepare_payload(data)

        for attempt in range(1, MAX_ATTEMPTS + 1):
            token = self.auth_session.get_valid_token(transport)
            response = self._attempt(transport, bucket_id, file_name, payload, token, content_type, file_info)

            if response.ok:
                descriptor = self._descriptor(response, payload)
                logger.info(f"Uploaded {descriptor.file_name} ({descriptor.size} bytes) as {descriptor.file_id}")
                return descriptor

            if not self.auth_session.is_token_expired_response(response):
                raise self._failure(response, bucket_id, file_name)

            self.auth_session.invalidate(token)
            if attempt < MAX_ATTEMPTS:
                logger.info(f"Authorization expired while uploading {file_name}, retrying with a new token")

        error = self.api.decode_error(response)
        logger.warning(f"Upload of {file_name} rejected again after re-authorization")
        raise AuthError.from_error(error, "Authorization rejected after re-login")

    def _attempt(
        self,
        transport: Transport,
        bucket_id: str,
        file_name: str,
        payload: PreparedPayload,
        token: AuthToken,
        content_type: Optional[str],
        file_info: Optional[Dict[str, str]],
    ) -> TransportResponse:
        """Request a fresh ticket and spend it on one upload request."""
        response = self.api.get_upload_url(transport, token, bucket_id)
        if not response.ok:
            return response

        ticket = self.api.parse_model(response, UploadTicket, UploadError, kind=UploadErrorKind.MALFORMED)
        logger.debug(f"Got upload ticket for bucket {ticket.bucket_id}")
        return self.api.upload_file(transport, ticket, file_name, payload, content_type, file_info)

    def _descriptor(self, response: TransportResponse, payload: PreparedPayload) -> StoredObjectDescriptor:
        descriptor = self.api.descriptor_from(response, UploadError, kind=UploadErrorKind.MALFORMED)
        if descriptor.content_sha1 != payload.sha1 or descriptor.size != payload.length:
            raise UploadError(
                f"Stored object does not match the payload: sha1 {descriptor.content_sha1} != {payload.sha1} "
                f"or size {descriptor.size} != {payload.length}",
                kind=UploadErrorKind.MALFORMED,
                status=response.status_code,
                body=response.text,
            )
        return descriptor

    def _failure(self, response: TransportResponse, bucket_id: str, file_name: str):
        error = self.api.decode_error(response)
        if error.status == 401:
            logger.warning(f"Upload of {file_name} not authorized: {error.code} {error.message}")
            return AuthError.from_error(error, "Upload not authorized")

        kind = classify_upload_error(error)
        logger.warning(f"Upload of {file_name} to bucket {bucket_id} failed ({kind}): {error.status} {error.message}")
        return UploadError.from_error(error, "Upload failed", kind=kind)
