from typing import Any, Callable, Dict, Optional

from b2client.client.api.types import AuthToken, StoredObjectDescriptor
from b2client.client.api.versions.v2 import V2Client
from b2client.client.auth_manager import AuthSession
from b2client.client.http.http_client import RequestsTransport
from b2client.client.http.transport import Transport, TransportResponse
from b2client.client.upload import MAX_ATTEMPTS, UploadCoordinator
from b2client.config import Config
from b2client.exceptions import AuthError, B2ApiException
from b2client.helpers.hashing import PayloadSource
from b2client.logging import configure_logging, logger


class Client:
    """
    Convenience entry point wiring configuration, a transport, an AuthSession
    and an UploadCoordinator together.

    The client owns the transport it builds itself and closes it in close();
    a transport passed in stays owned by the caller.
    """

    config: Config
    auth_session: AuthSession
    uploads: UploadCoordinator

    def __init__(self, transport: Optional[Transport] = None, config: Optional[Config] = None, **kwargs):
        self.config = config or Config()
        self.config.configure(**kwargs)
        configure_logging(self.config)

        self.api = V2Client(self.config.realm_url, timeout=self.config.timeout)
        self.auth_session = AuthSession(
            self.config.credentials(),
            api=self.api,
            token_ttl=self.config.token_ttl_delta,
            expiry_margin=self.config.expiry_margin_delta,
        )
        self.uploads = UploadCoordinator(self.auth_session, self.api)

        self._owns_transport = transport is None
        self.transport = transport if transport is not None else RequestsTransport(timeout=self.config.timeout)

    def authorize(self) -> AuthToken:
        """Return the current token, logging in if needed"""
        return self.auth_session.get_valid_token(self.transport)

    def upload(
        self,
        bucket_id: str,
        file_name: str,
        data: PayloadSource,
        content_type: Optional[str] = None,
        file_info: Optional[Dict[str, str]] = None,
    ) -> StoredObjectDescriptor:
        return self.uploads.upload(self.transport, bucket_id, file_name, data, content_type, file_info)

    def get_file_info(self, file_id: str) -> StoredObjectDescriptor:
        response = self._call_with_reauth(
            "b2_get_file_info", lambda token: self.api.get_file_info(self.transport, token, file_id)
        )
        return self.api.descriptor_from(response, B2ApiException)

    def delete_file_version(self, file_name: str, file_id: str) -> Dict[str, Any]:
        response = self._call_with_reauth(
            "b2_delete_file_version",
            lambda token: self.api.delete_file_version(self.transport, token, file_name, file_id),
        )
        try:
            return response.json()
        except ValueError as e:
            raise B2ApiException(
                f"Unexpected b2_delete_file_version response: {e}", status=response.status_code, body=response.text
            ) from e

    def download_file_by_name(self, bucket_name: str, file_name: str) -> bytes:
        response = self._call_with_reauth(
            "b2_download_file_by_name",
            lambda token: self.api.download_file_by_name(self.transport, token, bucket_name, file_name),
        )
        return response.body

    def _call_with_reauth(self, operation: str, send: Callable[[AuthToken], TransportResponse]) -> TransportResponse:
        """
        Run an account-token request, re-authorizing once on an expired token.

        Raises:
            AuthError: On 401 answers that survive re-authorization or that a login cannot fix
            B2ApiException: On any other failure
        """
        for attempt in range(1, MAX_ATTEMPTS + 1):
            token = self.auth_session.get_valid_token(self.transport)
            response = send(token)
            if response.ok:
                return response

            error = self.api.decode_error(response)
            if self.auth_session.is_token_expired_response(response):
                self.auth_session.invalidate(token)
                if attempt < MAX_ATTEMPTS:
                    logger.info(f"Authorization expired during {operation}, retrying with a new token")
                    continue

            logger.warning(f"{operation} failed: {error.status} ({error.code}) {error.message}")
            if error.status == 401:
                raise AuthError.from_error(error, f"{operation} not authorized")
            raise B2ApiException.from_error(error, f"{operation} failed")

        raise AssertionError("unreachable")  # pragma: no cover

    def close(self) -> None:
        if self._owns_transport and hasattr(self.transport, "close"):
            self.transport.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
