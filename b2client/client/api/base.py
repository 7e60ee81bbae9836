"""
Base API client classes for making B2 requests.

This module provides the foundation for the versioned B2 API clients. The
clients hold no transport: every request method takes the caller's
Transport and returns the raw TransportResponse, leaving the decision of
what a failure means to the component that issued the request.
"""

import json
from typing import Any, Dict, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from b2client.client.api.types import B2ErrorMessage
from b2client.client.http.transport import Body, Transport, TransportResponse
from b2client.exceptions import B2ApiException
from b2client.helpers.version import get_user_agent

M = TypeVar("M", bound=BaseModel)


class BaseApiClient:
    """
    Base class for B2 API communication.

    This class provides header preparation, URL building and response
    decoding without authentication state.
    """

    API_VERSION = ""

    def __init__(self, timeout: Optional[float] = None):
        """
        Initialize the base API client.

        Args:
            timeout: Per-request timeout handed to the transport, or None for the transport default
        """
        self.timeout = timeout

    def prepare_headers(
        self, authorization: Optional[str] = None, custom_headers: Optional[Dict[str, str]] = None
    ) -> Dict[str, str]:
        """
        Prepare headers for API requests.

        Args:
            authorization: Value of the Authorization header, if any
            custom_headers: Additional headers to include

        Returns:
            Headers dictionary with standard headers and any custom headers
        """
        headers = {
            "Accept": "application/json",
            "User-Agent": get_user_agent(),
        }

        if custom_headers:
            headers.update(custom_headers)

        # Authorization is set last so custom headers cannot replace it
        if authorization:
            headers["Authorization"] = authorization

        return headers

    def _get_full_url(self, base_url: str, operation: str) -> str:
        """
        Get the full URL for an API operation.

        Args:
            base_url: apiUrl or realm URL, without a trailing slash
            operation: The B2 operation name, e.g. b2_get_upload_url

        Returns:
            The full URL
        """
        return f"{base_url.rstrip('/')}{self.API_VERSION}/{operation}"

    def request(
        self,
        transport: Transport,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Body = None,
    ) -> TransportResponse:
        return transport.send(method, url, headers, body, timeout=self.timeout)

    def post_json(
        self,
        transport: Transport,
        url: str,
        authorization: Optional[str],
        payload: Optional[Dict[str, Any]] = None,
    ) -> TransportResponse:
        """
        POST a JSON document.

        Args:
            transport: Transport used for this request only
            url: Full URL of the operation
            authorization: Value of the Authorization header
            payload: JSON body; an empty object when omitted

        Returns:
            The transport response, successful or not
        """
        headers = self.prepare_headers(authorization, {"Content-Type": "application/json"})
        body = json.dumps(payload or {}).encode("utf-8")
        return self.request(transport, "POST", url, headers, body)

    @staticmethod
    def decode_error(response: TransportResponse) -> B2ErrorMessage:
        return B2ErrorMessage.decode(response.status_code, response.body)

    @staticmethod
    def parse_model(
        response: TransportResponse,
        model: Type[M],
        error_cls: Type[B2ApiException],
        extra: Optional[Dict[str, Any]] = None,
        **error_kwargs,
    ) -> M:
        """
        Decode a successful JSON response into a model.

        Raises:
            error_cls: If the body is not JSON or lacks required fields
        """
        try:
            payload = response.json()
            if not isinstance(payload, dict):
                raise ValueError("expected a JSON object")
            if extra:
                payload = {**payload, **extra}
            return model.model_validate(payload)
        except (ValueError, ValidationError) as e:
            raise error_cls(
                f"Unexpected {model.__name__} response: {e}",
                status=response.status_code,
                body=response.text,
                **error_kwargs,
            ) from e
