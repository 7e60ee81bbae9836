from typing import Dict, Optional

import requests

from b2client.client.http.http_adapter import BaseHTTPAdapter
from b2client.client.http.transport import Body, TransportResponse
from b2client.exceptions import TransportError
from b2client.helpers.version import get_user_agent
from b2client.logging import logger


class RequestsTransport:
    """
    Transport backed by a private requests.Session.

    Each instance owns its session; nothing is shared between instances, so
    build one per independent line of work and close it when done.
    """

    def __init__(self, timeout: float = 30, adapter: Optional[BaseHTTPAdapter] = None, verify: bool = True):
        """
        Args:
            timeout: Default request timeout in seconds
            adapter: Adapter mounted for http:// and https://
            verify: Whether TLS certificates are verified
        """
        self.timeout = timeout
        self.verify = verify
        self._session = requests.Session()

        adapter = adapter or BaseHTTPAdapter()
        self._session.mount("http://", adapter)
        self._session.mount("https://", adapter)

        self._session.headers.update({"User-Agent": get_user_agent()})

    def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Body = None,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        logger.debug(f"{method.upper()} {url}")
        try:
            response = self._session.request(
                method.upper(),
                url,
                headers=headers,
                data=body,
                timeout=timeout if timeout is not None else self.timeout,
                verify=self.verify,
                allow_redirects=False,
            )
        except requests.exceptions.Timeout as e:
            raise TransportError(f"{method.upper()} {url} timed out: {e}", url=url) from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"{method.upper()} {url} failed: {e}", url=url) from e

        logger.debug(f"{method.upper()} {url} -> {response.status_code}")
        return TransportResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    def close(self) -> None:
        self._session.close()

    def __enter__(self) -> "RequestsTransport":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()
