"""
The request/response interface the library needs from its caller.

Anything with a matching ``send`` can be passed where a Transport is
expected; RequestsTransport is the bundled implementation.
"""

import json
from dataclasses import dataclass, field
from typing import Any, BinaryIO, Dict, Optional, Protocol, Union

Body = Union[bytes, BinaryIO, None]


@dataclass(frozen=True)
class TransportResponse:
    """Status, headers and fully-read body of one HTTP exchange"""

    status_code: int
    headers: Dict[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.body)


class Transport(Protocol):
    """Blocking HTTPS exchange over a connection configured by the caller"""

    def send(
        self,
        method: str,
        url: str,
        headers: Dict[str, str],
        body: Body = None,
        timeout: Optional[float] = None,
    ) -> TransportResponse:
        """
        Perform one request.

        Raises:
            TransportError: On connection, DNS, TLS or timeout failures
        """
        ...
