from b2client.client.http.http_adapter import BaseHTTPAdapter
from b2client.client.http.http_client import RequestsTransport
from b2client.client.http.transport import Transport, TransportResponse

__all__ = ["BaseHTTPAdapter", "RequestsTransport", "Transport", "TransportResponse"]
