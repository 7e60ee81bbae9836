from b2client.client.auth_manager import AuthSession
from b2client.client.client import Client
from b2client.client.http import RequestsTransport, Transport, TransportResponse
from b2client.client.upload import UploadCoordinator

__all__ = ["AuthSession", "Client", "RequestsTransport", "Transport", "TransportResponse", "UploadCoordinator"]
