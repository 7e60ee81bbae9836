from typing import Optional

from requests.adapters import HTTPAdapter
from urllib3.util import Retry


class BaseHTTPAdapter(HTTPAdapter):
    """HTTP adapter with connection pooling and retries disabled"""

    def __init__(
        self,
        pool_connections: int = 10,
        pool_maxsize: int = 10,
        max_retries: Optional[Retry] = None,
    ):
        """
        Initialize the base HTTP adapter.

        Retries default to zero: connection failures and 5xx answers are
        surfaced to the caller instead of being replayed by urllib3.

        Args:
            pool_connections: Number of connection pools to cache
            pool_maxsize: Maximum number of connections to save in the pool
            max_retries: Retry configuration for failed requests
        """
        if max_retries is None:
            max_retries = Retry(total=0, raise_on_status=False)

        super().__init__(pool_connections=pool_connections, pool_maxsize=pool_maxsize, max_retries=max_retries)
