import threading
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from b2client.client.api.types import AuthToken, Credentials
from b2client.client.api.versions.v2 import V2Client
from b2client.client.http.transport import Transport, TransportResponse
from b2client.enums import AuthState
from b2client.exceptions import AuthError
from b2client.logging import logger

DEFAULT_TOKEN_TTL = timedelta(hours=24)
DEFAULT_EXPIRY_MARGIN = timedelta(seconds=60)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AuthSession:
    """
    Owns the account authorization token and renews it on demand.

    A single lock guards the cached token. Callers that arrive while a login
    is in flight block on the lock and then receive the token that login
    produced, so concurrent renewals collapse into one request.
    """

    def __init__(
        self,
        credentials: Credentials,
        api: Optional[V2Client] = None,
        token_ttl: timedelta = DEFAULT_TOKEN_TTL,
        expiry_margin: timedelta = DEFAULT_EXPIRY_MARGIN,
        clock: Callable[[], datetime] = utcnow,
    ):
        """
        Initialize the authorization session.

        Args:
            credentials: Application key id and key used for every login
            api: V2 API client used to reach b2_authorize_account
            token_ttl: Lifetime assumed for a freshly issued token
            expiry_margin: Tokens this close to expiry are renewed early
            clock: Source of the current time, timezone-aware

        Raises:
            ValueError: If expiry_margin is not smaller than token_ttl
        """
        if expiry_margin >= token_ttl:
            raise ValueError(f"expiry_margin ({expiry_margin}) must be smaller than token_ttl ({token_ttl})")
        self.credentials = credentials
        self.api = api or V2Client()
        self.token_ttl = token_ttl
        self.expiry_margin = expiry_margin
        self._clock = clock
        self._token: Optional[AuthToken] = None
        self._invalidated = False
        self._token_lock = threading.Lock()

    def _current_state(self) -> AuthState:
        if self._token is None:
            return AuthState.NO_TOKEN
        if self._invalidated or self._token.is_expired(self._clock(), self.expiry_margin):
            return AuthState.EXPIRED
        return AuthState.VALID

    @property
    def state(self) -> AuthState:
        with self._token_lock:
            return self._current_state()

    def is_token_valid(self) -> bool:
        """Check whether a cached token exists, has not been invalidated and has not expired."""
        return self.state is AuthState.VALID

    def get_valid_token(self, transport: Transport) -> AuthToken:
        """
        Get a non-expired token, logging in only if there is none.

        Args:
            transport: Transport used for the login request, if one is needed

        Returns:
            A valid AuthToken

        Raises:
            AuthError: If the credentials are rejected
            TransportError: If the login request cannot be delivered
        """
        with self._token_lock:
            if self._current_state() is not AuthState.VALID:
                self._token = self._login(transport)
                self._invalidated = False
            assert self._token is not None  # For type checking
            return self._token

    def _login(self, transport: Transport) -> AuthToken:
        logger.debug(f"Authorizing account {self.credentials.account_id}")
        requested_at = self._clock()
        response = self.api.authorize_account(transport, self.credentials)

        if not response.ok:
            error = self.api.decode_error(response)
            logger.warning(f"Account authorization failed: {error.status} ({error.code}) {error.message}")
            raise AuthError.from_error(error, "Account authorization failed")

        token = self.api.parse_auth_token(response, requested_at + self.token_ttl)
        logger.info(f"Authorized account {token.account_id or self.credentials.account_id} against {token.api_url}")
        return token

    def invalidate(self, token: Optional[AuthToken] = None) -> None:
        """
        Mark the cached token stale so the next get_valid_token logs in again.

        Args:
            token: The token the caller saw fail. When given and a newer token
                has already replaced it, the newer token is left alone.
        """
        with self._token_lock:
            if self._token is None:
                return
            if token is not None and token is not self._token:
                logger.debug("Ignoring invalidation of a token that was already replaced")
                return
            logger.debug("Authorization token invalidated")
            self._invalidated = True

    def is_token_expired_response(self, response: TransportResponse) -> bool:
        """
        Check if a response indicates a token that a fresh login could fix.

        Args:
            response: The HTTP response to check

        Returns:
            True for 401 expired_auth_token / bad_auth_token answers, False otherwise
        """
        if response.status_code != 401:
            return False
        return self.api.decode_error(response).is_authorization_issue()
