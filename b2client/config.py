import os
from dataclasses import dataclass, field
from datetime import timedelta
from typing import TYPE_CHECKING, Optional, Union

from b2client.exceptions import MissingCredentialsException
from b2client.helpers.env import get_env_int, get_env_str

if TYPE_CHECKING:
    from b2client.client.api.types import Credentials


@dataclass(slots=True)
class Config:
    application_key_id: Optional[str] = field(
        default_factory=lambda: get_env_str("B2_APPLICATION_KEY_ID"),
        metadata={"description": "Application key id (or account id) used for b2_authorize_account"},
    )

    application_key: Optional[str] = field(
        default_factory=lambda: get_env_str("B2_APPLICATION_KEY"),
        metadata={"description": "Secret application key"},
    )

    realm_url: str = field(
        default_factory=lambda: os.getenv("B2_REALM_URL", "https://api.backblazeb2.com"),
        metadata={"description": "Base URL of the account authorization service"},
    )

    timeout: int = field(
        default_factory=lambda: get_env_int("B2_TIMEOUT", 30),
        metadata={"description": "Request timeout in seconds"},
    )

    token_ttl: int = field(
        default_factory=lambda: get_env_int("B2_TOKEN_TTL", 86400),
        metadata={"description": "Assumed lifetime of an account authorization token, in seconds"},
    )

    expiry_margin: int = field(
        default_factory=lambda: get_env_int("B2_TOKEN_EXPIRY_MARGIN", 60),
        metadata={"description": "Renew tokens this many seconds before they expire"},
    )

    log_level: Union[str, int] = field(
        default_factory=lambda: os.getenv("B2CLIENT_LOG_LEVEL", "WARNING"),
        metadata={"description": "Logging level for b2client logs"},
    )

    def configure(
        self,
        application_key_id: Optional[str] = None,
        application_key: Optional[str] = None,
        realm_url: Optional[str] = None,
        timeout: Optional[int] = None,
        token_ttl: Optional[int] = None,
        expiry_margin: Optional[int] = None,
        log_level: Optional[Union[str, int]] = None,
    ):
        """Configure settings from kwargs, validating where necessary"""
        if application_key_id is not None:
            self.application_key_id = application_key_id

        if application_key is not None:
            self.application_key = application_key

        if realm_url is not None:
            self.realm_url = realm_url.rstrip("/")

        if timeout is not None:
            if timeout <= 0:
                raise ValueError(f"timeout must be positive, got {timeout}")
            self.timeout = timeout

        if token_ttl is not None and token_ttl <= 0:
            raise ValueError(f"token_ttl must be positive, got {token_ttl}")

        if expiry_margin is not None and expiry_margin < 0:
            raise ValueError(f"expiry_margin must not be negative, got {expiry_margin}")

        # Checked on the combined result so env-derived values are covered too
        new_ttl = token_ttl if token_ttl is not None else self.token_ttl
        new_margin = expiry_margin if expiry_margin is not None else self.expiry_margin
        if new_margin >= new_ttl:
            raise ValueError(f"expiry_margin ({new_margin}s) must be smaller than token_ttl ({new_ttl}s)")
        self.token_ttl = new_ttl
        self.expiry_margin = new_margin

        if log_level is not None:
            self.log_level = log_level

    @property
    def token_ttl_delta(self) -> timedelta:
        return timedelta(seconds=self.token_ttl)

    @property
    def expiry_margin_delta(self) -> timedelta:
        return timedelta(seconds=self.expiry_margin)

    def credentials(self) -> "Credentials":
        """
        Build Credentials from the configured key pair.

        Raises:
            MissingCredentialsException: If either half of the key pair is missing
        """
        # Deferred to avoid a circular import through b2client.client
        from b2client.client.api.types import Credentials

        if not self.application_key_id or not self.application_key:
            raise MissingCredentialsException()
        return Credentials(account_id=self.application_key_id, application_key=self.application_key)

    def dict(self):
        """Return a dictionary representation of the config with the secret masked"""
        return {
            "application_key_id": self.application_key_id,
            "application_key": "****" if self.application_key else None,
            "realm_url": self.realm_url,
            "timeout": self.timeout,
            "token_ttl": self.token_ttl,
            "expiry_margin": self.expiry_margin,
            "log_level": self.log_level,
        }
