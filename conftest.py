"""
Shared fixtures for pytest tests.
"""

import os
from unittest import mock

import pytest

B2_ENV_VARS = (
    "B2_APPLICATION_KEY_ID",
    "B2_APPLICATION_KEY",
    "B2_REALM_URL",
    "B2_TIMEOUT",
    "B2_TOKEN_TTL",
    "B2_TOKEN_EXPIRY_MARGIN",
    "B2CLIENT_LOG_LEVEL",
    "B2CLIENT_LOGGING_TO_FILE",
)


@pytest.fixture(autouse=True)
def clean_b2_env():
    """Keep the developer's B2 environment out of the tests."""
    with mock.patch.dict(os.environ):
        for key in B2_ENV_VARS:
            os.environ.pop(key, None)
        yield
