from datetime import timedelta

import pytest

from b2client.client.api.types import Credentials
from b2client.client.api.versions.v2 import V2Client
from b2client.client.auth_manager import AuthSession
from b2client.client.upload import UploadCoordinator
from tests.fixtures.transport import REALM_URL, FakeClock, FakeTransport


@pytest.fixture
def credentials() -> Credentials:
    return Credentials(account_id="a", application_key="k")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def api() -> V2Client:
    return V2Client(REALM_URL)


@pytest.fixture
def transport() -> FakeTransport:
    """Fake transport for kernel tests"""
    return FakeTransport()


@pytest.fixture
def auth_session(credentials, api, clock) -> AuthSession:
    return AuthSession(
        credentials,
        api=api,
        token_ttl=timedelta(hours=24),
        expiry_margin=timedelta(seconds=60),
        clock=clock,
    )


@pytest.fixture
def coordinator(auth_session) -> UploadCoordinator:
    return UploadCoordinator(auth_session)
