"""Tests for the Client facade."""

import json

import pytest

from b2client.client.client import Client
from b2client.config import Config
from b2client.enums import AuthState
from b2client.exceptions import AuthError, B2ApiException, MissingCredentialsException
from tests.fixtures.transport import (
    DOWNLOAD_URL,
    FILE_ID,
    REALM_URL,
    auth_payload,
    echo_upload,
    error_response,
    file_payload,
    json_response,
    upload_url_payload,
)

AUTHORIZE = "b2_authorize_account"
GET_FILE_INFO = "b2_get_file_info"
DELETE_FILE_VERSION = "b2_delete_file_version"
HELLO_SHA1 = "aaf4c61ddcc5e8a2dabede0f3b482cd9aea9434d"


@pytest.fixture
def client(transport):
    transport.add(AUTHORIZE, json_response(200, auth_payload("T1")), json_response(200, auth_payload("T2")))
    return Client(transport=transport, application_key_id="a", application_key="k", realm_url=REALM_URL)


class TestClient:
    """Tests for the Client class."""

    def test_init_wires_components(self, client, transport):
        """Test that the client shares one API client and session between its parts."""
        assert client.transport is transport
        assert client.uploads.auth_session is client.auth_session
        assert client.uploads.api is client.api
        assert client.api.realm_url == REALM_URL
        assert client.auth_session.state is AuthState.NO_TOKEN
        assert transport.requests == []

    def test_init_without_credentials(self, transport):
        with pytest.raises(MissingCredentialsException):
            Client(transport=transport)

    def test_init_with_config(self, transport):
        config = Config()
        config.configure(application_key_id="a", application_key="k", timeout=7)

        client = Client(transport=transport, config=config)

        assert client.config is config
        assert client.api.timeout == 7

    def test_authorize(self, client, transport):
        token = client.authorize()

        assert token.token == "T1"
        assert transport.count(AUTHORIZE) == 1

    def test_upload(self, client, transport):
        transport.add("b2_get_upload_url", json_response(200, upload_url_payload()))
        transport.add("b2_upload_file", echo_upload)

        descriptor = client.upload("bucket1", "f.txt", b"hello", "text/plain")

        assert descriptor.content_sha1 == HELLO_SHA1
        assert descriptor.size == 5

    def test_get_file_info(self, client, transport):
        transport.add(GET_FILE_INFO, json_response(200, file_payload("f.txt", HELLO_SHA1, 5)))

        descriptor = client.get_file_info(FILE_ID)

        assert descriptor.file_id == FILE_ID
        assert descriptor.content_type == "text/plain"
        request = transport.calls(GET_FILE_INFO)[0]
        assert request.headers["Authorization"] == "T1"
        assert json.loads(request.body) == {"fileId": FILE_ID}

    def test_get_file_info_retries_once_on_expired_token(self, client, transport):
        """Test that an expired account token is renewed and the call repeated."""
        transport.add(
            GET_FILE_INFO,
            error_response(401, "expired_auth_token", "Authorization token has expired"),
            json_response(200, file_payload("f.txt", HELLO_SHA1, 5)),
        )

        descriptor = client.get_file_info(FILE_ID)

        assert descriptor.file_name == "f.txt"
        assert transport.count(AUTHORIZE) == 2
        assert [r.headers["Authorization"] for r in transport.calls(GET_FILE_INFO)] == ["T1", "T2"]

    def test_get_file_info_second_expiry_is_terminal(self, client, transport):
        transport.add(GET_FILE_INFO, error_response(401, "expired_auth_token", "Authorization token has expired"))

        with pytest.raises(AuthError) as exc_info:
            client.get_file_info(FILE_ID)

        assert exc_info.value.code == "expired_auth_token"
        assert transport.count(GET_FILE_INFO) == 2
        assert transport.count(AUTHORIZE) == 2

    def test_get_file_info_unauthorized_is_not_retried(self, client, transport):
        transport.add(GET_FILE_INFO, error_response(401, "unauthorized", "not entitled"))

        with pytest.raises(AuthError):
            client.get_file_info(FILE_ID)

        assert transport.count(GET_FILE_INFO) == 1
        assert transport.count(AUTHORIZE) == 1

    def test_unauthorized_keeps_account_token(self, client, transport):
        """Test that a 401 a login cannot fix leaves the cached token in place."""
        transport.add(GET_FILE_INFO, error_response(401, "unauthorized", "not entitled"))

        with pytest.raises(AuthError):
            client.get_file_info(FILE_ID)

        assert client.auth_session.state is AuthState.VALID
        assert client.authorize().token == "T1"
        assert transport.count(AUTHORIZE) == 1

    def test_second_expiry_leaves_token_invalidated(self, client, transport):
        transport.add(GET_FILE_INFO, error_response(401, "expired_auth_token", "Authorization token has expired"))

        with pytest.raises(AuthError):
            client.get_file_info(FILE_ID)

        assert client.auth_session.state is AuthState.EXPIRED

    def test_get_file_info_not_found(self, client, transport):
        transport.add(GET_FILE_INFO, error_response(404, "not_found", f"File not present: {FILE_ID}"))

        with pytest.raises(B2ApiException) as exc_info:
            client.get_file_info(FILE_ID)

        assert not isinstance(exc_info.value, AuthError)
        assert exc_info.value.status == 404
        assert exc_info.value.error.is_file_not_found()

    def test_get_file_info_malformed_response(self, client, transport):
        transport.add(GET_FILE_INFO, json_response(200, {"fileId": FILE_ID}))

        with pytest.raises(B2ApiException):
            client.get_file_info(FILE_ID)

    def test_delete_file_version(self, client, transport):
        transport.add(DELETE_FILE_VERSION, json_response(200, {"fileId": FILE_ID, "fileName": "f.txt"}))

        result = client.delete_file_version("f.txt", FILE_ID)

        assert result == {"fileId": FILE_ID, "fileName": "f.txt"}
        assert json.loads(transport.calls(DELETE_FILE_VERSION)[0].body) == {"fileName": "f.txt", "fileId": FILE_ID}

    def test_delete_file_version_bad_request(self, client, transport):
        transport.add(DELETE_FILE_VERSION, error_response(400, "bad_request", "fileName does not match"))

        with pytest.raises(B2ApiException) as exc_info:
            client.delete_file_version("other.txt", FILE_ID)

        assert exc_info.value.code == "bad_request"

    def test_download_file_by_name(self, client, transport):
        transport.add("/file/", json_response(200, {"not": "json-specific"}))

        body = client.download_file_by_name("my-bucket", "dir/f.txt")

        assert json.loads(body) == {"not": "json-specific"}
        request = transport.calls("/file/")[0]
        assert request.method == "GET"
        assert request.url == f"{DOWNLOAD_URL}/file/my-bucket/dir/f.txt"

    def test_close_leaves_caller_transport_open(self, client, mocker):
        close = mocker.Mock()
        client.transport.close = close

        with client:
            pass

        close.assert_not_called()

    def test_close_owned_transport(self, mocker):
        """Test that a transport built by the client is closed with it."""
        transport_class = mocker.patch("b2client.client.client.RequestsTransport")

        with Client(application_key_id="a", application_key="k", timeout=9) as client:
            assert client.transport is transport_class.return_value

        transport_class.assert_called_once_with(timeout=9)
        transport_class.return_value.close.assert_called_once_with()
