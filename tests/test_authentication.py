from urllib.parse import parse_qs, urlsplit

import pytest

from mercadolivre_sdk import AuthenticationError, InvalidTokenError, MercadoLivre, MercadoLivreConfig
from tests.fakes import FakeSession, make_client, token_payload


def test_authorization_url_contains_exactly_expected_params():
    sdk = make_client()
    url = sdk.auth.get_authorization_url(state="abc123")

    parts = urlsplit(url)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == "https://auth.mercadolivre.com.br/authorization"
    assert parse_qs(parts.query) == {
        "response_type": ["code"],
        "client_id": ["123456"],
        "redirect_uri": ["https://app.example.com/api/callback"],
        "state": ["abc123"],
    }


def test_authorization_url_without_state():
    url = make_client().auth.get_authorization_url()
    assert "state" not in parse_qs(urlsplit(url).query)


@pytest.mark.parametrize("config", [
    MercadoLivreConfig(redirect_uri="https://app.example.com/cb"),
    MercadoLivreConfig(client_id="123"),
])
def test_authorization_url_requires_client_id_and_redirect_uri(config):
    sdk = MercadoLivre(config, session=FakeSession())
    with pytest.raises(AuthenticationError):
        sdk.auth.get_authorization_url()


def test_exchange_code_stores_tokens():
    api = FakeSession().add("POST", "/oauth/token", token_payload())
    sdk = make_client(api)

    token = sdk.auth.exchange_code_for_token("TG-code")

    assert token.access_token == "APP_USR-new"
    assert sdk.auth.get_current_token() == "APP_USR-new"
    assert sdk.get_refresh_token() == "TG-new"
    assert sdk.auth.is_authenticated()

    call = api.last_call()
    assert call["data"] == {
        "grant_type": "authorization_code",
        "client_id": "123456",
        "client_secret": "secret",
        "code": "TG-code",
        "redirect_uri": "https://app.example.com/api/callback",
    }
    assert call["headers"]["Content-Type"] == "application/x-www-form-urlencoded"
    assert "Authorization" not in call["headers"]


def test_refresh_uses_stored_refresh_token():
    api = FakeSession().add("POST", "/oauth/token", token_payload(access_token="APP_USR-2", refresh_token="TG-2"))
    sdk = make_client(api, access_token="APP_USR-1", refresh_token="TG-1")

    sdk.auth.refresh_access_token()

    assert api.last_call()["data"]["grant_type"] == "refresh_token"
    assert api.last_call()["data"]["refresh_token"] == "TG-1"
    assert sdk.get_access_token() == "APP_USR-2"
    assert sdk.get_refresh_token() == "TG-2"


def test_refresh_without_refresh_token_raises():
    sdk = make_client()
    with pytest.raises(AuthenticationError):
        sdk.auth.refresh_access_token()


def test_refresh_failure_raises_typed_error():
    api = FakeSession().add("POST", "/oauth/token", {"message": "invalid_grant", "error": "invalid_grant"}, 401)
    sdk = make_client(api, refresh_token="TG-old")

    with pytest.raises(InvalidTokenError) as exc_info:
        sdk.auth.refresh_access_token()
    assert exc_info.value.status_code == 401


def test_client_credentials_and_revoke():
    api = FakeSession()
    api.add("POST", "/oauth/token", token_payload(refresh_token=None))
    api.add("POST", "/oauth/token/revoke", {"revoked": True})
    sdk = make_client(api)

    sdk.auth.get_client_credentials_token()
    assert api.last_call()["data"]["grant_type"] == "client_credentials"

    assert sdk.auth.revoke_token() == {"revoked": True}
    assert api.last_call()["data"]["token"] == "APP_USR-new"
