import base64
import threading
from datetime import datetime, timedelta, timezone
from urllib.parse import parse_qs, urlsplit

import pytest
import requests

from ebay_buy import EbayClient
from ebay_buy.auth import (
    OAUTH20_ENDPOINT,
    OAUTH20_SANDBOX_ENDPOINT,
    SCOPE_BUY_OFFER_AUCTION,
    SCOPE_ROOT,
    BearerTokenSource,
    ClientCredentialsConfig,
    ReuseTokenSource,
    StaticTokenSource,
    Token,
    TokenAuth,
    TokenSource,
    authorization_url,
    oauth2_session,
)
from ebay_buy.exceptions import AuthenticationError, TokenError

TOKEN_URL = OAUTH20_SANDBOX_ENDPOINT.token_url


class CountingSource(TokenSource):
    """Token source handing out numbered tokens."""

    def __init__(self, token_type="Application Access Token", expires_in=7200):
        self.calls = 0
        self.token_type = token_type
        self.expires_in = expires_in

    def token(self):
        self.calls += 1
        expiry = None
        if self.expires_in is not None:
            expiry = datetime.now(timezone.utc) + timedelta(seconds=self.expires_in)
        return Token(access_token=f"token-{self.calls}", token_type=self.token_type, expiry=expiry)


class NoneSource(TokenSource):
    def token(self):
        return None


class FailingSource(TokenSource):
    def token(self):
        raise TokenError("grant refused", status_code=401)


def test_bearer_token_source_forces_bearer_type():
    source = BearerTokenSource(CountingSource(token_type="User Access Token"))

    tok = source.token()

    assert tok.token_type == "Bearer"
    assert tok.authorization() == "Bearer token-1"


def test_bearer_token_source_passes_through_none():
    assert BearerTokenSource(NoneSource()).token() is None


def test_bearer_token_source_propagates_errors():
    with pytest.raises(TokenError):
        BearerTokenSource(FailingSource()).token()


def test_bearer_token_source_is_thread_safe():
    base = CountingSource()
    source = BearerTokenSource(base)
    results = []

    def worker():
        for _ in range(50):
            results.append(source.token())

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(results) == 400
    assert base.calls == 400
    assert {tok.token_type for tok in results} == {"Bearer"}
    assert len({tok.access_token for tok in results}) == 400


def test_reuse_token_source_reuses_valid_token():
    base = CountingSource()
    source = ReuseTokenSource(base)

    first = source.token()
    second = source.token()

    assert first is second
    assert base.calls == 1


def test_reuse_token_source_refreshes_expired_token():
    base = CountingSource(expires_in=5)  # within the expiry delta
    source = ReuseTokenSource(base)

    source.token()
    tok = source.token()

    assert base.calls == 2
    assert tok.access_token == "token-2"


def test_reuse_token_source_starts_from_given_token():
    base = CountingSource()
    initial = Token(access_token="seed")

    assert ReuseTokenSource(base, initial).token() is initial
    assert base.calls == 0


def test_token_validity():
    now = datetime(2024, 1, 1, tzinfo=timezone.utc)

    assert Token(access_token="a").valid(now)
    assert not Token(access_token="").valid(now)
    assert Token(access_token="a", expiry=now + timedelta(minutes=5)).valid(now)
    assert not Token(access_token="a", expiry=now + timedelta(seconds=5)).valid(now)


def test_token_auth_sets_authorization_header(requests_mock):
    matcher = requests_mock.get("https://ebay.test/things", json={})
    session = oauth2_session(BearerTokenSource(StaticTokenSource(Token("abc", "Application Access Token"))))

    session.get("https://ebay.test/things")

    assert matcher.last_request.headers["Authorization"] == "Bearer abc"


def test_token_auth_skips_header_without_token(requests_mock):
    matcher = requests_mock.get("https://ebay.test/things", json={})
    session = requests.Session()
    session.auth = TokenAuth(NoneSource())

    session.get("https://ebay.test/things")

    assert "Authorization" not in matcher.last_request.headers


def test_client_with_oauth2_session(requests_mock):
    matcher = requests_mock.get("https://ebay.test/things", json={})
    client = EbayClient(oauth2_session(StaticTokenSource("static")), base_url="https://ebay.test/")

    client.request("GET", "things")

    assert matcher.last_request.headers["Authorization"] == "Bearer static"


def test_token_errors_propagate_through_client():
    client = EbayClient(oauth2_session(FailingSource()), base_url="https://ebay.test/")

    with pytest.raises(AuthenticationError):
        client.request("GET", "things")


def credentials(**kwargs):
    return ClientCredentialsConfig(
        client_id="my-app",
        client_secret="s3cret",
        token_url=TOKEN_URL,
        scopes=[SCOPE_ROOT, SCOPE_BUY_OFFER_AUCTION],
        **kwargs,
    )


def test_client_credentials_token(requests_mock):
    matcher = requests_mock.post(
        TOKEN_URL,
        json={"access_token": "v^1.1#abc", "expires_in": 7200, "token_type": "Application Access Token"},
    )

    tok = credentials().token()

    assert tok.access_token == "v^1.1#abc"
    assert tok.token_type == "Bearer"
    assert tok.expiry is not None and tok.valid()

    sent = matcher.last_request
    expected = base64.b64encode(b"my-app:s3cret").decode()
    assert sent.headers["Authorization"] == f"Basic {expected}"
    form = parse_qs(sent.text)
    assert form["grant_type"] == ["client_credentials"]
    assert form["scope"] == [f"{SCOPE_ROOT} {SCOPE_BUY_OFFER_AUCTION}"]


def test_client_credentials_omits_empty_scope(requests_mock):
    matcher = requests_mock.post(TOKEN_URL, json={"access_token": "abc", "expires_in": 7200})

    ClientCredentialsConfig("my-app", "s3cret", TOKEN_URL).token()

    assert "scope" not in parse_qs(matcher.last_request.text)


def test_client_credentials_rejected(requests_mock):
    requests_mock.post(
        TOKEN_URL,
        status_code=401,
        json={"error": "invalid_client", "error_description": "client authentication failed"},
    )

    with pytest.raises(TokenError) as excinfo:
        credentials().token()

    assert excinfo.value.status_code == 401
    assert "invalid_client" in excinfo.value.details


def test_client_credentials_malformed_response(requests_mock):
    requests_mock.post(TOKEN_URL, json={"unexpected": True})

    with pytest.raises(TokenError):
        credentials().token()


def test_client_credentials_transport_failure(requests_mock):
    requests_mock.post(TOKEN_URL, exc=requests.exceptions.ConnectionError("refused"))

    with pytest.raises(TokenError) as excinfo:
        credentials().token()

    assert "refused" in str(excinfo.value)


def test_client_credentials_session_for_api(requests_mock):
    token_matcher = requests_mock.post(
        TOKEN_URL,
        json={"access_token": "app-token", "expires_in": 7200, "token_type": "Application Access Token"},
    )
    api_matcher = requests_mock.get("https://api.sandbox.ebay.com/buy/browse/v1/item_summary/search", json={})
    client = EbayClient.sandbox(credentials().session_for_api())

    client.request("GET", "buy/browse/v1/item_summary/search")
    client.request("GET", "buy/browse/v1/item_summary/search")

    assert token_matcher.call_count == 1
    assert api_matcher.call_count == 2
    assert api_matcher.last_request.headers["Authorization"] == "Bearer app-token"


def test_authorization_url():
    url = authorization_url(
        OAUTH20_ENDPOINT, "my-app", "My_App-MyApp-PRD-ru", [SCOPE_ROOT, SCOPE_BUY_OFFER_AUCTION], "xyz"
    )

    parts = urlsplit(url)
    assert f"{parts.scheme}://{parts.netloc}{parts.path}" == OAUTH20_ENDPOINT.auth_url
    query = parse_qs(parts.query)
    assert query["client_id"] == ["my-app"]
    assert query["redirect_uri"] == ["My_App-MyApp-PRD-ru"]
    assert query["response_type"] == ["code"]
    assert query["scope"] == [f"{SCOPE_ROOT} {SCOPE_BUY_OFFER_AUCTION}"]
    assert query["state"] == ["xyz"]


def test_endpoints():
    assert OAUTH20_ENDPOINT.token_url == "https://api.ebay.com/identity/v1/oauth2/token"
    assert OAUTH20_SANDBOX_ENDPOINT.auth_url == "https://auth.sandbox.ebay.com/oauth2/authorize"
