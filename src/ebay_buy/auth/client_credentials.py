"""Client credentials grant, producing eBay "Application access" tokens.

https://developer.ebay.com/api-docs/static/oauth-client-credentials-grant.html
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import requests
from requests.auth import HTTPBasicAuth

from ..exceptions import TokenError
from .token import BearerTokenSource, ReuseTokenSource, Token, TokenSource, oauth2_session

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ClientCredentialsConfig:
    """Application keys and the token endpoint to exchange them at."""

    client_id: str
    client_secret: str
    token_url: str
    scopes: Sequence[str] = field(default_factory=list)
    session: requests.Session | None = None
    timeout: float = 30.0

    def token(self) -> Token:
        """Request a fresh token, bypassing any reuse."""
        return _ClientCredentialsSource(self).token()

    def token_source(self) -> TokenSource:
        """Return a source reusing the token until it expires."""
        return ReuseTokenSource(_ClientCredentialsSource(self))

    def session_for_api(self, session: requests.Session | None = None) -> requests.Session:
        """Return a session authorizing every request with an application token."""
        return oauth2_session(BearerTokenSource(self.token_source()), session)


class _ClientCredentialsSource(TokenSource):
    def __init__(self, conf: ClientCredentialsConfig) -> None:
        self._conf = conf

    def token(self) -> Token:
        conf = self._conf
        data = {"grant_type": "client_credentials"}
        if conf.scopes:
            data["scope"] = " ".join(conf.scopes)
        http = conf.session or requests.Session()
        try:
            response = http.post(
                conf.token_url,
                data=data,
                auth=HTTPBasicAuth(conf.client_id, conf.client_secret),
                headers={"Accept": "application/json"},
                timeout=conf.timeout,
            )
        except requests.RequestException as exc:
            raise TokenError(f"cannot fetch token from {conf.token_url}: {exc}") from exc
        finally:
            if conf.session is None:
                http.close()
        with response:
            if not 200 <= response.status_code < 300:
                raise TokenError(
                    f"{conf.token_url} ({response.status_code})",
                    status_code=response.status_code,
                    details=response.text[:200],
                )
            try:
                payload = response.json()
                access_token = payload["access_token"]
            except (ValueError, KeyError, TypeError) as exc:
                raise TokenError(
                    f"{conf.token_url}: malformed token response",
                    status_code=response.status_code,
                ) from exc
        expiry = None
        expires_in = payload.get("expires_in")
        if isinstance(expires_in, int) and expires_in > 0:
            expiry = datetime.now(timezone.utc) + timedelta(seconds=expires_in)
        logger.debug("Obtained application token from %s (expires_in=%s)", conf.token_url, expires_in)
        return Token(access_token=access_token, token_type="Bearer", expiry=expiry)
