"""OAuth2 token sources and the requests hook that applies them."""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import requests
from requests.auth import AuthBase

logger = logging.getLogger(__name__)

BEARER = "Bearer"

# Tokens are considered expired slightly before their real expiry.
EXPIRY_DELTA = timedelta(seconds=10)


@dataclass(slots=True)
class Token:
    """An OAuth2 access token."""

    access_token: str
    token_type: str = BEARER
    expiry: datetime | None = None
    refresh_token: str | None = None

    def valid(self, now: datetime | None = None) -> bool:
        if not self.access_token:
            return False
        if self.expiry is None:
            return True
        now = now or datetime.now(timezone.utc)
        return now < self.expiry - EXPIRY_DELTA

    def authorization(self) -> str:
        return f"{self.token_type or BEARER} {self.access_token}"


class TokenSource(ABC):
    """Anything able to produce a currently valid token, refreshing if needed."""

    @abstractmethod
    def token(self) -> Token | None:
        """Return a token or raise."""


class StaticTokenSource(TokenSource):
    """Always return the same, already issued token."""

    def __init__(self, token: Token | str) -> None:
        self._token = Token(access_token=token) if isinstance(token, str) else token

    def token(self) -> Token:
        return self._token


class BearerTokenSource(TokenSource):
    """Force the type of the tokens returned by ``base`` to ``Bearer``.

    The eBay token endpoint reports "Application Access Token" or
    "User Access Token" as ``token_type``, but the APIs only accept
    ``Bearer`` in the Authorization header.
    """

    def __init__(self, base: TokenSource) -> None:
        self._base = base
        self._lock = threading.Lock()

    def token(self) -> Token | None:
        with self._lock:
            tok = self._base.token()
            if tok is not None:
                tok.token_type = BEARER
            return tok


class ReuseTokenSource(TokenSource):
    """Return the held token until it expires, then ask ``base`` for a new one."""

    def __init__(self, base: TokenSource, token: Token | None = None) -> None:
        self._base = base
        self._token = token
        self._lock = threading.Lock()

    def token(self) -> Token | None:
        with self._lock:
            if self._token is not None and self._token.valid():
                return self._token
            logger.debug("Fetching a new OAuth2 token from %s", type(self._base).__name__)
            self._token = self._base.token()
            return self._token


class TokenAuth(AuthBase):
    """Attach a token from ``source`` to every outgoing request."""

    def __init__(self, source: TokenSource) -> None:
        self.source = source

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        tok = self.source.token()
        if tok is not None:
            r.headers["Authorization"] = tok.authorization()
        return r


def oauth2_session(source: TokenSource, session: requests.Session | None = None) -> requests.Session:
    """Return a session whose requests are authorized with ``source``."""

    session = session or requests.Session()
    session.auth = TokenAuth(source)
    return session
