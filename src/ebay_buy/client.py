"""High-level eBay Buy REST client."""

from __future__ import annotations

import json
import logging
import re
from collections.abc import Callable
from typing import Any
from urllib.parse import urljoin, urlsplit

import requests
import urllib3
from pydantic import BaseModel
from requests.structures import CaseInsensitiveDict
from urllib3.exceptions import InsecureRequestWarning

from .config import BASE_URL, SANDBOX_BASE_URL, ClientConfig
from .exceptions import (
    EncodingError,
    InvalidPathError,
    TransportError,
    URLResolutionError,
)
from .http import decode_json, error_from_response, is_success
from .options import Opt
from .resources import BrowseResource, OfferResource

logger = logging.getLogger(__name__)

# ASCII control characters and "%" not starting a percent-escape.
_MALFORMED_PATH = re.compile(r"[\x00-\x1f\x7f]|%(?![0-9A-Fa-f]{2})")


class BuyAPI:
    """Regroup the eBay Buy APIs.

    https://developer.ebay.com/api-docs/buy/static/buy-landing.html
    """

    def __init__(self, client: EbayClient) -> None:
        self.browse = BrowseResource(client)
        self.offer = OfferResource(client)


class EbayClient:
    """Manage communication with the eBay API.

    ``session`` is the HTTP client used to make the actual API calls. It is
    expected to carry the Authorization, typically through
    :func:`ebay_buy.auth.oauth2_session`. When omitted, a plain
    ``requests.Session`` is created and owned by the client.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        *,
        base_url: str = BASE_URL,
        verify_ssl: bool | str = True,
        timeout: float = 30.0,
        default_headers: dict[str, str] | None = None,
    ) -> None:
        self.config = ClientConfig(
            base_url=base_url,
            verify_ssl=verify_ssl,
            timeout=timeout,
            default_headers=default_headers,
        )
        self._suppress_insecure_warning_if_needed()
        self._owns_session = session is None
        self._session = session or requests.Session()
        self.buy = BuyAPI(self)

    @classmethod
    def sandbox(cls, session: requests.Session | None = None, **kwargs: Any) -> EbayClient:
        """Return a client targeting the eBay sandbox."""
        return cls(session, base_url=SANDBOX_BASE_URL, **kwargs)

    @property
    def base_url(self) -> str:
        return self.config.base_url

    @property
    def session(self) -> requests.Session:
        return self._session

    # Context manager helpers -------------------------------------------------
    def __enter__(self) -> EbayClient:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:  # pragma: no cover - passthrough
        self.close()

    def close(self) -> None:
        if self._owns_session:
            self._session.close()

    # Public API --------------------------------------------------------------
    def new_request(
        self,
        method: str,
        path: str,
        *opts: Opt,
        body: Any | None = None,
    ) -> requests.Request:
        """Create an API request.

        ``path`` is relative to the base URL and must not start with a slash.
        ``body``, when given, is JSON encoded right away.
        """
        url = self._resolve_url(path)
        headers: CaseInsensitiveDict[str] = CaseInsensitiveDict(self.config.resolved_headers())
        data: bytes | None = None
        if body is not None:
            data = self._encode_body(body, method=method, url=url)
            headers["Content-Type"] = "application/json"
        req = requests.Request(method=method.upper(), url=url, headers=headers, data=data)
        for opt in opts:
            opt(req)
        return req

    def do(
        self,
        request: requests.Request,
        into: type | Callable[[Any], Any] | None = None,
        *,
        timeout: float | tuple[float, float] | None = None,
    ) -> Any:
        """Send an API request and decode the JSON response into ``into``.

        Returns None without reading the body when ``into`` is None. Raises
        `ErrorData` for non-2xx responses.
        """
        prepared = self._session.prepare_request(request)
        self._log_request(prepared)
        settings = self._session.merge_environment_settings(
            prepared.url, {}, None, self.config.verify_ssl, None
        )
        try:
            response = self._session.send(
                prepared,
                timeout=timeout if timeout is not None else self.config.timeout,
                **settings,
            )
        except requests.RequestException as exc:
            reason = str(exc).strip() or exc.__class__.__name__
            raise TransportError(
                f"{prepared.method} {prepared.url}: {reason}", details=reason
            ) from exc

        with response:
            if not is_success(response):
                error = error_from_response(response, prepared)
                logger.debug(
                    "eBay API error %s for %s %s (error ids: %s)",
                    response.status_code,
                    prepared.method,
                    prepared.url,
                    error.error_ids,
                )
                raise error
            if into is None:
                return None
            return decode_json(response, into)

    def request(
        self,
        method: str,
        path: str,
        *opts: Opt,
        body: Any | None = None,
        into: type | Callable[[Any], Any] | None = None,
        timeout: float | tuple[float, float] | None = None,
    ) -> Any:
        """Build and send a request in one call."""
        req = self.new_request(method, path, *opts, body=body)
        return self.do(req, into, timeout=timeout)

    # Internal helpers -------------------------------------------------------
    def _resolve_url(self, path: str) -> str:
        if path.startswith("/"):
            raise InvalidPathError(
                f"path {path!r} should be specified without a preceding slash"
            )
        bad = _MALFORMED_PATH.search(path)
        if bad:
            raise URLResolutionError(
                f"cannot resolve {path!r}: invalid character at offset {bad.start()}"
            )
        try:
            url = urljoin(self.config.base_url, path)
            urlsplit(url)
        except ValueError as exc:
            raise URLResolutionError(
                f"cannot resolve {path!r} against {self.config.base_url}: {exc}"
            ) from exc
        return url

    @staticmethod
    def _encode_body(body: Any, *, method: str, url: str) -> bytes:
        if isinstance(body, BaseModel):
            payload = body.model_dump(mode="json", by_alias=True, exclude_none=True)
        else:
            payload = body
        try:
            return json.dumps(payload, separators=(",", ":"), allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise EncodingError(
                f"{method.upper()} {url}: cannot encode request body: {exc}"
            ) from exc

    def _log_request(self, prepared: requests.PreparedRequest) -> None:
        logger.info("eBay request %s %s", prepared.method, prepared.url)

    def _suppress_insecure_warning_if_needed(self) -> None:
        if isinstance(self.config.verify_ssl, bool) and not self.config.verify_ssl:
            urllib3.disable_warnings(InsecureRequestWarning)
