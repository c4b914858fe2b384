"""Custom exception hierarchy for the eBay Buy client."""
from __future__ import annotations

from typing import TYPE_CHECKING, Any

from pydantic import AliasChoices, Field

from .models import Model

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from requests import PreparedRequest, Response


class EbayError(RuntimeError):
    """Base error for eBay client failures."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        details: Any | None = None,
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.details = details


class ConfigurationError(EbayError):
    """Raised synchronously when the client or a request is misconfigured."""


class InvalidConfigurationError(ConfigurationError):
    """Raised when a base endpoint is unusable (e.g. missing trailing slash)."""


class InvalidPathError(ConfigurationError):
    """Raised when a resource path starts with a slash."""


class URLResolutionError(ConfigurationError):
    """Raised when a resource path cannot be resolved against the base URL."""


class EncodingError(EbayError):
    """Raised when a request body cannot be serialized to JSON."""


class DecodingError(EbayError):
    """Raised when a successful response body does not decode into its target."""


class TransportError(EbayError):
    """Raised when the HTTP exchange itself fails (DNS, TLS, timeout...)."""


class AuthenticationError(EbayError):
    """Raised when credentials cannot be obtained."""


class TokenError(AuthenticationError):
    """Raised when the OAuth2 token endpoint refuses or fails a grant."""


class ErrorParameter(Model):
    """Name/value pair giving context about the offending field."""

    name: str = ""
    value: str = ""


class ErrorRecord(Model):
    """One entry of the ``errors`` array returned by the eBay APIs.

    See https://developer.ebay.com/api-docs/static/handling-error-messages.html
    """

    error_id: int = 0
    domain: str = ""
    # The APIs are inconsistent about the casing of this key.
    subdomain: str = Field(default="", validation_alias=AliasChoices("subDomain", "subdomain"))
    category: str = ""
    message: str = ""
    long_message: str = ""
    input_ref_ids: list[str] = []
    output_ref_ids: list[str] = []
    parameters: list[ErrorParameter] = []


class ErrorData(EbayError):
    """Report one or more errors caused by an API request.

    Always produced for a non-2xx response, even when the body could not be
    decoded; ``errors`` is empty in that case.
    """

    def __init__(
        self,
        errors: list[ErrorRecord] | None = None,
        *,
        status_code: int | None = None,
        response: Response | None = None,
        request: PreparedRequest | None = None,
    ) -> None:
        self.errors: list[ErrorRecord] = list(errors or [])
        self.response = response
        if request is None and response is not None:
            request = getattr(response, "request", None)
        self.request = request
        if status_code is None and response is not None:
            status_code = response.status_code
        super().__init__(
            self._format(status_code), status_code=status_code, details=self.errors
        )

    @property
    def error_ids(self) -> list[int]:
        return [record.error_id for record in self.errors]

    def _format(self, status_code: int | None) -> str:
        method = getattr(self.request, "method", None) or "?"
        url = getattr(self.request, "url", None) or "?"
        status = status_code if status_code is not None else "?"
        return f"{method} {url}: {status} {self.errors!r}"


def is_error(err: BaseException | None, *codes: int) -> bool:
    """Return True if ``err`` is an :class:`ErrorData` carrying one of ``codes``."""

    if not isinstance(err, ErrorData):
        return False
    wanted = set(codes)
    return any(record.error_id in wanted for record in err.errors)
