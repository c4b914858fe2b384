"""Configuration helpers for the eBay Buy client."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from .exceptions import InvalidConfigurationError

BASE_URL = "https://api.ebay.com/"
SANDBOX_BASE_URL = "https://api.sandbox.ebay.com/"

HEADER_MARKETPLACE_ID = "X-EBAY-C-MARKETPLACE-ID"
HEADER_END_USER_CTX = "X-EBAY-C-ENDUSERCTX"


@dataclass(frozen=True, slots=True)
class ClientConfig:
    """Typed, immutable configuration for `EbayClient`."""

    base_url: str = BASE_URL
    verify_ssl: bool | str = True
    timeout: float = 30.0
    default_headers: Mapping[str, str] | None = None

    def __post_init__(self) -> None:
        if not self.base_url.endswith("/"):
            raise InvalidConfigurationError(
                f"Base URL {self.base_url} must have a trailing slash"
            )

    def resolved_headers(self) -> dict[str, str]:
        headers: dict[str, str] = {"Accept": "application/json"}
        if self.default_headers:
            headers.update(self.default_headers)
        return headers
