"""High-level eBay Buy client entrypoints."""
from .client import EbayClient
from .config import BASE_URL, SANDBOX_BASE_URL, ClientConfig
from .exceptions import EbayError, ErrorData, is_error

__all__ = [
    "BASE_URL",
    "SANDBOX_BASE_URL",
    "ClientConfig",
    "EbayClient",
    "EbayError",
    "ErrorData",
    "is_error",
]
