"""Common helpers for resource wrappers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any
from urllib.parse import quote

from ..options import Opt

if TYPE_CHECKING:  # pragma: no cover - import-time guard
    from ..client import EbayClient


def query_value(value: str) -> str:
    """Percent-encode a value inserted into a path's query string."""
    return quote(value, safe="")


class ResourceBase:
    """Provide shared helpers for resource modules."""

    def __init__(self, client: EbayClient) -> None:
        self._client = client

    def _get(self, path: str, into: Any, *opts: Opt) -> Any:
        req = self._client.new_request("GET", path, *opts)
        return self._client.do(req, into)

    def _post(self, path: str, body: Any, into: Any, *opts: Opt) -> Any:
        req = self._client.new_request("POST", path, *opts, body=body)
        return self._client.do(req, into)
